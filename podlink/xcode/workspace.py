from pathlib import Path
from typing import List, Union
from xml.dom.minidom import Document, Element, parse
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

from podlink.errors import ConfigurationError
from podlink.xcode.utils import (
    append_element,
    strip_whitespace_nodes,
    validate_bundle_path,
    write_bytes_to_path,
)

CONTENTS_FILENAME = "contents.xcworkspacedata"

# Location types Xcode writes in FileRef elements
LOCATION_PREFIXES = ("group:", "container:", "absolute:", "self:", "developer:")


def location_path(location: str) -> str:
    for prefix in LOCATION_PREFIXES:
        if location.startswith(prefix):
            return location[len(prefix) :]
    return location


def format_element(xelement: Element, indent_level: int = 0) -> str:
    # Xcode puts every attribute on its own line and never self-closes elements
    indent = "   " * indent_level
    result = f"{indent}<{xelement.tagName}"
    for name, value in xelement.attributes.items():
        value = escape(value, {'"': "&quot;"})
        result += f'\n{indent}   {name} = "{value}"'
    result += ">\n"
    for child in xelement.childNodes:
        if isinstance(child, Element):
            result += format_element(child, indent_level + 1)
    result += f"{indent}</{xelement.tagName}>\n"
    return result


def format_workspace(xdoc: Document) -> str:
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + format_element(xdoc.documentElement)


class XcodeWorkspace:
    """An .xcworkspace bundle: an ordered list of member project paths.

    Paths are relative to the directory that contains the workspace bundle.
    """

    def __init__(self, path: Path, xdoc: Document):
        self.path = path
        self.xdoc = xdoc

    @staticmethod
    def open(path: Union[str, Path]) -> "XcodeWorkspace":
        workspace_path = validate_bundle_path(path, ".xcworkspace")
        contents = workspace_path / CONTENTS_FILENAME
        if not contents.exists():
            xdoc = Document()
            append_element(xdoc, "Workspace").setAttribute("version", "1.0")
            return XcodeWorkspace(workspace_path, xdoc)
        try:
            xdoc = parse(str(contents))
        except (OSError, ExpatError) as e:
            raise ConfigurationError(f"Could not open workspace {workspace_path}: {e}") from e
        if xdoc.documentElement.tagName != "Workspace":
            raise ConfigurationError(f"{contents} is not an Xcode workspace document")
        strip_whitespace_nodes(xdoc)
        return XcodeWorkspace(workspace_path, xdoc)

    @property
    def root(self) -> Element:
        return self.xdoc.documentElement

    @property
    def file_references(self) -> List[str]:
        return [
            location_path(xref.getAttribute("location"))
            for xref in self.root.getElementsByTagName("FileRef")
        ]

    def __contains__(self, project_path: str) -> bool:
        return project_path in self.file_references

    def append(self, project_path: str) -> None:
        xref = append_element(self.root, "FileRef")
        xref.setAttribute("location", f"group:{project_path}")

    def save(self) -> bool:
        contents = format_workspace(self.xdoc).encode("utf-8")
        return write_bytes_to_path(contents, self.path / CONTENTS_FILENAME)
