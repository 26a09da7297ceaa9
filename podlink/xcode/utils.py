from pathlib import Path
from typing import Union
from xml.dom.minidom import Node, Document, Element

from podlink.errors import ConfigurationError


def validate_bundle_path(path: Union[str, Path], suffix: str) -> Path:
    """
    Validate that a project or workspace path carries the expected suffix.

    Args:
        path: Path of the .xcodeproj or .xcworkspace directory.
        suffix: The required suffix, including the dot.

    Returns:
        The validated path.

    Raises:
        ConfigurationError: If the path does not end with the suffix.
    """
    bundle = Path(path)
    if bundle.suffix != suffix:
        raise ConfigurationError(
            f"Expected a path ending with '{suffix}', got '{bundle}' instead."
        )
    return bundle


def owner_doc(xnode: Node) -> Document:
    if isinstance(xnode, Document):
        return xnode
    else:
        assert xnode.ownerDocument
        return xnode.ownerDocument


def append_element(xparent: Node, name: str) -> Element:
    xelement = owner_doc(xparent).createElement(name)
    xparent.appendChild(xelement)
    return xelement


def strip_whitespace_nodes(xnode: Node) -> None:
    # Pretty printing re-indents existing whitespace, drop it after parsing
    for child in list(xnode.childNodes):
        if child.nodeType == Node.TEXT_NODE and not child.data.strip():
            xnode.removeChild(child)
        else:
            strip_whitespace_nodes(child)


def write_bytes_to_path(contents: bytes, path: Path) -> bool:
    # Check if previous version matches and early exit to avoid bumping timestamps unnecessarily...
    try:
        with path.open("rb") as f:
            if f.read() == contents:
                return False
    except FileNotFoundError:
        pass
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        f.write(contents)
    return True
