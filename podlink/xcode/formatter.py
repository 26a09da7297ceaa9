"""
Xcode project file formatter.

This module converts a parsed project dictionary back into the textual
.pbxproj layout Xcode itself writes: objects grouped into per-isa sections,
object identifiers annotated with comments, and the two high-volume object
types (PBXBuildFile, PBXFileReference) written on a single line.
"""

import re
from typing import Any, Dict, List, Optional

ObjectsDict = Dict[str, Dict[str, Any]]
Comments = Dict[str, str]

# Object types Xcode writes on a single line
INLINE_ISAS = frozenset({"PBXBuildFile", "PBXFileReference"})

# Keys whose object references Xcode writes without a comment, nested values included
BARE_REFERENCE_KEYS = frozenset({"remoteGlobalIDString", "TestTargetID", "TargetAttributes"})

# Strings Xcode leaves unquoted
_UNQUOTED = re.compile(r"^[A-Za-z0-9_$/:.]+$")

_PHASE_NAMES = {
    "PBXSourcesBuildPhase": "Sources",
    "PBXHeadersBuildPhase": "Headers",
    "PBXResourcesBuildPhase": "Resources",
    "PBXFrameworksBuildPhase": "Frameworks",
    "PBXCopyFilesBuildPhase": "CopyFiles",
    "PBXShellScriptBuildPhase": "ShellScript",
    "PBXRezBuildPhase": "Rez",
}


def format_pbxproj(data: Dict[str, Any], project_name: str = "") -> str:
    """
    Convert a project dictionary to its string representation.

    Args:
        data: The root dictionary as returned by parse_pbxproj.
        project_name: Name used in the project's configuration list comment.

    Returns:
        A string containing the formatted project file content.
    """
    objects: ObjectsDict = data.get("objects", {})
    comments = collect_comments(objects, data.get("rootObject"), project_name)

    result = "// !$*UTF8*$!\n{\n"
    for key in sorted(data.keys()):
        if key == "objects":
            result += "\tobjects = {\n" + format_objects(objects, comments) + "\t};\n"
        else:
            result += f"\t{format_key(key)} = {format_value(data[key], 1, comments)};\n"
    result += "}\n"
    return result


def collect_comments(
    objects: ObjectsDict, root_id: Optional[str], project_name: str
) -> Comments:
    """
    Compute the ``/* comment */`` annotation of every object that has one.

    Args:
        objects: The project's objects keyed by id.
        root_id: Id of the PBXProject object.
        project_name: Name shown for the project's configuration list.

    Returns:
        A dictionary of comments keyed by object id.
    """
    comments: Comments = {}
    phase_of_build_file: Dict[str, str] = {}
    owner_of_config_list: Dict[str, str] = {}

    for object_id, obj in objects.items():
        isa = obj.get("isa", "")
        if isa in _PHASE_NAMES:
            for file_id in obj.get("files", []):
                phase_of_build_file[file_id] = obj.get("name") or _PHASE_NAMES[isa]
        config_list = obj.get("buildConfigurationList")
        if isinstance(config_list, str):
            name = project_name if object_id == root_id else obj.get("name", "")
            owner_of_config_list[config_list] = f'{isa} "{name}"'

    def display_name(object_id: Any) -> Optional[str]:
        obj = objects.get(object_id) if isinstance(object_id, str) else None
        if obj is None:
            return None
        if obj.get("isa") == "XCSwiftPackageProductDependency":
            return obj.get("productName")
        return obj.get("name") or obj.get("path")

    for object_id, obj in objects.items():
        isa = obj.get("isa", "")
        comment: Optional[str]
        if object_id == root_id:
            comment = "Project object"
        elif isa == "PBXBuildFile":
            file_name = display_name(obj.get("fileRef")) or display_name(
                obj.get("productRef")
            )
            phase = phase_of_build_file.get(object_id)
            comment = f"{file_name} in {phase}" if file_name and phase else file_name
        elif isa in _PHASE_NAMES:
            comment = obj.get("name") or _PHASE_NAMES[isa]
        elif isa == "XCConfigurationList":
            owner = owner_of_config_list.get(object_id)
            comment = f"Build configuration list for {owner}" if owner else None
        elif isa == "PBXTargetDependency":
            comment = "PBXTargetDependency"
        elif isa == "PBXContainerItemProxy":
            comment = "PBXContainerItemProxy"
        elif isa == "XCRemoteSwiftPackageReference":
            comment = f'{isa} "{package_name(obj.get("repositoryURL", ""))}"'
        elif isa == "XCLocalSwiftPackageReference":
            comment = f'{isa} "{obj.get("relativePath", "")}"'
        else:
            comment = display_name(object_id)
        if comment:
            comments[object_id] = comment
    return comments


def format_objects(objects: ObjectsDict, comments: Comments) -> str:
    """
    Format the objects dictionary as isa-sorted sections.

    Args:
        objects: The project's objects keyed by id.
        comments: Object comments as returned by collect_comments.

    Returns:
        The body of the objects dictionary, without its braces.
    """
    sections: Dict[str, List[str]] = {}
    for object_id, obj in objects.items():
        sections.setdefault(obj.get("isa", ""), []).append(object_id)

    result = ""
    for isa in sorted(sections.keys()):
        result += f"\n/* Begin {isa} section */\n"
        for object_id in sorted(sections[isa]):
            obj = objects[object_id]
            key = format_reference(object_id, comments)
            if isa in INLINE_ISAS:
                result += f"\t\t{key} = {format_inline(obj, comments)};\n"
            else:
                result += f"\t\t{key} = {format_dict(obj, 2, comments)};\n"
        result += f"/* End {isa} section */\n"
    return result


def format_value(value: Any, indent_level: int, comments: Comments) -> str:
    """
    Format a value based on its type.

    Args:
        value: The value to format.
        indent_level: The current indentation level.
        comments: Object comments; strings naming an object get annotated.

    Returns:
        A string representing the formatted value.
    """
    if isinstance(value, dict):
        return format_dict(value, indent_level, comments)
    elif isinstance(value, list):
        return format_list(value, indent_level, comments)
    elif isinstance(value, str):
        return format_reference(value, comments)
    raise TypeError(f"Unsupported type: {type(value).__name__} for value: {value}")


def format_dict(value_dict: Dict[str, Any], indent_level: int, comments: Comments) -> str:
    """
    Format a dictionary across multiple lines.

    Args:
        value_dict: The dictionary to format.
        indent_level: The current indentation level.
        comments: Object comments.

    Returns:
        A string representing the formatted dictionary.
    """
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "{\n"
    for key in ordered_keys(value_dict):
        value_comments = {} if key in BARE_REFERENCE_KEYS else comments
        formatted_value = format_value(value_dict[key], indent_level + 1, value_comments)
        result += f"{inner_indent}{format_key(key)} = {formatted_value};\n"
    result += f"{indent}}}"
    return result


def format_list(value_list: List[Any], indent_level: int, comments: Comments) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "(\n"
    for item in value_list:
        result += f"{inner_indent}{format_value(item, indent_level + 1, comments)},\n"
    result += f"{indent})"
    return result


def format_inline(value: Any, comments: Comments) -> str:
    if isinstance(value, dict):
        body = ""
        for k in ordered_keys(value):
            value_comments = {} if k in BARE_REFERENCE_KEYS else comments
            body += f"{format_key(k)} = {format_inline(value[k], value_comments)}; "
        return "{" + body + "}"
    elif isinstance(value, list):
        return "(" + "".join(f"{format_inline(v, comments)}, " for v in value) + ")"
    return format_value(value, 0, comments)


def ordered_keys(value_dict: Dict[str, Any]) -> List[str]:
    # isa leads, everything else alphabetical
    keys = sorted(k for k in value_dict.keys() if k != "isa")
    return ["isa"] + keys if "isa" in value_dict else keys


def format_reference(value: str, comments: Comments) -> str:
    comment = comments.get(value)
    if comment:
        return f"{format_string(value)} /* {comment} */"
    return format_string(value)


def format_key(key: str) -> str:
    return format_string(key)


def format_string(value: str) -> str:
    if _UNQUOTED.match(value):
        return value
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def package_name(repository_url: str) -> str:
    # Xcode names remote packages after the last URL component
    name = repository_url.rstrip("/").rsplit("/", 1)[-1]
    return name[: -len(".git")] if name.endswith(".git") else name
