# Xcode project file model.
#
# A parsed .pbxproj keeps every object as a plain dictionary so that content
# podlink does not understand survives a load/save cycle untouched. The classes
# below are thin views over those dictionaries for the handful of object types
# the linker reads or mutates.

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Type

import os
import uuid

from podlink.linker.document import FileList, LinkTarget, ProductReference

RawObject = Dict[str, Any]


# Type definition for Xcode object identifiers
class XcodeID(str):
    pass


def generate_id(key: str) -> XcodeID:
    return XcodeID(uuid.uuid5(uuid.NAMESPACE_X500, key).hex.upper()[:24])


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    # Product references of other projects' targets
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"


# Destination subfolder specifications used in PBXCopyFilesBuildPhase
class DstSubfolderSpec(Enum):
    ABSOLUTE_PATH = "0"
    WRAPPER = "1"
    EXECUTABLES = "6"
    RESOURCES = "7"
    FRAMEWORKS = "10"
    SHARED_FRAMEWORKS = "11"
    SHARED_SUPPORT = "12"
    PLUGINS = "13"
    JAVA_RESOURCES = "15"
    PRODUCTS_DIRECTORY = "16"


# File types used in PBXFileReference
class FileType(Enum):
    FRAMEWORK = "wrapper.framework"
    BUNDLE = "wrapper.cfbundle"
    APP = "wrapper.application"
    DYLIB = "compiled.mach-o.dylib"
    ARCHIVE = "archive.ar"
    EXECUTABLE = "compiled.mach-o.executable"
    TEXT = "text"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        if ext.startswith("."):
            ext = ext[1:]

        ext_to_type = {
            "a": FileType.ARCHIVE,
            "framework": FileType.FRAMEWORK,
            "bundle": FileType.BUNDLE,
            "app": FileType.APP,
            "dylib": FileType.DYLIB,
        }

        return ext_to_type.get(ext.lower(), FileType.TEXT)

    @staticmethod
    def from_path(path: str) -> "FileType":
        _, ext = os.path.splitext(path)
        if not ext:
            return FileType.EXECUTABLE
        return FileType.from_extension(ext)


# Product types used in PBXNativeTarget
class ProductType(Enum):
    APPLICATION = "com.apple.product-type.application"
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_LIBRARY = "com.apple.product-type.library.static"
    DYNAMIC_LIBRARY = "com.apple.product-type.library.dynamic"
    BUNDLE = "com.apple.product-type.bundle"
    TOOL = "com.apple.product-type.tool"
    UNIT_TEST_BUNDLE = "com.apple.product-type.unit-test.bundle"
    APP_EXTENSION = "com.apple.product-type.app-extension"


class ObjectTable:
    """Owns the raw ``objects`` dictionary of a project and hands out views."""

    def __init__(self, raw: Dict[str, RawObject]):
        self.raw = raw

    def __contains__(self, object_id: str) -> bool:
        return object_id in self.raw

    def view(self, object_id: str) -> "XcodeObject":
        if object_id not in self.raw:
            raise KeyError(f"no object with id {object_id}")
        isa = self.raw[object_id].get("isa", "")
        view_type = VIEW_TYPES.get(isa, XcodeObject)
        return view_type(self, XcodeID(object_id))

    def views(self, object_ids: List[str]) -> List["XcodeObject"]:
        return [self.view(i) for i in object_ids if i in self.raw]

    def add(self, isa: str, key: str, props: RawObject) -> "XcodeObject":
        object_id = generate_id(f"{isa}:{key}")
        salt = 0
        while object_id in self.raw:
            salt += 1
            object_id = generate_id(f"{isa}:{key}:{salt}")
        self.raw[object_id] = {"isa": isa, **props}
        return self.view(object_id)


# Base class for all object views
class XcodeObject:
    ISA: ClassVar[str] = ""

    def __init__(self, table: ObjectTable, object_id: XcodeID):
        self.table = table
        self.id = object_id

    @property
    def props(self) -> RawObject:
        return self.table.raw[self.id]

    @property
    def isa(self) -> str:
        return self.props.get("isa", "")

    def get(self, key: str, default: Any = None) -> Any:
        return self.props.get(key, default)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, XcodeObject)
            and other.table is self.table
            and other.id == self.id
        )

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{self.isa} {self.id}>"


class PBXFileReference(XcodeObject, ProductReference):
    ISA = "PBXFileReference"

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def path(self) -> Optional[str]:
        return self.get("path")

    @property
    def display_name(self) -> Optional[str]:
        if self.name:
            return self.name
        if self.path:
            return os.path.basename(self.path)
        return None

    @property
    def source_tree(self) -> Optional[str]:
        return self.get("sourceTree")


class PBXBuildFile(XcodeObject):
    ISA = "PBXBuildFile"

    @property
    def file_ref(self) -> Optional[XcodeObject]:
        ref_id = self.get("fileRef")
        if ref_id is None or ref_id not in self.table:
            return None
        return self.table.view(ref_id)


class PBXGroup(XcodeObject):
    ISA = "PBXGroup"

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def display_name(self) -> Optional[str]:
        return self.get("name") or self.get("path")

    @property
    def children(self) -> List[XcodeObject]:
        return self.table.views(self.get("children", []))

    def find_child(self, name: str) -> Optional[XcodeObject]:
        for child in self.children:
            if getattr(child, "display_name", None) == name:
                return child
        return None

    def new_group(self, name: str) -> "PBXGroup":
        group = self.table.add(
            PBXGroup.ISA,
            f"{self.id}:{name}",
            {"children": [], "name": name, "sourceTree": SourceTree.GROUP.value},
        )
        self.props.setdefault("children", []).append(group.id)
        assert isinstance(group, PBXGroup)
        return group

    def new_product_reference(self, path: str) -> PBXFileReference:
        # Products of other projects: resolved in the build products dir,
        # typed explicitly since the file does not exist until it is built
        ref = self.table.add(
            PBXFileReference.ISA,
            f"{self.id}:{path}",
            {
                "explicitFileType": FileType.from_path(path).value,
                "includeInIndex": "0",
                "path": path,
                "sourceTree": SourceTree.BUILT_PRODUCTS_DIR.value,
            },
        )
        self.props.setdefault("children", []).append(ref.id)
        assert isinstance(ref, PBXFileReference)
        return ref


class PBXBuildPhase(XcodeObject, FileList):
    DEFAULT_NAME: ClassVar[str] = ""

    @property
    def name(self) -> str:
        return self.get("name") or self.DEFAULT_NAME

    @property
    def files(self) -> List[PBXBuildFile]:
        return [
            f
            for f in self.table.views(self.get("files", []))
            if isinstance(f, PBXBuildFile)
        ]

    def contains(self, path: str) -> bool:
        for build_file in self.files:
            file_ref = build_file.file_ref
            if file_ref is not None and file_ref.get("path") == path:
                return True
        return False

    def add_file_reference(self, reference: ProductReference) -> None:
        assert isinstance(reference, XcodeObject)
        build_file = self.table.add(
            PBXBuildFile.ISA, f"{self.id}:{reference.id}", {"fileRef": reference.id}
        )
        self.props.setdefault("files", []).append(build_file.id)


class PBXSourcesBuildPhase(PBXBuildPhase):
    ISA = "PBXSourcesBuildPhase"
    DEFAULT_NAME = "Sources"


class PBXHeadersBuildPhase(PBXBuildPhase):
    ISA = "PBXHeadersBuildPhase"
    DEFAULT_NAME = "Headers"


class PBXResourcesBuildPhase(PBXBuildPhase):
    ISA = "PBXResourcesBuildPhase"
    DEFAULT_NAME = "Resources"


class PBXFrameworksBuildPhase(PBXBuildPhase):
    ISA = "PBXFrameworksBuildPhase"
    DEFAULT_NAME = "Frameworks"


class PBXCopyFilesBuildPhase(PBXBuildPhase):
    ISA = "PBXCopyFilesBuildPhase"
    DEFAULT_NAME = "CopyFiles"


class PBXShellScriptBuildPhase(PBXBuildPhase):
    ISA = "PBXShellScriptBuildPhase"
    DEFAULT_NAME = "ShellScript"


# Phase boilerplate matching what Xcode writes for new phases
_PHASE_DEFAULTS: RawObject = {
    "buildActionMask": "2147483647",
    "files": [],
    "runOnlyForDeploymentPostprocessing": "0",
}


class PBXTarget(XcodeObject, LinkTarget):
    @property
    def name(self) -> str:
        return self.get("name", "")

    @property
    def product_type(self) -> Optional[str]:
        return self.get("productType")

    @property
    def product_reference(self) -> Optional[PBXFileReference]:
        ref_id = self.get("productReference")
        if ref_id is None or ref_id not in self.table:
            return None
        ref = self.table.view(ref_id)
        return ref if isinstance(ref, PBXFileReference) else None

    @property
    def product_name(self) -> Optional[str]:
        ref = self.product_reference
        return ref.path if ref is not None else None

    @property
    def build_phases(self) -> List[PBXBuildPhase]:
        return [
            p
            for p in self.table.views(self.get("buildPhases", []))
            if isinstance(p, PBXBuildPhase)
        ]

    @property
    def frameworks_build_phase(self) -> Optional[PBXFrameworksBuildPhase]:
        for phase in self.build_phases:
            if isinstance(phase, PBXFrameworksBuildPhase):
                return phase
        return None

    @property
    def copy_files_build_phases(self) -> List[PBXCopyFilesBuildPhase]:
        return [p for p in self.build_phases if isinstance(p, PBXCopyFilesBuildPhase)]

    def new_frameworks_build_phase(self) -> PBXFrameworksBuildPhase:
        phase = self.table.add(
            PBXFrameworksBuildPhase.ISA, self.id, dict(_PHASE_DEFAULTS, files=[])
        )
        self.props.setdefault("buildPhases", []).append(phase.id)
        assert isinstance(phase, PBXFrameworksBuildPhase)
        return phase

    def new_copy_files_build_phase(
        self,
        name: str,
        destination: DstSubfolderSpec = DstSubfolderSpec.RESOURCES,
    ) -> PBXCopyFilesBuildPhase:
        phase = self.table.add(
            PBXCopyFilesBuildPhase.ISA,
            f"{self.id}:{name}",
            dict(
                _PHASE_DEFAULTS,
                files=[],
                dstPath="",
                dstSubfolderSpec=destination.value,
                name=name,
            ),
        )
        self.props.setdefault("buildPhases", []).append(phase.id)
        assert isinstance(phase, PBXCopyFilesBuildPhase)
        return phase

    def link_phase(self) -> FileList:
        return self.frameworks_build_phase or self.new_frameworks_build_phase()

    def find_or_create_copy_phase(self, name: str) -> FileList:
        for phase in self.copy_files_build_phases:
            if phase.get("name") == name:
                return phase
        return self.new_copy_files_build_phase(name)


class PBXNativeTarget(PBXTarget):
    ISA = "PBXNativeTarget"


class PBXAggregateTarget(PBXTarget):
    ISA = "PBXAggregateTarget"


class PBXLegacyTarget(PBXTarget):
    ISA = "PBXLegacyTarget"


class PBXProject(XcodeObject):
    ISA = "PBXProject"

    @property
    def main_group(self) -> PBXGroup:
        group = self.table.view(self.props["mainGroup"])
        assert isinstance(group, PBXGroup)
        return group

    @property
    def targets(self) -> List[PBXTarget]:
        return [
            t
            for t in self.table.views(self.get("targets", []))
            if isinstance(t, PBXTarget)
        ]


VIEW_TYPES: Dict[str, Type[XcodeObject]] = {
    view_type.ISA: view_type
    for view_type in (
        PBXFileReference,
        PBXBuildFile,
        PBXGroup,
        PBXSourcesBuildPhase,
        PBXHeadersBuildPhase,
        PBXResourcesBuildPhase,
        PBXFrameworksBuildPhase,
        PBXCopyFilesBuildPhase,
        PBXShellScriptBuildPhase,
        PBXNativeTarget,
        PBXAggregateTarget,
        PBXLegacyTarget,
        PBXProject,
    )
}
