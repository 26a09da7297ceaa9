from pathlib import Path
from typing import Any, Dict, List, Union

from podlink.errors import ConfigurationError
from podlink.linker.document import ProjectDocument, ProductReference
from podlink.xcode.formatter import format_pbxproj
from podlink.xcode.model import (
    ObjectTable,
    PBXFileReference,
    PBXGroup,
    PBXProject,
    PBXTarget,
)
from podlink.xcode.parser import ProjectParseError, parse_pbxproj
from podlink.xcode.utils import validate_bundle_path, write_bytes_to_path

PBXPROJ_FILENAME = "project.pbxproj"


class XcodeProject(ProjectDocument):
    """An .xcodeproj bundle loaded into memory.

    Mutations go through the object views in podlink.xcode.model and are only
    written back by save().
    """

    def __init__(self, path: Path, data: Dict[str, Any]):
        self.path = path
        self.data = data
        self.objects = ObjectTable(data["objects"])

    @staticmethod
    def open(path: Union[str, Path]) -> "XcodeProject":
        project_path = validate_bundle_path(path, ".xcodeproj")
        pbxproj = project_path / PBXPROJ_FILENAME
        try:
            text = pbxproj.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not open project {project_path}: {e}") from e
        try:
            data = parse_pbxproj(text)
        except ProjectParseError as e:
            raise ConfigurationError(f"Could not parse {pbxproj}: {e}") from e
        return XcodeProject(project_path, data)

    @property
    def name(self) -> str:
        return self.path.stem

    @property
    def root_object(self) -> PBXProject:
        root = self.objects.view(self.data["rootObject"])
        assert isinstance(root, PBXProject)
        return root

    @property
    def main_group(self) -> PBXGroup:
        return self.root_object.main_group

    @property
    def targets(self) -> List[PBXTarget]:
        return self.root_object.targets

    def group(self, name: str) -> PBXGroup:
        """Find or create the top-level group with the given name."""
        child = self.main_group.find_child(name)
        if isinstance(child, PBXGroup):
            return child
        return self.main_group.new_group(name)

    def find_or_create_product_reference(
        self, group_name: str, product_name: str
    ) -> ProductReference:
        group = self.group(group_name)
        for child in group.children:
            if isinstance(child, PBXFileReference) and child.display_name == product_name:
                return child
        return group.new_product_reference(product_name)

    def to_string(self) -> str:
        return format_pbxproj(self.data, project_name=self.name)

    def save(self) -> None:
        write_bytes_to_path(self.to_string().encode("utf-8"), self.path / PBXPROJ_FILENAME)
