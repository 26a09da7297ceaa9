from pathlib import Path
from typing import Dict, List, Optional, Union

from podlink.errors import ConfigurationError


class ArtifactDescriptor:
    """Points at a dependency's own .xcodeproj and the targets it builds."""

    def __init__(
        self,
        project: Union[str, Path],
        library_target: str,
        resource_target: Optional[str] = None,
    ):
        if not project:
            raise ConfigurationError("xcodeproj declaration is missing 'project'")
        if not library_target:
            raise ConfigurationError(
                f"xcodeproj declaration for {project} is missing 'library_target'"
            )
        self.project = Path(project)
        self.library_target = library_target
        self.resource_target = resource_target

    @staticmethod
    def from_dict(values: Dict[str, str]) -> "ArtifactDescriptor":
        unknown = set(values) - {"project", "library_target", "resource_target"}
        if unknown:
            raise ConfigurationError(
                f"unknown xcodeproj keys: {', '.join(sorted(unknown))}"
            )
        return ArtifactDescriptor(
            project=values.get("project", ""),
            library_target=values.get("library_target", ""),
            resource_target=values.get("resource_target"),
        )


class Specification:
    def __init__(
        self,
        name: str,
        xcodeproj: Optional[ArtifactDescriptor] = None,
        defined_in_file: str = "",
    ):
        self.name = name
        self.xcodeproj = xcodeproj
        self.defined_in_file = defined_in_file

    def __repr__(self) -> str:
        return f"<Specification {self.name}>"


class DependencyPackage:
    def __init__(self, name: str, root: Path, defined_in_file: str = ""):
        self.name = name
        self.root = Path(root)
        self.defined_in_file = defined_in_file
        self.specifications: List[Specification] = []

    def add_specification(
        self,
        name: str,
        xcodeproj: Optional[Union[ArtifactDescriptor, Dict[str, str]]] = None,
        defined_in_file: Optional[str] = None,
    ) -> Specification:
        if any(spec.name == name for spec in self.specifications):
            raise ValueError(
                f"specification with name='{name}' already exists in package='{self.name}'"
            )
        if isinstance(xcodeproj, dict):
            xcodeproj = ArtifactDescriptor.from_dict(xcodeproj)
        spec = Specification(
            name=name,
            xcodeproj=xcodeproj,
            defined_in_file=defined_in_file or self.defined_in_file,
        )
        self.specifications.append(spec)
        return spec

    @property
    def linked_specifications(self) -> List[Specification]:
        return [spec for spec in self.specifications if spec.xcodeproj is not None]

    def project_path(self, spec: Specification) -> Path:
        assert spec.xcodeproj is not None
        return self.root.joinpath(spec.xcodeproj.project)

    def __repr__(self) -> str:
        return f"<DependencyPackage {self.name}>"
