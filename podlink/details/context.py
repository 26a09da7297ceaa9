from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from podlink.config import Config
from podlink.details.package import DependencyPackage
from podlink.details.target_definition import TargetDefinition


class Context:
    def __init__(self, root: Path):
        self.root = root


class LinkContext(Context):
    FILENAME = "LINK.podlink"
    MODULENAME = "link"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.config = Config()
        self.packages: Dict[str, DependencyPackage] = {}
        self.target_definitions: Dict[str, TargetDefinition] = {}

    @property
    def path(self) -> Path:
        return self.root.joinpath(self.FILENAME)

    def configure(self, workspace: Optional[str] = None, **kwargs) -> Config:
        self.config = Config(
            workspace=self.root.joinpath(workspace) if workspace else None, **kwargs
        )
        return self.config

    def add_package(self, name: str, root: Optional[str] = None) -> DependencyPackage:
        if name in self.packages:
            raise ValueError(f"package with name='{name}' already exists")
        self.packages[name] = DependencyPackage(
            name=name,
            root=self.root.joinpath(root if root is not None else name),
            defined_in_file=str(self.path),
        )
        return self.packages[name]

    def add_target_definition(
        self,
        name: str,
        user_project: str,
        link_with: Optional[Union[str, Iterable[str]]] = None,
        packages: Iterable[DependencyPackage] = (),
    ) -> TargetDefinition:
        if name in self.target_definitions:
            raise ValueError(f"target definition with name='{name}' already exists")
        definition = TargetDefinition(
            name=name,
            user_project=self.root.joinpath(user_project),
            link_with=link_with,
        )
        for package in packages:
            definition.add_package(package)
        self.target_definitions[name] = definition
        return definition
