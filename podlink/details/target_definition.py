from pathlib import Path
from typing import Iterable, List, Optional, Union

from podlink.details.package import DependencyPackage

# Reserved name of the target definition that links into the project's default target
DEFAULT_TARGET_NAME = "default"


class UserProject:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"<UserProject {self.path}>"


class TargetDefinition:
    def __init__(
        self,
        name: str,
        user_project: Union[UserProject, str, Path],
        link_with: Optional[Union[str, Iterable[str]]] = None,
    ):
        self.name = name
        if not isinstance(user_project, UserProject):
            user_project = UserProject(user_project)
        self.user_project = user_project
        if isinstance(link_with, str):
            link_with = [link_with]
        self.link_with: Optional[List[str]] = list(link_with) if link_with else None
        self.packages: List[DependencyPackage] = []

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_TARGET_NAME

    def add_package(self, package: DependencyPackage) -> None:
        if package not in self.packages:
            self.packages.append(package)

    def __repr__(self) -> str:
        return f"<TargetDefinition {self.name}>"
