import os

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from podlink.details import ui
from podlink.details.package import DependencyPackage
from podlink.errors import ConfigurationError
from podlink.xcode.workspace import XcodeWorkspace


def workspace_relative_path(project_path: Path, workspace_path: Path) -> str:
    return Path(os.path.relpath(project_path, workspace_path.parent)).as_posix()


def register_projects(
    packages: Iterable[DependencyPackage],
    workspace_path: Optional[Path],
    open_workspace: Callable[[Path], XcodeWorkspace] = XcodeWorkspace.open,
) -> List[str]:
    """Add every dependency project to the workspace, returning the new entries."""
    if workspace_path is None:
        raise ConfigurationError(
            "Could not automatically select an Xcode workspace. "
            "Specify one in your link file."
        )
    workspace = open_workspace(workspace_path)
    added: List[str] = []
    for package in packages:
        for spec in package.linked_specifications:
            lib_project = workspace_relative_path(
                package.project_path(spec), workspace_path
            )
            ui.message(f"project: {lib_project}")
            if lib_project not in workspace:
                workspace.append(lib_project)
                added.append(lib_project)
    workspace.save()
    return added
