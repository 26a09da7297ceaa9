from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from podlink.details.package import DependencyPackage, Specification
from podlink.errors import ConfigurationError
from podlink.linker.document import ProjectDocument
from podlink.xcode.project import XcodeProject

OpenProject = Callable[[Path], ProjectDocument]


@dataclass(frozen=True)
class ResolvedProducts:
    library_product_name: str
    resource_product_name: Optional[str] = None


def find_product_name(
    project: ProjectDocument, target_name: str, spec: Specification
) -> str:
    assert spec.xcodeproj is not None
    target = next((t for t in project.targets if t.name == target_name), None)
    if target is None:
        raise ConfigurationError(
            f"Could not find target {target_name} in project {spec.xcodeproj.project}, "
            f"specified in {spec.defined_in_file}"
        )
    if not target.product_name:
        raise ConfigurationError(
            f"Target {target_name} in project {spec.xcodeproj.project} has no product, "
            f"specified in {spec.defined_in_file}"
        )
    # File name only: products are looked up by name in the consumer project
    return Path(target.product_name).name


def resolve_products(
    spec: Specification,
    package: DependencyPackage,
    open_project: OpenProject = XcodeProject.open,
) -> ResolvedProducts:
    descriptor = spec.xcodeproj
    if descriptor is None:
        raise ValueError(f"{spec} does not declare an xcodeproj")
    project_path = package.project_path(spec)
    try:
        project = open_project(project_path)
    except ConfigurationError as e:
        raise ConfigurationError(
            f"Could not open project {descriptor.project} at {project_path}, "
            f"specified in {spec.defined_in_file}"
        ) from e

    library_name = find_product_name(project, descriptor.library_target, spec)
    resource_name = None
    if descriptor.resource_target is not None:
        resource_name = find_product_name(project, descriptor.resource_target, spec)
    return ResolvedProducts(library_name, resource_name)
