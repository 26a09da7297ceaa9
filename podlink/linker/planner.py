import os

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from podlink.config import Config
from podlink.details import ui
from podlink.details.package import DependencyPackage, Specification
from podlink.details.target_definition import TargetDefinition
from podlink.linker.build_graph import ensure_linked
from podlink.linker.document import ProjectDocument
from podlink.linker.product_resolver import (
    OpenProject,
    ResolvedProducts,
    resolve_products,
)
from podlink.linker.target_matcher import resolve_link_targets
from podlink.xcode.project import XcodeProject

PackagesByTarget = Mapping[TargetDefinition, Sequence[DependencyPackage]]
LinkagePlan = Dict[TargetDefinition, List[Specification]]


def unique_list(items: list) -> list:
    seen: set = set()

    def visit(x):
        if x not in seen:
            seen.add(x)
            return True
        return False

    return [x for x in items if visit(x)]


def compute_linkage_plan(packages_by_target: PackagesByTarget) -> LinkagePlan:
    """Map each target definition to the specifications it has to link.

    Only specifications that ship an xcodeproj count; a specification shared
    by several packages appears once, and definitions left with nothing to
    link are omitted.
    """
    plan: LinkagePlan = {}
    for definition, packages in packages_by_target.items():
        linked_specs = unique_list(
            [spec for pkg in packages for spec in pkg.linked_specifications]
        )
        if linked_specs:
            plan[definition] = linked_specs
    return plan


class LinkagePlanner:
    def __init__(
        self,
        packages_by_target: PackagesByTarget,
        config: Optional[Config] = None,
        open_project: OpenProject = XcodeProject.open,
    ):
        self.packages_by_target = packages_by_target
        self.config = config or Config()
        self.open_project = open_project
        self._linked_specs_by_target: Optional[LinkagePlan] = None
        # Every project is opened at most once per run, mutations accumulate here
        self._documents: Dict[str, ProjectDocument] = {}

    @property
    def linked_specs_by_target(self) -> LinkagePlan:
        if self._linked_specs_by_target is None:
            self._linked_specs_by_target = compute_linkage_plan(self.packages_by_target)
        return self._linked_specs_by_target

    @property
    def linked_specs(self) -> List[Specification]:
        return [spec for specs in self.linked_specs_by_target.values() for spec in specs]

    def document(self, path: Path) -> ProjectDocument:
        key = os.path.abspath(path)
        if key not in self._documents:
            self._documents[key] = self.open_project(Path(path))
        return self._documents[key]

    def package_for(
        self, definition: TargetDefinition, spec: Specification
    ) -> DependencyPackage:
        for package in self.packages_by_target[definition]:
            if spec in package.specifications:
                return package
        raise ValueError(f"{spec} is not part of any package of {definition}")

    def products_for(
        self, definition: TargetDefinition, spec: Specification
    ) -> ResolvedProducts:
        return resolve_products(spec, self.package_for(definition, spec), self.document)

    def definitions_by_project(self) -> Dict[str, List[TargetDefinition]]:
        grouped: Dict[str, List[TargetDefinition]] = {}
        for definition in self.linked_specs_by_target:
            key = os.path.abspath(definition.user_project.path)
            grouped.setdefault(key, []).append(definition)
        return grouped

    def apply_linkage(self) -> List[Path]:
        """Link every planned specification and save each consumer project once.

        Projects are saved as soon as all definitions sharing them are done, so
        a configuration error leaves earlier projects written and later ones
        untouched.
        """
        saved: List[Path] = []
        for project_path, definitions in self.definitions_by_project().items():
            project = self.document(Path(project_path))
            linked_products: Dict[str, Specification] = {}
            for definition in definitions:
                link_targets = resolve_link_targets(
                    definition, project, self.config.default_target_strategy
                )
                for spec in self.linked_specs_by_target[definition]:
                    products = self.products_for(definition, spec)
                    self._warn_on_merge(
                        project, linked_products, spec, products.library_product_name
                    )
                    ensure_linked(
                        project,
                        link_targets,
                        products.library_product_name,
                        products.resource_product_name,
                        product_group=self.config.product_group,
                        copy_phase_name=self.config.resource_copy_phase,
                    )
            project.save()
            saved.append(project.path)
        return saved

    def _warn_on_merge(
        self,
        project: ProjectDocument,
        linked_products: Dict[str, Specification],
        spec: Specification,
        product_name: str,
    ) -> None:
        # Same product name from a different library target: linked once
        other = linked_products.setdefault(product_name, spec)
        if other is spec:
            return
        assert other.xcodeproj is not None and spec.xcodeproj is not None
        if other.xcodeproj.library_target != spec.xcodeproj.library_target:
            ui.warn(
                f"{spec.name} (target {spec.xcodeproj.library_target}) and "
                f"{other.name} (target {other.xcodeproj.library_target}) both produce "
                f"{product_name}, linking a single {product_name} into {project.path}"
            )
