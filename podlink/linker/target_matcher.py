from typing import List

from podlink.config import DefaultTargetStrategy
from podlink.details.target_definition import TargetDefinition
from podlink.errors import ConfigurationError
from podlink.linker.document import LinkTarget, ProjectDocument
from podlink.xcode.model import ProductType


def default_target(
    project: ProjectDocument, strategy: DefaultTargetStrategy
) -> LinkTarget:
    targets = project.targets
    if not targets:
        raise ConfigurationError(
            f"Unable to select a default target, {project.path} has no targets"
        )
    if strategy is DefaultTargetStrategy.FIRST_APPLICATION:
        for target in targets:
            if target.product_type == ProductType.APPLICATION.value:
                return target
    # In a simple project the first target is probably the app target
    return targets[0]


def resolve_link_targets(
    definition: TargetDefinition,
    project: ProjectDocument,
    strategy: DefaultTargetStrategy = DefaultTargetStrategy.FIRST_TARGET,
) -> List[LinkTarget]:
    if definition.link_with:
        # Explicitly linked targets, an empty match means nothing to link
        return [t for t in project.targets if t.name in definition.link_with]
    if not definition.is_default:
        for target in project.targets:
            if target.name == definition.name:
                return [target]
        raise ConfigurationError(
            f"Unable to find a target named `{definition.name}' in {project.path}"
        )
    return [default_target(project, strategy)]
