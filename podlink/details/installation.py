from importlib.machinery import SourceFileLoader
from importlib.util import spec_from_loader, module_from_spec
from pathlib import Path
from typing import Dict, List

from podlink.details.context import LinkContext
from podlink.details.package import DependencyPackage
from podlink.details.target_definition import TargetDefinition
from podlink.errors import ConfigurationError


def load_user_module(ctx: LinkContext):
    module_name = ".".join(["podlink", "installation", *ctx.root.parts[1:], ctx.MODULENAME])
    module_path = ctx.path
    spec = spec_from_loader(
        module_name, SourceFileLoader(module_name, str(module_path))
    )
    if not spec or not spec.loader:
        raise RuntimeError(f"failed to load module spec {module_path}")
    link_module = module_from_spec(spec)
    setattr(link_module, "CTX", ctx)
    spec.loader.exec_module(link_module)


class Installation:
    """Dependencies and target definitions declared by a LINK.podlink file."""

    def __init__(self, root: Path = Path(".")):
        self.root = Path(root).resolve()
        context = LinkContext(self.root)
        if not context.path.is_file():
            raise ConfigurationError(f"No {LinkContext.FILENAME} found in {self.root}")
        load_user_module(context)
        self.config = context.config
        self.packages: Dict[str, DependencyPackage] = context.packages
        self.target_definitions: Dict[str, TargetDefinition] = context.target_definitions

    @property
    def packages_by_target(self) -> Dict[TargetDefinition, List[DependencyPackage]]:
        return {
            definition: list(definition.packages)
            for definition in self.target_definitions.values()
        }
