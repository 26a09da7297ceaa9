from enum import Enum
from pathlib import Path
from typing import Optional, Union

RESOURCE_COPY_PHASE_NAME = "Copy Pod Resource bundles"
PRODUCT_GROUP_NAME = "Frameworks"


# How a target definition without an explicit name picks its consumer target
class DefaultTargetStrategy(Enum):
    # First target in project declaration order
    FIRST_TARGET = "first_target"
    # First application target, else the first target
    FIRST_APPLICATION = "first_application"


class Config:
    def __init__(
        self,
        workspace: Optional[Union[str, Path]] = None,
        default_target_strategy: Union[
            str, DefaultTargetStrategy
        ] = DefaultTargetStrategy.FIRST_TARGET,
        product_group: str = PRODUCT_GROUP_NAME,
        resource_copy_phase: str = RESOURCE_COPY_PHASE_NAME,
        **kwargs
    ):
        self.workspace = Path(workspace) if workspace is not None else None
        self.default_target_strategy = DefaultTargetStrategy(default_target_strategy)
        self.product_group = product_group
        self.resource_copy_phase = resource_copy_phase
        self.__dict__.update(kwargs)
