from typing import Optional, Sequence

from podlink.config import PRODUCT_GROUP_NAME, RESOURCE_COPY_PHASE_NAME
from podlink.linker.document import LinkTarget, ProjectDocument


def ensure_linked(
    project: ProjectDocument,
    link_targets: Sequence[LinkTarget],
    library_product_name: str,
    resource_product_name: Optional[str] = None,
    product_group: str = PRODUCT_GROUP_NAME,
    copy_phase_name: str = RESOURCE_COPY_PHASE_NAME,
) -> None:
    """Attach a dependency's products to the given consumer targets.

    The library goes into each target's link phase, the optional resource
    bundle into the copy-files phase named ``copy_phase_name``. Product
    references are shared per name across the whole project. Every step is a
    find-or-create, so running this again with the same inputs is a no-op.
    """
    if not link_targets:
        return

    library = project.find_or_create_product_reference(
        product_group, library_product_name
    )
    for target in link_targets:
        link_phase = target.link_phase()
        if not link_phase.contains(library_product_name):
            link_phase.add_file_reference(library)

    if not resource_product_name:
        return

    bundle = project.find_or_create_product_reference(
        product_group, resource_product_name
    )
    for target in link_targets:
        copy_phase = target.find_or_create_copy_phase(copy_phase_name)
        if not copy_phase.contains(resource_product_name):
            copy_phase.add_file_reference(bundle)
