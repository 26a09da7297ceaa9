from argparse import ArgumentParser

from podlink.details import ui
from podlink.details.installation import Installation
from podlink.linker.planner import LinkagePlanner


def plan_main(installation: Installation, command_args: list[str]) -> int:
    parser = ArgumentParser(prog="podlink plan")
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="List specifications without opening dependency projects",
    )
    args = parser.parse_args(command_args)

    planner = LinkagePlanner(installation.packages_by_target, installation.config)
    if not planner.linked_specs:
        ui.message("Nothing to link")
        return 0
    for definition, specs in planner.linked_specs_by_target.items():
        ui.message(f"{definition.name} ({definition.user_project.path}):")
        for spec in specs:
            if args.no_resolve:
                ui.message(f"  {spec.name}")
                continue
            products = planner.products_for(definition, spec)
            line = f"  {spec.name}: {products.library_product_name}"
            if products.resource_product_name:
                line += f", {products.resource_product_name}"
            ui.message(line)
    return 0
