from argparse import ArgumentParser

from podlink.details import ui
from podlink.details.installation import Installation
from podlink.linker.planner import LinkagePlanner
from podlink.linker.workspace_registrar import register_projects


def link_main(installation: Installation, command_args: list[str]) -> int:
    parser = ArgumentParser(prog="podlink link")
    parser.add_argument(
        "--skip-workspace",
        action="store_true",
        help="Do not add dependency projects to the workspace",
    )
    args = parser.parse_args(command_args)

    planner = LinkagePlanner(installation.packages_by_target, installation.config)
    if not planner.linked_specs_by_target:
        ui.message("Nothing to link")
    for project_path in planner.apply_linkage():
        ui.message(f"Linked dependencies into {project_path}")

    if not args.skip_workspace:
        added = register_projects(
            installation.packages.values(), installation.config.workspace
        )
        ui.message(f"Added {len(added)} project(s) to {installation.config.workspace}")
    return 0
