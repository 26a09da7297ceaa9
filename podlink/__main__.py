from argparse import ArgumentParser
from pathlib import Path
import sys

from podlink.details import ui
from podlink.details.installation import Installation
from podlink.details.tools.link import link_main
from podlink.details.tools.plan import plan_main
from podlink.errors import ConfigurationError


def main(argv=None):
    COMMANDS = {
        "link": link_main,
        "plan": plan_main,
    }
    # parse common arguments...
    parser = ArgumentParser(prog="podlink")
    parser.add_argument("command", choices=COMMANDS.keys())
    parser.add_argument("--root", type=Path, default=Path("."))
    parser.add_argument("--quiet", action="store_true")
    args, unknown_args = parser.parse_known_args(sys.argv[1:] if argv is None else argv)
    ui.verbose = not args.quiet
    try:
        installation = Installation(args.root)
        exit_code = COMMANDS[args.command](
            installation=installation,
            command_args=unknown_args,
        )
    except ConfigurationError as e:
        ui.error(str(e))
        exit_code = 1
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
