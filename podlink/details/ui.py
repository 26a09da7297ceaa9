import sys

# Progress messages can be silenced (e.g. --quiet); warnings and errors cannot
verbose = True


def message(text: str) -> None:
    if verbose:
        print(text)


def warn(text: str) -> None:
    print(f"WARNING: {text}", file=sys.stderr)


def error(text: str) -> None:
    print(f"ERROR: {text}", file=sys.stderr)
