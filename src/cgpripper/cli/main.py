"""Main CLI entry point for cgp-ripper."""

import argparse
import sys

from cgpripper import __description__, __version__
from .commands import setup_commands


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(prog="cgp-ripper", description=__description__)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    setup_commands(subparsers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if hasattr(args, "func"):
        return args.func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
