"""Command-line interface for rivl_import."""

import argparse
import logging
import sys
from pathlib import Path

from .exceptions import RivlError
from .import_profiles import get_profile_names
from .importer.import_rivl import bin_path_for, import_rivl
from .scene_graph.sg_walk import format_tree


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rivl_import",
        description="Import a RIVL scene (BGFscene markup + .bin) and print a summary.",
    )
    parser.add_argument("path", type=Path, help="Path to the RIVL markup file.")
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the scene graph below the root.",
    )
    parser.add_argument(
        "--profile",
        default="default",
        choices=get_profile_names(),
        help="Import options profile.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Shortcut for --profile strict.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log warnings (-v) or every declaration (-vv).",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.ERROR, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.path.exists():
        parser.error(f"File not found: {args.path}")

    profile = "strict" if args.strict else args.profile
    try:
        world = import_rivl(args.path, profile=profile)
    except (RivlError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    with world:
        _print_summary(world.summary(), bin_path_for(args.path))
        if world.diagnostics:
            print("Diagnostics:")
            for diag in world.diagnostics:
                print(f"  {diag!r}")
        if args.tree:
            print("Scene:")
            print(format_tree(world))
    return 0


def _print_summary(summary, bin_path):
    print(f"{summary['path']} (+ {Path(bin_path).name})")
    print(f"  declarations: {summary['declarations']}")
    for kind, count in sorted(summary['kinds'].items()):
        print(f"    {kind:12s} {count:6d}")
    print(f"  root: {summary['root'] or '<none>'}")
    print(f"  warnings: {summary['warnings']}, errors: {summary['errors']}")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
