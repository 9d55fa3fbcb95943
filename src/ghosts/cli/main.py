"""
Main CLI entrypoint for ghosts.

Usage:
    ghosts --version
    ghosts [-f FILE] [EXPR ...]
    ghosts -l prod^intel
    ghosts --tags
    ghosts --macros
    ghosts --usage [PATTERN ...]
"""

import argparse
import json
import platform
import sys
import traceback
from typing import Any, List, Optional

import yaml

from ghosts import __version__
from ghosts.config import DEFAULT_DIRECTORY_PATH, DIRECTORY_PATH_ENV, GhostsConfig
from ghosts.directory.host import Host
from ghosts.directory.model import Directory
from ghosts.engine.errors import ExitCode, GhostsError
from ghosts.engine.query import Query
from ghosts.platform.tty import ColorPrinter


def get_version_string() -> str:
    """Generate a detailed version string."""
    python_version = platform.python_version()
    os_info = f"{platform.system()} {platform.release()}"
    return (
        f"ghosts {__version__}\n"
        f"  python: {python_version}\n"
        f"  platform: {os_info}"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ghosts."""
    parser = argparse.ArgumentParser(
        prog="ghosts",
        description="Resolve host expressions against the global hosts directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Expressions join tags, macros and hostnames with '+' (union)
and '^' (difference), evaluated left to right:

  ghosts intel+e450
  ghosts prod^intel
  ghosts -l sunprod
  ghosts --usage '^prod'

The hosts directory defaults to ${DIRECTORY_PATH_ENV} or {DEFAULT_DIRECTORY_PATH}.
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=get_version_string(),
    )

    parser.add_argument(
        "expressions",
        nargs="*",
        metavar="EXPR",
        help="Host expressions (all hosts when omitted); patterns with --usage",
    )

    parser.add_argument(
        "-f", "--file",
        dest="directory",
        default=None,
        help=f"Hosts directory file (default: ${DIRECTORY_PATH_ENV} or {DEFAULT_DIRECTORY_PATH})",
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--tags",
        action="store_true",
        dest="list_tags",
        help="List tag and macro names",
    )
    action.add_argument(
        "--macros",
        action="store_true",
        dest="list_macros",
        help="List macro names",
    )
    action.add_argument(
        "--usage",
        action="store_true",
        help="Show how many hosts each tag and macro selects",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-l", "--lines",
        action="store_true",
        help="Print one name per line",
    )
    output.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output in JSON format",
    )
    output.add_argument(
        "-y", "--yaml",
        action="store_true",
        help="Output in YAML format",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed directory lines instead of skipping them",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured diagnostics",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)",
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entrypoint for ghosts CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    config = GhostsConfig.from_env()
    config.strict = parsed.strict
    if parsed.no_color:
        config.color = False
    printer = ColorPrinter(sys.stderr, enabled=config.color)

    try:
        return run(parsed, config, printer)
    except GhostsError as e:
        printer.print(printer.error(f"ERROR: {e}"))
        return int(e.exit_code)
    except KeyboardInterrupt:
        printer.print("\nInterrupted")
        return ExitCode.KEYBOARD_INTERRUPT
    except Exception as e:
        printer.print(printer.error(f"ERROR: Unexpected error: {e}"))
        if parsed.verbose >= 2:
            traceback.print_exc()
        return ExitCode.GENERIC_ERROR


def run(parsed: argparse.Namespace, config: GhostsConfig, printer: ColorPrinter) -> int:
    """Load the directory and perform the requested action."""
    directory = Directory.load(parsed.directory, strict=config.strict, config=config)

    for diagnostic in directory.diagnostics:
        printer.print(printer.warning(f"[WARNING]: skipping {diagnostic}"))
    if parsed.verbose:
        printer.print(printer.dim(
            f"Loaded {directory.source}: {len(directory)} hosts, "
            f"{len(directory.tag_names)} tags, {len(directory.macro_names)} macros"
        ))

    query = Query(directory)

    if parsed.list_tags:
        emit_names(query.list_tags(), parsed)
        return ExitCode.SUCCESS

    if parsed.list_macros:
        emit_names(query.list_macros(), parsed)
        return ExitCode.SUCCESS

    if parsed.usage:
        usage = query.tag_usage(parsed.expressions)
        if parsed.json_output or parsed.yaml:
            emit_structured([entry.to_dict() for entry in usage], parsed)
        else:
            width = max((len(entry.name) for entry in usage), default=0)
            for entry in usage:
                print(f"{entry.name:<{width}}  {entry.kind:<5}  {entry.count}")
        return ExitCode.SUCCESS

    if not parsed.expressions:
        emit_hosts(directory.hosts, parsed)
        return ExitCode.SUCCESS

    resolution = query.resolve(parsed.expressions)
    if not resolution.ok:
        # Never hand a partial host list to whatever consumes our output
        for _, error in resolution.errors:
            printer.print(printer.error(f"ERROR: {error}"))
        return ExitCode.PARSE_ERROR

    if not resolution.hosts:
        printer.print(printer.warning("[WARNING]: no matching hosts"))
    emit_hosts(resolution.hosts, parsed)
    return ExitCode.SUCCESS


def emit_hosts(hosts: List[Host], parsed: argparse.Namespace) -> None:
    """Print hosts in the requested format."""
    if parsed.json_output or parsed.yaml:
        emit_structured([host.to_dict() for host in hosts], parsed)
    else:
        emit_names([host.name for host in hosts], parsed)


def emit_names(names: List[str], parsed: argparse.Namespace) -> None:
    """Print bare names space-joined, one per line, or structured."""
    if parsed.json_output or parsed.yaml:
        emit_structured(names, parsed)
    elif parsed.lines:
        for name in names:
            print(name)
    elif names:
        print(" ".join(names))


def emit_structured(data: Any, parsed: argparse.Namespace) -> None:
    if parsed.yaml:
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    else:
        print(json.dumps(data, indent=2))


if __name__ == "__main__":
    sys.exit(main())
