#!/usr/bin/env python3
"""CLI tool for managing stations, lines and sections.

Handy for seeding a local database without going through the HTTP API.

Usage:
    uv run python -m subway.cli create-station "Gangnam"
    uv run python -m subway.cli create-line "Line 2" green
    uv run python -m subway.cli add-section <line-id> <up-station-id> <down-station-id> 10
    uv run python -m subway.cli remove-section <line-id> <station-id>
    uv run python -m subway.cli show-line <line-id>
    uv run python -m subway.cli list-lines
"""

import argparse
import asyncio
import sys
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.database import get_session_factory
from subway.core.errors import ChainConflictError, NotFoundError, StationInUseError
from subway.helpers.section_chain import SectionChain, SectionChainError
from subway.models.network import Line
from subway.schemas.network import MAX_SECTION_DISTANCE
from subway.services.line_service import LineService, stations_in_order
from subway.services.section_service import SectionService
from subway.services.station_service import StationService

DOMAIN_ERRORS = (NotFoundError, SectionChainError, StationInUseError, ChainConflictError)


def _print_line(line: Line) -> None:
    """Print a line and its stations in path order."""
    stations = stations_in_order(line)
    print(f"   Line ID:  {line.id}")
    print(f"   Name:     {line.name}")
    print(f"   Color:    {line.color}")
    print(f"   Distance: {SectionChain(line.sections).total_distance}")
    if stations:
        print(f"   Route:    {' -> '.join(station.name for station in stations)}")
    else:
        print("   Route:    (no sections)")


async def cmd_create_station(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    Create a station.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    station = await StationService(session).create_station(args.name)
    print("✅ Created station")
    print(f"   Station ID: {station.id}")
    print(f"   Name:       {station.name}")
    return 0


async def cmd_create_line(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    Create a line with no sections.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    line = await LineService(session).create_line(args.name, args.color)
    print("✅ Created line")
    _print_line(line)
    return 0


async def cmd_add_section(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    Extend a line at its terminal.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        line = await SectionService(session).add_section(
            args.line_id,
            args.up_station_id,
            args.down_station_id,
            args.distance,
        )
    except DOMAIN_ERRORS as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print("✅ Added section")
    _print_line(line)
    return 0


async def cmd_remove_section(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    Remove a line's terminal station.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        line = await SectionService(session).remove_section(args.line_id, args.station_id)
    except DOMAIN_ERRORS as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print("✅ Removed section")
    _print_line(line)
    return 0


async def cmd_show_line(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    Show one line.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        line = await LineService(session).get_line(args.line_id, load_chain=True)
    except NotFoundError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    _print_line(line)
    return 0


async def cmd_list_lines(args: argparse.Namespace, session: AsyncSession) -> int:
    """
    List all lines.

    Returns:
        Exit code (always 0)
    """
    lines = await LineService(session).list_lines()

    if not lines:
        print("No lines found")
        return 0

    print(f"{'Line ID':<38} {'Name':<20} {'Color':<10} Stations")
    print("-" * 80)
    for line in lines:
        print(f"{line.id!s:<38} {line.name:<20} {line.color:<10} {len(stations_in_order(line))}")
    return 0


def _distance(value: str) -> int:
    """Parse a section distance, refusing values the database cannot store."""
    distance = int(value)
    if distance > MAX_SECTION_DISTANCE:
        msg = f"distance must not exceed {MAX_SECTION_DISTANCE}"
        raise argparse.ArgumentTypeError(msg)
    return distance


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        description="Subway line management CLI tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    create_station_parser = subparsers.add_parser("create-station", help="Register a station")
    create_station_parser.add_argument("name", type=str, help="Station name")

    create_line_parser = subparsers.add_parser("create-line", help="Create a line with no sections")
    create_line_parser.add_argument("name", type=str, help="Line name")
    create_line_parser.add_argument("color", type=str, help="Display color")

    add_section_parser = subparsers.add_parser(
        "add-section",
        help="Extend a line at its terminal",
        description="The up station must be the line's terminal unless the line has no sections yet.",
    )
    add_section_parser.add_argument("line_id", type=uuid.UUID, help="Line UUID")
    add_section_parser.add_argument("up_station_id", type=uuid.UUID, help="Up station UUID")
    add_section_parser.add_argument("down_station_id", type=uuid.UUID, help="Down station UUID")
    add_section_parser.add_argument("distance", type=_distance, help="Section distance (positive)")

    remove_section_parser = subparsers.add_parser("remove-section", help="Remove a line's terminal station")
    remove_section_parser.add_argument("line_id", type=uuid.UUID, help="Line UUID")
    remove_section_parser.add_argument("station_id", type=uuid.UUID, help="Terminal station UUID")

    show_line_parser = subparsers.add_parser("show-line", help="Show a line and its stations")
    show_line_parser.add_argument("line_id", type=uuid.UUID, help="Line UUID")

    subparsers.add_parser("list-lines", help="List all lines")

    return parser


COMMAND_HANDLERS = {
    "create-station": cmd_create_station,
    "create-line": cmd_create_line,
    "add-section": cmd_add_section,
    "remove-section": cmd_remove_section,
    "show-line": cmd_show_line,
    "list-lines": cmd_list_lines,
}


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI tool.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    handler = COMMAND_HANDLERS[args.command]

    async def run_with_session() -> int:
        async with get_session_factory()() as session:
            return await handler(args, session)

    return asyncio.run(run_with_session())


if __name__ == "__main__":
    sys.exit(main())
