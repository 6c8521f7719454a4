import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .consts import DEFAULT_HOMELAND_SIZE
from .errors import MarshrutkaError
from .grid import MapGrid, dump_map, map_payload
from .index import parse_cell_index

log = logging.getLogger(__name__)


def render_grid(console: Console, grid: MapGrid):
    """Print the grid as a table of cell names, campfires highlighted."""
    table = Table(show_header=False, show_lines=True, padding=(0, 1))
    for _ in range(2 * grid.homeland_size + 1):
        table.add_column(justify="center")
    for row in grid.rows():
        table.add_row(
            *(f"[bold gold3]{cell.index}[/]" if grid.is_campfire(cell.index) else str(cell.index) for cell in row)
        )
    console.print(table)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="marshrutka-map", description="Write a synthetic map file for the route planner."
    )
    parser.add_argument(
        "--homeland-size",
        type=int,
        default=DEFAULT_HOMELAND_SIZE,
        help=f"Side of a homeland quadrant (default {DEFAULT_HOMELAND_SIZE})",
    )
    parser.add_argument(
        "--campfire",
        action="append",
        default=None,
        metavar="CELL",
        help="Campfire cell, repeatable (default: one in the middle of every homeland)",
    )
    parser.add_argument("-o", "--output", help="Write the map JSON here instead of printing it")
    parser.add_argument("--show", action="store_true", help="Print the grid as a table")
    args = parser.parse_args(argv)

    console = Console()
    logging.basicConfig(
        level=logging.INFO, format="%(message)s", handlers=[RichHandler(console=console)], force=True
    )

    try:
        campfires = [parse_cell_index(c) for c in args.campfire] if args.campfire else None
        grid = MapGrid.generate(args.homeland_size, campfires)
    except MarshrutkaError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if args.show:
        render_grid(console, grid)
    if args.output:
        try:
            dump_map(grid, args.output)
        except OSError as e:
            console.print(f"[red]Error writing {args.output}: {e}[/red]")
            return 1
        console.print(f"[green]Wrote map: {args.output}[/green]")
    elif not args.show:
        console.print_json(data=map_payload(grid))
    return 0


if __name__ == "__main__":
    sys.exit(main())
