import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import load_settings, save_settings
from .consts import DEFAULT_HOMELAND_SIZE
from .cost import CostComparator, MoveKind, format_duration
from .errors import MarshrutkaError
from .grid import MapGrid, load_map
from .homeland import Homeland
from .index import parse_cell_index
from .pathfinder import find_path

log = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NO_ROUTE = 2

# Colours per move kind; minimal mode prints without them.
MOVE_COLORS = {
    MoveKind.NO_MOVE: "dim",
    MoveKind.CENTRAL_MOVE: "cyan",
    MoveKind.STANDARD_MOVE: "green3",
    MoveKind.CARAVAN: "gold3",
    MoveKind.SCROLL_OF_ESCAPE: "magenta",
    MoveKind.SCROLL_OF_ESCAPE_HQ: "magenta",
    MoveKind.SCROLL_OF_ESCAPE_FORUM: "magenta",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marshrutka", description="Cheapest route between two cells of the map"
    )
    parser.add_argument("source", help="Start cell, e.g. 'B 3#4', 'BR 2' or '0#0'")
    parser.add_argument("target", help="Destination cell")
    parser.add_argument(
        "--map",
        dest="map_path",
        help=f"Map JSON file (default: synthetic {2 * DEFAULT_HOMELAND_SIZE + 1}x{2 * DEFAULT_HOMELAND_SIZE + 1} map)",
    )
    parser.add_argument("--config", help="Settings file (default: user config directory)")
    parser.add_argument("--homeland", help="Your homeland: B, R, G or Y")
    parser.add_argument(
        "--caravans",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Allow caravan rides between the hub and campfires",
    )
    parser.add_argument(
        "--soe",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Allow the scroll of escape to your nearest campfire",
    )
    parser.add_argument("--soe-cost", type=int, help="Price of a scroll of escape")
    parser.add_argument("--hq", help="Cell of your HQ, enables the HQ scroll")
    parser.add_argument("--hq-cost", type=int, help="Price of an HQ scroll")
    parser.add_argument("--forum", help="Cell of the forum, enables the forum scroll")
    parser.add_argument("--forum-cost", type=int, help="Price of a forum scroll")
    parser.add_argument("--route-guru", type=int, help="Route Guru skill level (0 or 1)")
    parser.add_argument("--fleetfoot", type=int, help="Fleetfoot skill level (0 or 1)")
    parser.add_argument(
        "--sort-by",
        nargs=2,
        metavar=("PRIMARY", "SECONDARY"),
        choices=[c.value for c in CostComparator],
        help="Metrics to minimise, e.g. 'legs time'",
    )
    parser.add_argument(
        "--save-settings", action="store_true", help="Remember the given options for next run"
    )
    parser.add_argument("--minimal", action="store_true", help="Reduced colors and subtle output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def setup_logging(verbose: bool, console: Console):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )


def apply_overrides(settings, args):
    """Copy the options given on the command line over loaded settings."""
    overrides = {
        "homeland": args.homeland.upper() if args.homeland else None,
        "use_caravans": args.caravans,
        "use_soe": args.soe,
        "scroll_of_escape_cost": args.soe_cost,
        "hq_position": args.hq,
        "scroll_of_escape_hq_cost": args.hq_cost,
        "forum_position": args.forum,
        "scroll_of_escape_forum_cost": args.forum_cost,
        "route_guru": args.route_guru,
        "fleetfoot": args.fleetfoot,
        "sort_by": list(args.sort_by) if args.sort_by else None,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    return settings


def render_route(console: Console, cost, use_colors=True):
    table = Table(title="Itinerary", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Legs", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Money", justify="right")
    for i, command in enumerate(cost.commands, start=1):
        aggregated = command.aggregated_cost
        label = escape(aggregated.kind.label)
        if use_colors:
            label = f"[{MOVE_COLORS[aggregated.kind]}]{label}[/]"
        table.add_row(
            str(i),
            label,
            str(command.from_cell),
            str(command.to_cell),
            str(aggregated.legs),
            format_duration(aggregated.time),
            str(aggregated.money),
        )
    console.print(table)

    summary = Table.grid(padding=(0, 1))
    summary.add_row("[bold]Legs[/bold]", f"[cyan]{cost.legs}[/cyan]" if use_colors else str(cost.legs))
    summary.add_row(
        "[bold]Time[/bold]",
        f"[magenta]{format_duration(cost.time)}[/magenta]" if use_colors else format_duration(cost.time),
    )
    summary.add_row("[bold]Money[/bold]", f"[gold3]{cost.money}[/gold3]" if use_colors else str(cost.money))
    console.print(Panel(summary, title="Summary", border_style="green", expand=False))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    setup_logging(args.verbose, console)

    try:
        settings = apply_overrides(load_settings(args.config), args)
        grid = load_map(args.map_path) if args.map_path else MapGrid.generate(DEFAULT_HOMELAND_SIZE)
        find_path_settings = settings.to_find_path_settings(grid)
        source = parse_cell_index(args.source)
        target = parse_cell_index(args.target)
    except (MarshrutkaError, OSError) as e:
        console.print(Panel.fit(f"[red]{escape(str(e))}[/red]", title="Invalid input", border_style="red"))
        return EXIT_ERROR

    if args.save_settings:
        try:
            path = save_settings(settings, args.config)
            console.print(f"[green]Settings saved to {escape(str(path))}.[/green]")
        except OSError as e:
            console.print(f"[yellow]Warning: could not save settings: {escape(str(e))}[/yellow]")

    homeland = Homeland.from_abbrev(settings.homeland)
    console.rule(f"Route {source} -> {target}")
    console.print(
        f"[dim]Homeland {homeland.title}, sorted by {settings.sort_by[0]} then {settings.sort_by[1]}.[/dim]"
    )
    try:
        with console.status("Searching route...", spinner="dots"):
            cost = find_path(source, target, find_path_settings)
    except MarshrutkaError as e:
        console.print(Panel.fit(f"[red]{escape(str(e))}[/red]", title="Invalid input", border_style="red"))
        return EXIT_ERROR

    if cost is None:
        console.print(Panel.fit("No route under the current settings.", style="orange1"))
        return EXIT_NO_ROUTE
    render_route(console, cost, use_colors=not args.minimal)
    return 0


if __name__ == "__main__":
    sys.exit(main())
