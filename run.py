"""mazegen CLI entry point.

Provides subcommands for generating a maze straight to the terminal and for
running the HTTP API. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

import colorama
from colorama import Fore, Style
from dotenv import load_dotenv

from mazegen import __version__
from mazegen.generator import (
    CELL_SIZE_PRESETS,
    ConfigurationError,
    GeneratorConfig,
    GridContext,
    generate,
    resolve_cell_size,
)
from mazegen.generator.config import (
    DEFAULT_ROOM_COUNT,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
)
from mazegen.generator.tiles import CORRIDOR, DOOR, ROOM
from mazegen.seeds import coerce_seed

TILE_COLORS = {
    ROOM: Fore.MAGENTA,
    CORRIDOR: Fore.YELLOW,
    DOOR: Fore.RED + Style.BRIGHT,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    mazegen: rooms, corridors and doors on a grid

    Generate a layout and print it, or run the HTTP API that serves layouts as
    JSON. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                           Bind address for the web server (default: 0.0.0.0)
          PORT                           Port for the web server (default: 5000)
          MAZEGEN_MIN_ROOM_SIZE          Smallest room side (default: 4)
          MAZEGEN_MAX_ROOM_SIZE          Largest room side (default: 8)
          MAZEGEN_ROOM_MARGIN            Empty cells kept around the grid edge (default: 1)
          MAZEGEN_PLACEMENT_ATTEMPT_CAP  Position retries per room (default: 100)
          MAZEGEN_DOOR_WIDTH_FRACTION    Door thickness as a fraction of a cell (default: 0.2)
          MAZEGEN_LOG_LEVEL              debug | info | warn | error (default: info)

        Examples:
          # Five rooms on the default 1000x800 viewport with medium cells
          python run.py generate

          # Reproducible layout on an explicit grid, as JSON
          python run.py generate --columns 50 --rows 67 --rooms 8 --seed 42 --format json

          # Dense grid from a preset
          python run.py generate --size large --rooms 12

          # Run the API on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazegen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mazegen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one layout and print it as ASCII or JSON",
    )
    gen_parser.add_argument("--rooms", type=int, default=DEFAULT_ROOM_COUNT, help="Rooms to try to place (default: 5)")
    gen_parser.add_argument("--seed", default=None, help="Integer or word; omitted means random")
    gen_parser.add_argument("--columns", type=int, default=None, help="Grid columns (use with --rows)")
    gen_parser.add_argument("--rows", type=int, default=None, help="Grid rows (use with --columns)")
    gen_parser.add_argument(
        "--size",
        default="medium",
        help=f"Cell size preset {sorted(CELL_SIZE_PRESETS)} or pixels (default: medium)",
    )
    gen_parser.add_argument("--viewport-width", type=int, default=DEFAULT_VIEWPORT_WIDTH, help="Viewport width in px")
    gen_parser.add_argument("--viewport-height", type=int, default=DEFAULT_VIEWPORT_HEIGHT, help="Viewport height in px")
    gen_parser.add_argument("--format", choices=("ascii", "json"), default="ascii", help="Output format")
    gen_parser.add_argument("--strict", action="store_true", help="Fail when the grid cannot hold any room")
    gen_parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors in ASCII output")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask maze API",
    )
    server_parser.add_argument("--host", default=None, help="Bind address (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Listen port (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Flask debug mode (reloader, tracebacks)")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _color_enabled(args) -> bool:
    if getattr(args, "no_color", False):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def colorize(ascii_map: str) -> str:
    out = []
    for ch in ascii_map:
        color = TILE_COLORS.get(ch)
        out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
    return "".join(out)


def _resolve_grid(args) -> tuple[GridContext, int]:
    cell_size = resolve_cell_size(args.size)
    if args.columns is not None or args.rows is not None:
        if args.columns is None or args.rows is None:
            raise ConfigurationError("--columns and --rows must be given together")
        return GridContext(args.columns, args.rows), cell_size
    return GridContext.from_viewport(args.viewport_width, args.viewport_height, cell_size), cell_size


def run_generate(args) -> int:
    try:
        config = GeneratorConfig.from_env()
        grid, cell_size = _resolve_grid(args)
        seed = coerce_seed(args.seed)
        result = generate(grid, args.rooms, config=config, seed=seed, strict=args.strict)
    except ConfigurationError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.format == "json":
        data = result.to_json(cell_size=cell_size)
        data["cell_size"] = cell_size
        print(json.dumps(data, indent=2))
        return 0
    text = result.to_ascii()
    if _color_enabled(args):
        colorama.just_fix_windows_console()
        text = colorize(text)
    print(text)
    m = result.metrics
    print(
        f"seed={seed} grid={grid.columns}x{grid.rows} rooms={m['rooms_placed']}/{m['rooms_requested']} "
        f"corridors={len(result.corridors)} doors={m['doors_created']} ms={m['runtime_ms']}"
    )
    return 0


def run_server(args) -> int:
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from mazegen.server import start_server

    color = _color_enabled(args)
    if color:
        colorama.just_fix_windows_console()

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}mazegen API{Style.RESET_ALL}" if color else "mazegen API"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if args.debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    from mazegen.logging_utils import log

    log.info(event="startup", host=host, port=port, debug=args.debug)
    start_server(host=host, port=port, debug=args.debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default one if present
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    if args.command == "server":
        return run_server(args)
    return run_generate(args)


def cli():  # console script entry point
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
