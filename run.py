"""dungeongen CLI entry point.

Provides subcommands for running the dungeon API server and for generating a
single layout in the terminal. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Multi-floor dungeon generator

    Run the JSON API server or generate one layout in the terminal.
    Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DUNGEON_WIDTH   Default grid width (default: 8)
          DUNGEON_LENGTH  Default grid length (default: 8)
          DUNGEON_FLOORS  Default number of floors (default: 8)
          DUNGEON_SEED    Default seed (default: random)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Generate a 10x10x3 dungeon from seed 42 and print its floor plans
          python run.py generate --width 10 --length 10 --floors 3 --seed 42 --plan

          # Dump the layout as JSON
          python run.py generate --seed 42 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeongen",
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
        version=f"dungeongen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve generated layouts as JSON over HTTP",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print a summary",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a layout from a seed and print a summary, plans or JSON.",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (default: env DUNGEON_WIDTH or 8)")
    gen_parser.add_argument("--length", type=int, default=None, help="Grid length (default: env DUNGEON_LENGTH or 8)")
    gen_parser.add_argument("--floors", type=int, default=None, help="Floors (default: env DUNGEON_FLOORS or 8)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env DUNGEON_SEED or random)")
    gen_parser.add_argument("--json", action="store_true", help="Print the layout as JSON instead of a summary")
    gen_parser.add_argument("--plan", action="store_true", help="Also print a text plan of every floor")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def _banner(title: str, rows: list[tuple[str, object]]) -> str:
    title = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if _COLOR_ENABLED else title
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [divider, f"  {title}", divider]
    lines.extend(f"  {label(k + ':'):12} {value(v)}" for k, v in rows)
    lines.extend([divider, ""])
    return "\n".join(lines)


def run_generate(args: argparse.Namespace) -> int:
    from dungeongen.dungeon import DungeonGraph, GenerationConfig, InvalidDimension
    from dungeongen.dungeon.plan import render_plan

    cfg = GenerationConfig.from_env(width=args.width, length=args.length, floors=args.floors, seed=args.seed)
    seed = cfg.resolve_seed()
    try:
        graph = DungeonGraph.from_config(cfg)
    except InvalidDimension as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    graph.generate(seed)

    if args.json:
        print(json.dumps(graph.to_dict()))
        return 0
    m = graph.metrics
    rows = [
        ("Seed", seed),
        ("Size", "x".join(str(d) for d in graph.size)),
        ("Rooms", len(graph.rooms())),
    ]
    if m:
        rows.extend(
            [
                ("Doors", m["doors"]),
                ("Walls", m["walls"]),
                ("Backtracks", m["backtracks"]),
                ("Runtime", f"{m['runtime_ms']} ms"),
            ]
        )
    print(_banner("Dungeon Generated", rows))
    if args.plan:
        print(render_plan(graph))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from dungeongen.logging_utils import log
    from dungeongen.server import start_server

    print(
        _banner(
            "Dungeon API Bootup",
            [("Mode", mode.upper()), ("Host", host), ("Port", port), ("Debug", "YES" if debug else "NO")],
        )
    )
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
