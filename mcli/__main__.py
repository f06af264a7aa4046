#!/usr/bin/env python3
"""
Events browser TUI - A terminal user interface for browsing upcoming calendar events
"""
import argparse
import curses
import logging
import os
import queue
import sys
from pathlib import Path

from mcli.api import EventsClient
from mcli.config import Config, ConfigError, load_config
from mcli.fetcher import FetchOrchestrator
from mcli.input_controller import CursesInputController
from mcli.models.mcli_model import McliState
from mcli.models.messages import Message
from mcli.output_controller import CursesOutputController
from mcli.viewmodels.app import AppModel
from mcli.views.app import App

LOG_FILE = Path(__file__).parent / "mcli.log"
TICK_MS = 100
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 23234

logger = logging.getLogger(__name__)


def _configure_logging(log_file: Path, debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(name)s[%(process)d]: %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid port {value!r}") from e
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(
            f"port must be between 1 and 65535, got {port}"
        )
    return port


def _init_app(stdscr: curses.window, config: Config) -> None:
    messages: "queue.Queue[Message]" = queue.Queue()
    state = McliState()
    model = AppModel(
        state, config.filter_fields, logger=logging.getLogger("mcli.update")
    )
    orchestrator = FetchOrchestrator(
        EventsClient(config.api_base_url, config.http_timeout), messages
    )
    viewer = App(
        CursesOutputController(stdscr),
        CursesInputController(stdscr, TICK_MS),
        state,
        model,
        orchestrator,
        messages,
    )
    logger.info("Starting viewer for %s", config.api_base_url)
    try:
        viewer.run()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt")
    except BaseException as e:
        logger.exception("An error occurred")
        raise e
    finally:
        logger.info("Exiting viewer")


def create_parser() -> argparse.ArgumentParser:
    """Command line interface of the viewer"""
    parser = argparse.ArgumentParser(
        prog="mcli",
        description="Events browser TUI - Browse upcoming calendar events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Configuration:
      API_BASE_URL        base URL of the events service (required, may live in .env)
      MCLI_HTTP_TIMEOUT   request timeout in seconds (default 10)
      MCLI_FILTER_FIELDS  fields the filter searches (default: all of
                          title,location,description)

    Key Features:
      - Live filtering across title, location and description (press '/')
      - Details sidebar for the selected event (press Enter or 'd')
      - Commands such as ':fetch <location>' and ':refresh' (press ':')
      - Open the event page in a browser (press 'o')
    """,
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log debug messages to the log file"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=LOG_FILE,
        help=f"Where to write the log (default {LOG_FILE})",
    )
    parser.add_argument(
        "--serve",
        "--wish",
        dest="serve",
        action="store_true",
        help="Serve sessions over SSH instead of running locally",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Host to serve on")
    parser.add_argument(
        "--port", type=_port, default=DEFAULT_PORT, help="Port to serve on"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.serve:
        parser.exit(
            2,
            f"{parser.prog}: serving on {args.host}:{args.port} requires the external"
            " SSH harness; run without --serve for a local session\n",
        )

    _configure_logging(args.log_file, args.debug)

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(_init_app, config)
    except curses.error as e:
        logger.exception("Could not start the terminal session")
        print(f"Error: could not start the terminal session: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
