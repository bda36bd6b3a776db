# src/taskboard/cli/main.py

"""
CLI entrypoint.

    taskboard serve    - run the HTTP API (uvicorn) over a fresh in-memory store
    taskboard console  - interactive console client talking to a running API
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state
from ..client.api_client import TaskApiClient
from ..client.task_board import TaskBoard
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Minimal task tracker.")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=None, help="Bind address (default: TASKBOARD_HOST).")
    serve.add_argument("--port", type=int, default=None, help="Port (default: TASKBOARD_PORT).")

    console = sub.add_parser("console", help="Interactive console client.")
    console.add_argument(
        "--base-url", default=None, help="API base URL (default: TASKBOARD_API_BASE_URL)."
    )
    return parser


def _serve(settings, host: str | None, port: int | None) -> None:
    state = create_initial_state(settings=settings)
    app = create_app(state)

    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Serving %s on http://%s:%s", settings.app_name, bind_host, bind_port)

    # log_config=None keeps our handlers instead of uvicorn's defaults.
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)


def _console(settings, base_url: str | None) -> None:
    if base_url:
        api = TaskApiClient(base_url, timeout=settings.client_timeout_seconds)
    else:
        api = TaskApiClient.from_settings(settings)

    with api:
        run_console_loop(TaskBoard(api))


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    if args.command == "console":
        # Log lines would interleave with the prompt; keep the console quiet.
        console_level = max(console_level, logging.WARNING)

    setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.info("Starting %s (%s)...", settings.app_name, args.command)

    if args.command == "serve":
        _serve(settings, args.host, args.port)
    else:
        _console(settings, args.base_url)

    logger.info("Bye.")


if __name__ == "__main__":
    main()
