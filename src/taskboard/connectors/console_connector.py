# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..client.api_client import ApiError, ApiNetworkError
from ..client.task_board import TaskBoard

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(
    board: TaskBoard,
    *,
    registry: CommandRegistry | None = None,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = _print_ts,
) -> None:
    """
    Interactive task console.

    Every line must be a slash command; plain text is treated as "/add <text>".
    read_line/write are injectable so the loop can be driven from tests.
    """
    registry = registry or command_registry
    logger.info("Console connector started.")

    try:
        board.refresh()
    except (ApiError, ApiNetworkError) as e:
        logger.warning("Initial refresh failed: %s", e)
        write(f"[CONSOLE] Could not load tasks: {e}")

    write("[CONSOLE] Type /help for commands, /exit to quit.")

    while True:
        try:
            user_input = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            user_input = f"/add {user_input}"

        try:
            reply = registry.handle(board, user_input, emit=write)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            write(reply)

    logger.info("Console connector finished.")
