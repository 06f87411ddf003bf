# src/taskflow/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import cmd_list, cmd_stats, handle_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import TaskChange

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.task_store))
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskflow"))
    _print_ts(f"[{app_name}] Type a title to add a task. Use /help for commands. Use /exit to quit.\n")
    print(cmd_stats(state, []))

    changed = False

    def on_change(change: TaskChange) -> None:
        nonlocal changed
        changed = True
        logger.debug("Store changed kind=%s id=%s", change.kind.value, change.task_id)

    unsubscribe = state.task_store.subscribe(on_change)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            changed = False
            try:
                response = command_registry.handle(state, user_input, emit=emit)
                if response is None:
                    response = handle_text(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            _print_ts(response)

            # Re-render the list after each mutation.
            if changed:
                print(cmd_list(state, []))
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
