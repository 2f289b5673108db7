from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from . import __version__
from . import store as task_store
from .config import default_log_level, default_store_path
from .errors import TodoError
from .logging_setup import setup_logging
from .models import CLI_PRIORITIES, Priority
from .render import render_listing

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid id '{raw}'. Use a positive integer.") from e
    if value < 1:
        raise argparse.ArgumentTypeError(f"Invalid id '{raw}'. Use a positive integer.")
    return value


def _store_path_from_args(ns: argparse.Namespace) -> Path:
    if getattr(ns, "file", None):
        return Path(ns.file).expanduser().resolve()
    return default_store_path()


def color_enabled(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    return stream.isatty()


def cmd_add(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = task_store.load(path)
    task = store.add(ns.description, Priority.from_cli(ns.priority))
    task_store.save(store, path)
    print(f"Task #{task.id} added: {task.description}")
    return 0


def cmd_list(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = task_store.load(path)
    show = None
    if ns.pending:
        show = "pending"
    elif ns.done:
        show = "done"
    print(render_listing(store, show=show, use_color=color_enabled(sys.stdout)))
    return 0


def cmd_complete(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = task_store.load(path)
    store.complete(ns.task_id)
    task_store.save(store, path)
    print(f"Task #{ns.task_id} marked as completed.")
    return 0


def cmd_delete(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = task_store.load(path)
    store.delete(ns.task_id)
    task_store.save(store, path)
    print(f"Task #{ns.task_id} deleted.")
    return 0


def cmd_clear(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = task_store.load(path)
    store.clear()
    task_store.save(store, path)
    print("All tasks cleared.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="todo",
        description="TODO list CLI app: tasks kept in a local JSON file.",
    )
    p.add_argument(
        "--file",
        help="Path to the task file (default: ./todo.json or TODO_FILE env var)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more to stderr (-v info, -vv debug).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("add", help="Add a new task.")
    s.add_argument("description", help="What needs doing.")
    s.add_argument("priority", choices=CLI_PRIORITIES, help="Task priority.")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("list", help="List tasks.")
    g = s.add_mutually_exclusive_group()
    g.add_argument("--pending", action="store_true", help="Only pending tasks.")
    g.add_argument("--done", action="store_true", help="Only completed tasks.")
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("complete", help="Mark a task as completed.")
    s.add_argument("task_id", type=_positive_int, help="Task ID.")
    s.set_defaults(func=cmd_complete)

    s = sub.add_parser("delete", help="Delete a task.")
    s.add_argument("task_id", type=_positive_int, help="Task ID.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("clear", help="Delete every task and restart ids at 1.")
    s.set_defaults(func=cmd_clear)

    return p


def _log_level(verbose: int) -> int:
    level = default_log_level()
    if verbose >= 2:
        return min(level, logging.DEBUG)
    if verbose == 1:
        return min(level, logging.INFO)
    return level


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    setup_logging(_log_level(ns.verbose))
    try:
        return int(ns.func(ns))
    except TodoError as e:
        logger.debug("Command %s failed", ns.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
