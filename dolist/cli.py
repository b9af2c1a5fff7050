# dolist/cli.py

"""Command-line interface for dolist.

Each run loads the task file once, applies a single command and writes the
file back. Errors from the store or from date parsing are reported on stderr
with exit status 1.
"""

import sys
import logging
import argparse
import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .data_model import InvalidDate, Task, parse_date, today
from .dates import Timeframe, filter_tasks
from .persistence import Store, StoreError, resolve_path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dolist", description="A manager for your to-do list"
    )
    parser.add_argument(
        "--file",
        metavar="PATH",
        help="task file to use (default: $DOLIST_FILE or ~/.dolist.json)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    add_p = subparsers.add_parser("add", help="Add one or more tasks to the list")
    add_p.add_argument("tasks", nargs="+", metavar="TASK_NAME")
    add_p.add_argument("-d", "--date", help="calendar date for the new tasks")

    list_p = subparsers.add_parser(
        "list", aliases=["ls"], help="List incomplete and completed tasks"
    )
    list_p.add_argument(
        "timeframe",
        nargs="?",
        default=Timeframe.TODAY.value,
        choices=[t.value for t in Timeframe],
    )

    finish_p = subparsers.add_parser("finish", help="Finish one or many tasks by id")
    finish_p.add_argument("ids", nargs="+", type=int, metavar="TASK_ID")

    push_p = subparsers.add_parser(
        "push",
        help="Push tasks to the following day, or to a specific calendar date",
    )
    push_p.add_argument("ids", nargs="+", type=int, metavar="TASK_ID")
    push_p.add_argument("-d", "--date", help="calendar date to push the tasks to")

    subparsers.add_parser("clean", help="Remove completed tasks from the list")
    subparsers.add_parser(
        "migrate", help="Upgrade a task file written before tasks had dates"
    )
    subparsers.add_parser("tui", help="Open the interactive task list")
    return parser


def configure_logging(verbose: bool = False, filename: Optional[Path] = None) -> None:
    """Send logs to stderr, or to ``filename`` when the terminal is in use."""
    level = logging.DEBUG if verbose else logging.WARNING
    if filename is not None:
        logging.basicConfig(
            filename=str(filename), filemode="a", level=level, format=LOG_FORMAT
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def format_task(task: Task, current: Optional[datetime.date] = None) -> str:
    if current is None:
        current = today()
    marker = "[x]" if task.complete else "[ ]"
    line = f"{task.id:>3} {marker} {task.name}"
    if task.date != current:
        line += f"  ({task.date.isoformat()})"
    return line


def render_tasks(tasks: Iterable[Task], current: Optional[datetime.date] = None) -> List[str]:
    lines = [format_task(task, current) for task in tasks]
    return lines or ["Nothing to do."]


def _warn_unmatched(store: Store, ids: List[int]) -> None:
    for task_id in sorted(store.unmatched_ids(ids)):
        print(f"dolist: no task with id {task_id}", file=sys.stderr)


def _cmd_add(store: Store, args: argparse.Namespace) -> None:
    date = parse_date(args.date) if args.date is not None else today()
    for name in args.tasks:
        task = store.insert_task(name, date)
        print(f"Added task {task.id}: {task.name}")


def _cmd_list(store: Store, args: argparse.Namespace) -> None:
    current = today()
    selected = filter_tasks(store.tasks, Timeframe(args.timeframe), current)
    for line in render_tasks(selected, current):
        print(line)


def _cmd_finish(store: Store, args: argparse.Namespace) -> None:
    store.finish_tasks(args.ids)
    _warn_unmatched(store, args.ids)


def _cmd_push(store: Store, args: argparse.Namespace) -> None:
    store.push_tasks(args.ids, args.date)
    _warn_unmatched(store, args.ids)


def _cmd_clean(store: Store, args: argparse.Namespace) -> None:
    removed = store.remove_finished_tasks()
    print(f"Removed {removed} completed task{'s' if removed != 1 else ''}")


def _cmd_migrate(store: Store, args: argparse.Namespace) -> None:
    print(f"Migrated {len(store)} tasks in {store.path}")


def _cmd_tui(store: Store, args: argparse.Namespace) -> None:
    from .todo_app import TodoApp  # textual is only needed for the TUI

    TodoApp(store).run()


COMMANDS = {
    "add": _cmd_add,
    "list": _cmd_list,
    "ls": _cmd_list,
    "finish": _cmd_finish,
    "push": _cmd_push,
    "clean": _cmd_clean,
    "migrate": _cmd_migrate,
    "tui": _cmd_tui,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        path = resolve_path(args.file)
        if args.command == "tui":
            configure_logging(args.verbose, filename=path.with_suffix(".log"))
        else:
            configure_logging(args.verbose)

        # A bad date must fail before init() can leave the "{}" placeholder behind
        if getattr(args, "date", None) is not None:
            parse_date(args.date)

        store = Store(path)
        if args.command == "migrate":
            store.migrate()
        else:
            store.init()
        COMMANDS[args.command](store, args)
        # Saving after read-only commands too replaces the "{}" placeholder
        # written by init() with a real (possibly empty) task list.
        store.save()
    except (StoreError, InvalidDate) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"dolist: error: {exc}", file=sys.stderr)
        return 1
    return 0
