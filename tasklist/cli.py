"""Command-line interface for tasklist.

This module provides an interactive console front-end for a TaskStore.
The launcher reads session commands line by line from stdin; each line is
parsed with argparse. Supported session commands:
- add: Create a new task
- toggle: Flip a task between active and done
- delete: Delete a task
- clear: Delete every completed task
- filter: Choose which tasks are listed
- priority: Choose the priority for new tasks
- list: Show the task board
- stats: Show counts, progress and the priority breakdown
- help, quit, exit

Blank lines and lines starting with "#" are skipped, so a session script
can carry comments.
"""

import argparse
import logging
import shlex
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from tasklist.config import load_settings
from tasklist.logging_setup import setup_logging
from tasklist.models import Priority, Task, TaskFilter
from tasklist.store import TaskStore

logger = logging.getLogger(__name__)

PROGRESS_BAR_WIDTH = 20

EMPTY_MESSAGES = {
    TaskFilter.ALL: "No tasks yet - add one above",
    TaskFilter.ACTIVE: "No active tasks",
    TaskFilter.COMPLETED: "Nothing completed yet",
}

QUIT_COMMANDS = ("quit", "exit")


def create_launcher_parser() -> argparse.ArgumentParser:
    """Create the parser for the program's own command-line options.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Interactive in-memory task list. Reads commands from stdin."
    )

    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument(
        "--seed",
        dest="seed",
        action="store_const",
        const=True,
        default=None,
        help="Start with the demonstration tasks (default)"
    )
    seed_group.add_argument(
        "--no-seed",
        dest="seed",
        action="store_const",
        const=False,
        help="Start with an empty task list"
    )

    parser.add_argument(
        "--max-length",
        type=int,
        default=None,
        help="Maximum task text length (default: 120)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Console log level (default: WARNING)"
    )

    return parser


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for commands typed during a session.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(prog="tasklist>", add_help=False)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("text", nargs="*", help="Task text")
    add_parser.add_argument(
        "--priority",
        choices=[p.value for p in Priority],
        help="Priority for this and following tasks"
    )

    toggle_parser = subparsers.add_parser("toggle", help="Toggle a task between active and done")
    toggle_parser.add_argument("id", type=int, help="Task ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task ID")

    subparsers.add_parser("clear", help="Delete all completed tasks")

    filter_parser = subparsers.add_parser("filter", help="Choose which tasks are listed")
    filter_parser.add_argument("filter", choices=[f.value for f in TaskFilter])

    priority_parser = subparsers.add_parser("priority", help="Choose the priority for new tasks")
    priority_parser.add_argument("priority", choices=[p.value for p in Priority])

    subparsers.add_parser("list", help="Show the task board")
    subparsers.add_parser("stats", help="Show counts and progress")
    subparsers.add_parser("help", help="Show this help")
    for name in QUIT_COMMANDS:
        subparsers.add_parser(name, help="End the session")

    return parser


# ---- rendering ----

def render_progress_bar(percent: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Render a text progress bar such as `[#####-----]  50%`.

    Args:
        percent: Whole percentage, 0 to 100
        width: Number of bar cells

    Returns:
        Bar string with the right-aligned percentage
    """
    filled = percent * width // 100
    return f"[{'#' * filled}{'-' * (width - filled)}] {percent:>3}%"


def render_task(task: Task) -> str:
    """Render one task line: check mark, id, text and priority label."""
    status_icon = "✓" if task.completed else " "
    return f"[{status_icon}] #{task.id} {task.text} ({task.priority.label})"


def render_board(store: TaskStore) -> str:
    """Render header, visible tasks and footer as one block of text."""
    lines = [
        f"My Tasks  {store.completed_count()}/{store.total_count()} done",
        render_progress_bar(store.progress_percent()),
        f"Filter: {store.active_filter.label}  |  New task priority: {store.pending_priority.label}",
        "",
    ]

    visible = store.visible_tasks()
    if visible:
        lines.extend(render_task(task) for task in visible)
    else:
        lines.append(EMPTY_MESSAGES[store.active_filter])

    if store.total_count() > 0:
        chips = [
            f"{count} {priority.label}"
            for priority, count in store.priority_breakdown().items()
            if count > 0
        ]
        footer = "  ".join(chips + [f"{store.remaining_count()} remaining"])
        if store.has_completed():
            footer += "  (type 'clear' to remove done tasks)"
        lines.extend(["", footer])

    return "\n".join(lines)


def render_stats(store: TaskStore) -> str:
    """Render counts, progress and the outstanding priority breakdown."""
    breakdown = ", ".join(
        f"{priority.value}={count}" for priority, count in store.priority_breakdown().items()
    )
    return "\n".join([
        f"Total: {store.total_count()}",
        f"Completed: {store.completed_count()}",
        f"Remaining: {store.remaining_count()}",
        f"Progress: {store.progress_percent()}%",
        f"Outstanding by priority: {breakdown}",
    ])


# ---- command handlers ----

def cmd_add(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'add' command.

    Args:
        args: Parsed session command
        store: TaskStore instance

    Returns:
        Exit code (0 for success, including ignored empty text)
    """
    if args.priority:
        store.set_pending_priority(args.priority)

    task = store.add_task(" ".join(args.text))
    if task is not None:
        print(f"Task added: #{task.id} {task.text} [{task.priority.value}]")
    return 0


def cmd_toggle(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'toggle' command.

    Returns:
        Exit code (0 for success, 1 if the task doesn't exist)
    """
    store.toggle_task(args.id)
    task = store.get_task(args.id)

    if task is None:
        print(f"Error: Task #{args.id} not found.", file=sys.stderr)
        return 1

    state = "done" if task.completed else "active"
    print(f"Task #{task.id} marked as {state}: {task.text}")
    return 0


def cmd_delete(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'delete' command.

    Returns:
        Exit code (0 for success, 1 if the task doesn't exist)
    """
    existed = store.get_task(args.id) is not None
    store.delete_task(args.id)

    if not existed:
        print(f"Error: Task #{args.id} not found.", file=sys.stderr)
        return 1

    print(f"Task #{args.id} deleted.")
    return 0


def cmd_clear(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'clear' command.

    Returns:
        Exit code (always 0, clearing nothing is not an error)
    """
    removed = store.clear_completed()
    print(f"Cleared {removed} completed task(s).")
    return 0


def cmd_filter(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'filter' command.

    Returns:
        Exit code (0 for success)
    """
    store.set_filter(args.filter)
    print(f"Filter: {store.active_filter.label}")
    return 0


def cmd_priority(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'priority' command.

    Returns:
        Exit code (0 for success)
    """
    store.set_pending_priority(args.priority)
    print(f"New task priority: {store.pending_priority.label}")
    return 0


def cmd_list(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'list' command by printing the board."""
    print(render_board(store))
    return 0


def cmd_stats(args: argparse.Namespace, store: TaskStore) -> int:
    """Handle the 'stats' command."""
    print(render_stats(store))
    return 0


COMMANDS = {
    "add": cmd_add,
    "toggle": cmd_toggle,
    "delete": cmd_delete,
    "clear": cmd_clear,
    "filter": cmd_filter,
    "priority": cmd_priority,
    "list": cmd_list,
    "stats": cmd_stats,
}


def execute(line: str, store: TaskStore, parser: argparse.ArgumentParser) -> Optional[int]:
    """Run one session command line.

    Args:
        line: Raw line typed by the user
        store: TaskStore instance
        parser: Session command parser

    Returns:
        Handler exit code, or None when the line ends the session
    """
    try:
        tokens = shlex.split(line)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not tokens:
        return 0

    try:
        args = parser.parse_args(tokens)
    except SystemExit as exc:
        # argparse has already printed usage to stderr
        return exc.code if isinstance(exc.code, int) else 2

    if args.command in QUIT_COMMANDS:
        return None

    if args.command == "help":
        parser.print_help()
        return 0

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    return handler(args, store)


def run_session(store: TaskStore, stream: TextIO) -> int:
    """Read and run commands from stream until quit or end of input.

    Blank lines and lines starting with "#" are skipped.

    Args:
        store: TaskStore instance
        stream: Text stream to read command lines from

    Returns:
        Exit code (always 0)
    """
    parser = create_parser()
    interactive = stream.isatty()

    print(render_board(store))
    while True:
        if interactive:
            print("tasklist> ", end="", flush=True)

        line = stream.readline()
        if not line:
            break

        line = line.strip()
        if not line or line.startswith("#"):
            continue

        logger.debug("command %r", line)
        if execute(line, store, parser) is None:
            break

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, 2 for invalid settings)
    """
    parser = create_launcher_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.seed is not None:
        overrides["seed_starter_tasks"] = args.seed
    if args.max_length is not None:
        overrides["max_text_length"] = args.max_length
    if args.log_level is not None:
        overrides["log_level"] = args.log_level

    try:
        settings = replace(load_settings(), **overrides)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level)

    if settings.seed_starter_tasks:
        store = TaskStore.with_starter_tasks(max_text_length=settings.max_text_length)
    else:
        store = TaskStore(max_text_length=settings.max_text_length)

    return run_session(store, sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
