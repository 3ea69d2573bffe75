#!/usr/bin/env python3
"""
Task Manager CLI - render and edit the task list from a terminal.

Usage:
    taskmanager list [--filter active]    # List tasks
    taskmanager add Buy milk              # Create a task
    taskmanager toggle 3f2a               # Flip completion (id or id prefix)
    taskmanager edit 3f2a Buy oat milk    # Change the description
    taskmanager delete 3f2a               # Remove a task
    taskmanager stats                     # Show counts
    taskmanager serve                     # Run the API server
"""

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from taskmanager.client.api import TaskApi
from taskmanager.client.local_storage import LocalStorage
from taskmanager.client.task_client import FILTERS, TaskClient
from taskmanager.config import ClientConfig
from taskmanager.logging_setup import setup_logging


try:
    __version__ = version("taskmanager")
except PackageNotFoundError:
    # Running from a source checkout that was never installed.
    __version__ = "0+unknown"


# ============================================================================
# Formatting Helpers
# ============================================================================

def _format_task_short(task) -> str:
    """Format task as a one-liner: checkbox, short id, description."""
    mark = "x" if task.is_completed else " "
    return f"[{mark}] {task.id[:8]}  {task.description}"


def _format_header(client) -> str:
    stats = client.stats()
    header = f"{stats['total']} total, {stats['active']} active, {stats['completed']} completed"
    if not client.is_online:
        header += "  (Offline Mode)"
    return header


def _emit_json(data):
    print(json.dumps(data, indent=2))


# ============================================================================
# Commands
# ============================================================================

def cmd_list(args, client, use_json):
    tasks = client.filtered_tasks(args.filter)
    if use_json:
        _emit_json({
            "online": client.is_online,
            "tasks": [t.to_dict() for t in tasks],
        })
        return 0

    print(_format_header(client))
    if client.error:
        print(f"! {client.error}")
    if not tasks:
        print("No tasks found")
        return 0
    for task in tasks:
        print(f"  {_format_task_short(task)}")
    return 0


def cmd_add(args, client, use_json):
    description = " ".join(args.description)
    task = client.add_task(description)
    if task is None:
        print("✗ Description is required", file=sys.stderr)
        return 1
    if use_json:
        _emit_json({"online": client.is_online, "task": task.to_dict()})
    else:
        print(f"✓ Added {_format_task_short(task)}")
    return 0


def cmd_toggle(args, client, use_json):
    task = client.toggle_task_completion(client.resolve_id(args.task_id))
    if use_json:
        _emit_json({"online": client.is_online, "task": task.to_dict()})
    else:
        print(f"✓ {_format_task_short(task)}")
    return 0


def cmd_edit(args, client, use_json):
    task = client.edit_task(client.resolve_id(args.task_id), " ".join(args.description))
    if use_json:
        _emit_json({"online": client.is_online, "task": task.to_dict()})
    else:
        print(f"✓ Updated {_format_task_short(task)}")
    return 0


def cmd_delete(args, client, use_json):
    task_id = client.resolve_id(args.task_id)
    client.delete_task(task_id)
    if use_json:
        _emit_json({"online": client.is_online, "deleted": task_id})
    else:
        print(f"✓ Deleted {task_id[:8]}")
    return 0


def cmd_stats(args, client, use_json):
    if use_json:
        _emit_json(dict(client.stats(), online=client.is_online))
    else:
        print(_format_header(client))
    return 0


def cmd_serve(args):
    from taskmanager.app import run

    run(host=args.host, port=args.port)
    return 0


COMMANDS = {
    "list": cmd_list,
    "add": cmd_add,
    "toggle": cmd_toggle,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "stats": cmd_stats,
}


# ============================================================================
# Main CLI
# ============================================================================

def build_parser():
    parser = argparse.ArgumentParser(
        prog="taskmanager",
        description="Task Manager - a tiny task list with an offline-capable client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"taskmanager {__version__}")
    parser.add_argument("--api-url", default=ClientConfig.API_URL, help="Base URL of the tasks API")
    parser.add_argument("--cache-file", default=ClientConfig.CACHE_FILE, help="Local storage file")
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command")

    list_p = subparsers.add_parser("list", help="List tasks")
    list_p.add_argument("--filter", "-f", choices=FILTERS, default="all")

    add_p = subparsers.add_parser("add", help="Create a task")
    add_p.add_argument("description", nargs="+")

    toggle_p = subparsers.add_parser("toggle", help="Toggle task completion")
    toggle_p.add_argument("task_id", help="Task ID or unique prefix")

    edit_p = subparsers.add_parser("edit", help="Change a task's description")
    edit_p.add_argument("task_id", help="Task ID or unique prefix")
    edit_p.add_argument("description", nargs="+")

    delete_p = subparsers.add_parser("delete", help="Delete a task")
    delete_p.add_argument("task_id", help="Task ID or unique prefix")

    subparsers.add_parser("stats", help="Show task counts")

    serve_p = subparsers.add_parser("serve", help="Run the API server")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    return parser


def main(argv=None, session=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "serve":
        setup_logging(logging.INFO, verbose=args.verbose)
        return cmd_serve(args)

    setup_logging(verbose=args.verbose)
    client = TaskClient(
        TaskApi(base_url=args.api_url, session=session),
        LocalStorage(args.cache_file),
    )

    try:
        # Start from the server's view when reachable; the cache otherwise.
        client.fetch_tasks()
        return COMMANDS[args.command](args, client, args.json)
    except KeyError as e:
        print(f"✗ {e.args[0]}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
