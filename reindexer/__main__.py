#!/usr/bin/env python3
"""
Entry point to run a named task.

Usage:
    python -m reindexer                     # search.reindex
    python -m reindexer search.reindex
    REINDEX_COLLECTION=widgets,users python -m reindexer search.reindex
    python -m reindexer --list
"""

import argparse
import asyncio
import sys

from .logger import logger
from .tasks import TaskContext, list_tasks, run_task


def main(argv=None) -> int:
    """Run the requested task"""
    parser = argparse.ArgumentParser(description="Run a reindexer task.")
    parser.add_argument(
        "task",
        nargs="?",
        default="search.reindex",
        help="Task to run (default: search.reindex)",
    )
    parser.add_argument(
        "--list", action="store_true", help="List the available tasks and exit"
    )
    args = parser.parse_args(argv)

    if args.list:
        for name in list_tasks():
            print(name)
        return 0

    try:
        asyncio.run(run_task(args.task, TaskContext()))
    except Exception:
        logger.exception(f"Task {args.task} failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
