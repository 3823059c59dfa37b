"""Registry of in-flight summarization tasks, keyed by operation id.

Lets a host abandon an operation (e.g. the result view was closed) without
holding a reference to the orchestrator that launched it.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

_tasks: dict[str, asyncio.Task] = {}


def register_task(key: str, task: asyncio.Task) -> None:
    """Register a running task under key, replacing any previous entry."""
    _tasks[key] = task


def unregister_task(key: str, task: asyncio.Task | None = None) -> None:
    """
    Remove the task registered under key.

    When task is given, the entry is only removed if it still points at that
    task, so a finished operation cannot unregister its successor.
    """
    current = _tasks.get(key)
    if current is None:
        return
    if task is not None and current is not task:
        return
    del _tasks[key]


def cancel_task(key: str) -> bool:
    """Cancel the task registered under key. Returns True if a task was cancelled."""
    task = _tasks.pop(key, None)
    if task is None or task.done():
        return False
    logger.info(f"Cancelling task {key}")
    task.cancel()
    return True


def get_task(key: str) -> asyncio.Task | None:
    return _tasks.get(key)


__all__ = ["register_task", "unregister_task", "cancel_task", "get_task"]
