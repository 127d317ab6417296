"""
Frontend layer for the Task Manager.

Provides the pieces a task-board UI is built from: an HTTP client for
the REST API, an explicit UI state reducer, a search debouncer and the
``TaskBoard`` controller that ties them together. Rendering is left to
whatever UI sits on top.
"""

from config import get_config
from task_manager.frontend.board import TaskBoard
from task_manager.frontend.client import ApiError, TaskApiClient
from task_manager.frontend.debounce import SearchDebouncer


def create_board(config_name: str | None = None) -> TaskBoard:
    """
    Build a ``TaskBoard`` from the environment's configuration.

    Args:
        config_name: Configuration environment name. If None, uses
            the FLASK_ENV environment variable.
    """
    config_class = get_config(config_name)
    client = TaskApiClient(config_class.TASK_API_URL, timeout=config_class.TASK_API_TIMEOUT)
    debouncer = SearchDebouncer(delay=config_class.SEARCH_DEBOUNCE_MS / 1000)
    return TaskBoard(client, debouncer)


__all__ = ["ApiError", "SearchDebouncer", "TaskApiClient", "TaskBoard", "create_board"]
