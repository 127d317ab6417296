"""
Task board controller.

``TaskBoard`` is the frontend's event loop glue: UI events come in as
method calls, API calls go out through ``TaskApiClient``, and every
outcome is folded into ``UIState`` through ``reduce``. The board never
edits its task list locally; each successful mutation is followed by a
full re-fetch with the current filters.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from typing import Any

import requests

from task_manager.frontend.client import ApiError, TaskApiClient
from task_manager.frontend.debounce import SearchDebouncer
from task_manager.frontend.state import (
    Action,
    CloseForm,
    DeleteCancelled,
    DeleteRequested,
    ErrorDismissed,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    FiltersChanged,
    FormMode,
    FormPhase,
    OpenCreateForm,
    OpenEditForm,
    OperationFailed,
    SearchInputChanged,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    TaskFilters,
    UIState,
    reduce,
)

logger = logging.getLogger(__name__)

STATUSES = ("pending", "in-progress", "completed")

# Failures the board reports as a banner instead of raising
REQUEST_ERRORS = (ApiError, requests.RequestException)


class TaskBoard:
    """
    Drive the task list, filters and edit form against the API.

    Args:
        client: API client used for every request.
        debouncer: Timer holding the pending search text.
    """

    def __init__(self, client: TaskApiClient, debouncer: SearchDebouncer | None = None):
        self.client = client
        self.debouncer = debouncer or SearchDebouncer()
        self.state = UIState()
        self._seq = itertools.count(1)

    def dispatch(self, action: Action) -> UIState:
        self.state = reduce(self.state, action)
        return self.state

    # -------------------------------------------------------------------------
    # List and filters
    # -------------------------------------------------------------------------

    def fetch_tasks(self) -> UIState:
        """Re-fetch the list with the current filters."""
        seq = next(self._seq)
        self.dispatch(FetchStarted(seq))
        try:
            tasks = self.client.get_tasks(self.state.filters.to_params())
        except REQUEST_ERRORS:
            logger.exception("Error fetching tasks")
            return self.dispatch(FetchFailed(seq))
        return self.dispatch(FetchSucceeded(seq, tuple(tasks)))

    def set_search(self, text: str) -> UIState:
        """
        Record search input; the fetch happens once the debounce delay passes.

        Clearing the search re-fetches immediately.
        """
        self.dispatch(SearchInputChanged(text))
        if not text.strip():
            self.debouncer.cancel()
            self.dispatch(FiltersChanged(TaskFilters(search="", status=self.state.filters.status)))
            return self.fetch_tasks()
        self.debouncer.schedule(text)
        return self.state

    def set_status_filter(self, status: str) -> UIState:
        """Apply a status filter and re-fetch immediately."""
        self.debouncer.cancel()
        filters = TaskFilters(search=self.state.search_input, status=status)
        self.dispatch(FiltersChanged(filters))
        return self.fetch_tasks()

    def clear_filters(self) -> UIState:
        self.debouncer.cancel()
        self.dispatch(FiltersChanged(TaskFilters()))
        return self.fetch_tasks()

    def tick(self) -> UIState:
        """Fire the pending search if its delay has elapsed."""
        pending = self.debouncer.poll()
        if pending is None:
            return self.state
        filters = TaskFilters(search=pending.value, status=self.state.filters.status)
        self.dispatch(FiltersChanged(filters))
        return self.fetch_tasks()

    # -------------------------------------------------------------------------
    # Create / edit form
    # -------------------------------------------------------------------------

    def open_create(self) -> UIState:
        return self.dispatch(OpenCreateForm())

    def open_edit(self, task: dict[str, Any]) -> UIState:
        return self.dispatch(OpenEditForm(task))

    def close_form(self) -> UIState:
        return self.dispatch(CloseForm())

    def submit(self, data: dict[str, Any]) -> UIState:
        """
        Submit the open form.

        Creates a task in create mode and updates the preloaded task in
        edit mode. On success the form closes and the list is re-fetched;
        on failure the form stays open with the error shown.
        """
        form = self.state.form
        if form.phase is not FormPhase.OPEN:
            return self.state

        self.dispatch(SubmitStarted())
        try:
            if form.mode is FormMode.EDIT:
                self.client.update_task(form.task["id"], data)
            else:
                self.client.create_task(data)
        except REQUEST_ERRORS as exc:
            verb = "update" if form.mode is FormMode.EDIT else "create"
            logger.exception("Error trying to %s task", verb)
            return self.dispatch(SubmitFailed(_failure_message(exc, f"Failed to {verb} task.")))

        self.dispatch(SubmitSucceeded())
        return self.fetch_tasks()

    # -------------------------------------------------------------------------
    # Delete and status changes
    # -------------------------------------------------------------------------

    def request_delete(self, task_id: int) -> UIState:
        """Ask for confirmation; nothing is deleted until ``confirm_delete``."""
        return self.dispatch(DeleteRequested(task_id))

    def cancel_delete(self) -> UIState:
        return self.dispatch(DeleteCancelled())

    def confirm_delete(self) -> UIState:
        task_id = self.state.pending_delete_id
        if task_id is None:
            return self.state

        self.dispatch(DeleteCancelled())
        try:
            self.client.delete_task(task_id)
        except REQUEST_ERRORS as exc:
            logger.exception("Error deleting task %s", task_id)
            return self.dispatch(OperationFailed(_failure_message(exc, "Failed to delete task.")))
        return self.fetch_tasks()

    def change_status(self, task_id: int, status: str) -> UIState:
        try:
            self.client.update_task_status(task_id, status)
        except REQUEST_ERRORS as exc:
            logger.exception("Error updating status of task %s", task_id)
            return self.dispatch(
                OperationFailed(_failure_message(exc, "Failed to update task status."))
            )
        return self.fetch_tasks()

    def dismiss_error(self) -> UIState:
        return self.dispatch(ErrorDismissed())

    def status_counts(self) -> dict[str, int]:
        """Count the loaded tasks per status."""
        counts = Counter(task.get("status") for task in self.state.tasks)
        return {status: counts.get(status, 0) for status in STATUSES}


def _failure_message(exc: Exception, prefix: str) -> str:
    """Banner text for a failed request; API messages are shown when present."""
    if isinstance(exc, ApiError) and exc.status_code < 500:
        return f"{prefix} {exc.message}"
    return f"{prefix} Please try again."
