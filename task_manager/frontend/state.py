"""
UI state for the task board.

The whole board is described by one immutable ``UIState`` value. The
only way to change it is ``reduce(state, action)``, which returns a new
state. Actions are small frozen dataclasses; ``UIState.to_dict`` gives a
JSON-friendly snapshot.

Form lifecycle::

    idle --open create/edit--> open --submit--> submitting --ok--> idle
                                 ^                   |
                                 +------failed-------+

List fetches carry a sequence token. A response whose token is not the
latest issued one is stale and ignored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any

FETCH_ERROR = "Failed to fetch tasks. Please try again."


class FormPhase(str, Enum):
    IDLE = "idle"
    OPEN = "open"
    SUBMITTING = "submitting"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class TaskFilters:
    """Search and status constraints; combined with logical AND."""

    search: str = ""
    status: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.search.strip() or self.status)

    def to_params(self) -> dict[str, str]:
        """Return the query parameters for a list request."""
        params = {}
        if self.search.strip():
            params["search"] = self.search.strip()
        if self.status:
            params["status"] = self.status
        return params


@dataclass(frozen=True)
class FormState:
    phase: FormPhase = FormPhase.IDLE
    mode: FormMode | None = None
    task: dict[str, Any] | None = None
    error: str | None = None


@dataclass(frozen=True)
class UIState:
    """Complete, serialisable state of the task board."""

    tasks: tuple[dict[str, Any], ...] = ()
    loading: bool = False
    error: str | None = None
    filters: TaskFilters = field(default_factory=TaskFilters)
    search_input: str = ""
    form: FormState = field(default_factory=FormState)
    pending_delete_id: int | None = None
    fetch_seq: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tasks"] = list(self.tasks)
        data["form"]["phase"] = self.form.phase.value
        data["form"]["mode"] = self.form.mode.value if self.form.mode else None
        return data


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchStarted:
    seq: int


@dataclass(frozen=True)
class FetchSucceeded:
    seq: int
    tasks: tuple[dict[str, Any], ...]


@dataclass(frozen=True)
class FetchFailed:
    seq: int
    message: str = FETCH_ERROR


@dataclass(frozen=True)
class OpenCreateForm:
    pass


@dataclass(frozen=True)
class OpenEditForm:
    task: dict[str, Any]


@dataclass(frozen=True)
class CloseForm:
    pass


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class SearchInputChanged:
    text: str


@dataclass(frozen=True)
class FiltersChanged:
    filters: TaskFilters


@dataclass(frozen=True)
class DeleteRequested:
    task_id: int


@dataclass(frozen=True)
class DeleteCancelled:
    pass


@dataclass(frozen=True)
class OperationFailed:
    message: str


@dataclass(frozen=True)
class ErrorDismissed:
    pass


Action = (
    FetchStarted | FetchSucceeded | FetchFailed
    | OpenCreateForm | OpenEditForm | CloseForm
    | SubmitStarted | SubmitSucceeded | SubmitFailed
    | SearchInputChanged | FiltersChanged
    | DeleteRequested | DeleteCancelled
    | OperationFailed | ErrorDismissed
)


def reduce(state: UIState, action: Action) -> UIState:
    """
    Apply *action* to *state* and return the new state.

    Actions that make no sense in the current state (submitting while
    the form is closed, a stale fetch result) leave the state unchanged.
    """
    if isinstance(action, FetchStarted):
        return replace(state, loading=True, error=None, fetch_seq=action.seq)

    if isinstance(action, FetchSucceeded):
        if action.seq != state.fetch_seq:
            return state
        return replace(state, loading=False, tasks=tuple(action.tasks))

    if isinstance(action, FetchFailed):
        if action.seq != state.fetch_seq:
            return state
        return replace(state, loading=False, error=action.message)

    if isinstance(action, OpenCreateForm):
        return replace(state, form=FormState(phase=FormPhase.OPEN, mode=FormMode.CREATE))

    if isinstance(action, OpenEditForm):
        return replace(
            state,
            form=FormState(phase=FormPhase.OPEN, mode=FormMode.EDIT, task=dict(action.task)),
        )

    if isinstance(action, CloseForm):
        if state.form.phase is FormPhase.SUBMITTING:
            return state
        return replace(state, form=FormState())

    if isinstance(action, SubmitStarted):
        if state.form.phase is not FormPhase.OPEN:
            return state
        return replace(state, form=replace(state.form, phase=FormPhase.SUBMITTING, error=None))

    if isinstance(action, SubmitSucceeded):
        if state.form.phase is not FormPhase.SUBMITTING:
            return state
        return replace(state, form=FormState())

    if isinstance(action, SubmitFailed):
        if state.form.phase is not FormPhase.SUBMITTING:
            return state
        return replace(
            state,
            error=action.message,
            form=replace(state.form, phase=FormPhase.OPEN, error=action.message),
        )

    if isinstance(action, SearchInputChanged):
        return replace(state, search_input=action.text)

    if isinstance(action, FiltersChanged):
        return replace(state, filters=action.filters, search_input=action.filters.search)

    if isinstance(action, DeleteRequested):
        return replace(state, pending_delete_id=action.task_id)

    if isinstance(action, DeleteCancelled):
        return replace(state, pending_delete_id=None)

    if isinstance(action, OperationFailed):
        return replace(state, error=action.message)

    if isinstance(action, ErrorDismissed):
        return replace(state, error=None)

    raise TypeError(f"Unknown action: {action!r}")
