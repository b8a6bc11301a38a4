"""Delta-based undo/redo history.

Instead of storing a full copy of every state, the history keeps the
difference between consecutive states: which variables were added, removed
or modified. Undo applies the reversed delta, redo applies it again.

Variables marked removed are treated as absent when computing a delta, so
"remove PATH" shows up as a VariableRemoved change. Applying that change
drops a variable that was added in the session and marks any other variable
removed, so a redone removal still reaches the store on save.
"""

import logging
from typing import Iterable, Literal

from pydantic import BaseModel, Field

from .collection import sort_variables
from .types import EnvironmentVariable, RegistryValueKind, VariableScope

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


class VariableDelta(BaseModel):
    scope: VariableScope
    name: str

    @property
    def key(self) -> tuple[VariableScope, str]:
        return (self.scope, self.name.casefold())


class VariableAdded(VariableDelta):
    kind: Literal["added"] = "added"
    data: str
    type: RegistryValueKind
    is_volatile: bool = False
    is_added: bool = False
    is_removed: bool = False


class VariableRemoved(VariableDelta):
    kind: Literal["removed"] = "removed"
    data: str
    type: RegistryValueKind
    is_volatile: bool = False
    is_added: bool = False
    is_removed: bool = False


class VariableModified(VariableDelta):
    kind: Literal["modified"] = "modified"
    old_data: str
    new_data: str
    old_type: RegistryValueKind
    new_type: RegistryValueKind


class StateDelta(BaseModel):
    changes: list[VariableAdded | VariableRemoved | VariableModified] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.changes


def _to_variable(change: VariableAdded | VariableRemoved) -> EnvironmentVariable:
    return EnvironmentVariable(
        name=change.name,
        data=change.data,
        type=change.type,
        scope=change.scope,
        is_volatile=change.is_volatile,
        is_added=change.is_added,
        is_removed=change.is_removed,
    )


def deep_copy(variables: Iterable[EnvironmentVariable]) -> list[EnvironmentVariable]:
    return [v.clone() for v in variables]


def compute_delta(
    from_state: list[EnvironmentVariable],
    to_state: list[EnvironmentVariable],
) -> StateDelta:
    """Compute the changes that turn from_state into to_state.

    Only data and type count as modifications; edit flags are carried along
    on added/removed records but never produce a change on their own.
    """
    from_by_key = {v.key: v for v in from_state if not v.is_removed}
    to_by_key = {v.key: v for v in to_state if not v.is_removed}

    changes = []
    for key, to_var in to_by_key.items():
        from_var = from_by_key.get(key)
        if from_var is None:
            changes.append(VariableAdded(**to_var.model_dump()))
        elif from_var.data != to_var.data or from_var.type != to_var.type:
            changes.append(VariableModified(
                scope=to_var.scope,
                name=to_var.name,
                old_data=from_var.data,
                new_data=to_var.data,
                old_type=from_var.type,
                new_type=to_var.type,
            ))

    for key, from_var in from_by_key.items():
        if key not in to_by_key:
            changes.append(VariableRemoved(**from_var.model_dump()))

    return StateDelta(changes=changes)


def apply_delta(state: list[EnvironmentVariable], delta: StateDelta) -> list[EnvironmentVariable]:
    """Return a new, name-sorted state with delta applied to a copy of state."""
    result = deep_copy(state)

    for change in delta.changes:
        if isinstance(change, VariableAdded):
            result = [v for v in result if v.key != change.key]
            result.append(_to_variable(change))

        elif isinstance(change, VariableRemoved):
            kept = []
            for variable in result:
                if variable.key != change.key:
                    kept.append(variable)
                elif not variable.is_added:
                    variable.is_removed = True
                    kept.append(variable)
            result = kept

        elif isinstance(change, VariableModified):
            for variable in result:
                if variable.key == change.key and not variable.is_removed:
                    variable.data = change.new_data
                    variable.type = change.new_type
                    break

    return sort_variables(result)


def reverse_delta(delta: StateDelta) -> StateDelta:
    reversed_changes = []
    for change in delta.changes:
        if isinstance(change, VariableAdded):
            reversed_changes.append(VariableRemoved(**change.model_dump(exclude={"kind"})))
        elif isinstance(change, VariableRemoved):
            reversed_changes.append(VariableAdded(**change.model_dump(exclude={"kind"})))
        elif isinstance(change, VariableModified):
            reversed_changes.append(VariableModified(
                scope=change.scope,
                name=change.name,
                old_data=change.new_data,
                new_data=change.old_data,
                old_type=change.new_type,
                new_type=change.old_type,
            ))
        else:
            raise TypeError(f"Unknown delta type: {type(change).__name__}")
    return StateDelta(changes=reversed_changes)


class UndoRedoHistory:
    """Bounded undo/redo stacks of state deltas."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self._undo: list[StateDelta] = []
        self._redo: list[StateDelta] = []
        self._current: list[EnvironmentVariable] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def reset(self, variables: Iterable[EnvironmentVariable]) -> None:
        self._undo.clear()
        self._redo.clear()
        self._current = deep_copy(variables)

    def push_state(self, variables: Iterable[EnvironmentVariable]) -> None:
        new_state = deep_copy(variables)
        delta = compute_delta(self._current, new_state)
        if delta.is_empty:
            return

        self._undo.append(delta)
        self._current = new_state

        if len(self._undo) > self.max_depth:
            del self._undo[0]

        self._redo.clear()
        logger.debug(f"Recorded {len(delta.changes)} change(s), undo depth {len(self._undo)}")

    def undo(self) -> list[EnvironmentVariable] | None:
        if not self._undo:
            return None

        delta = self._undo.pop()
        self._redo.append(delta)
        self._current = apply_delta(self._current, reverse_delta(delta))
        return deep_copy(self._current)

    def redo(self) -> list[EnvironmentVariable] | None:
        if not self._redo:
            return None

        delta = self._redo.pop()
        self._undo.append(delta)
        self._current = apply_delta(self._current, delta)
        return deep_copy(self._current)

    def rebase(self, variables: Iterable[EnvironmentVariable]) -> None:
        """Replace the current state without recording a change.

        Used after a save, when edit flags are cleared but nothing was edited.
        """
        self._current = deep_copy(variables)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._current = []
