"""Edit sessions over an environment store.

An EditSession loads variables from a store, applies edits in memory while
tracking what changed, and hands only the changed variables back to the
store on save:

    session = EditSession(store)
    session.load()
    session.add_or_update("EDITOR", "code")
    session.remove("TEMP_DIR", VariableScope.USER)
    session.undo()
    changes = session.save()

Every edit is recorded in an undo/redo history. The session also guarantees
that no variable is ever flagged both added and removed: removing a variable
that was added in the same session drops it from the session instead.
"""

import logging
from pathlib import Path
from typing import Iterable

from ..errors import SessionStateError, ValidationError, VariableNotFoundError, VolatileVariableError
from ..profile import export_to_file
from ..utils.clipboard import format_lines, parse_multi_line
from ..utils.paths import PATH_SEPARATOR, join_path_list, reconcile_path_lists, split_path_list
from .collection import find_variable, sort_variables
from .filtering import filter_variables
from .history import DEFAULT_MAX_DEPTH, UndoRedoHistory
from .management import (
    AddOrUpdateResult,
    add_or_update_variable,
    cleanup_after_save,
    remove_variable,
    remove_variables_not_in,
)
from .snapshot import StateSnapshot
from .types import EnvironmentVariable, RegistryValueKind, VariableScope
from .validation import validate_for_add

logger = logging.getLogger(__name__)


class EditSession:
    def __init__(self, store, max_history: int = DEFAULT_MAX_DEPTH):
        self.store = store
        self.variables: list[EnvironmentVariable] = []
        self.snapshot = StateSnapshot()
        self.history = UndoRedoHistory(max_depth=max_history)

    def load(self) -> None:
        """(Re)load from the store, discarding pending edits and history."""
        self.variables = sort_variables(self.store.load())
        self.snapshot.capture(self.variables)
        self.history.reset(self.variables)
        logger.info(f"Session loaded {len(self.variables)} variable(s)")

    def scope_variables(self, scope: VariableScope) -> list[EnvironmentVariable]:
        return [v for v in self.variables if v.scope == scope]

    @property
    def is_dirty(self) -> bool:
        return self.snapshot.is_dirty(self.variables)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def changed_variables(self) -> list[EnvironmentVariable]:
        return self.snapshot.get_changed_variables(self.variables)

    def find(self, name: str, scope: VariableScope | None = None) -> EnvironmentVariable | None:
        return find_variable(self.variables, name, scope)

    def _active(self, name: str, scope: VariableScope) -> EnvironmentVariable | None:
        folded = name.casefold()
        for variable in self.variables:
            if variable.scope == scope and not variable.is_removed and variable.name.casefold() == folded:
                return variable
        return None

    def check_consistency(self) -> None:
        for variable in self.variables:
            if variable.is_added and variable.is_removed:
                raise SessionStateError(
                    f"{variable.scope} variable {variable.name} is flagged both added and removed"
                )

    def _record(self) -> None:
        self.check_consistency()
        self.history.push_state(self.variables)

    def _add_or_update(
        self,
        name: str,
        value: str,
        type_: RegistryValueKind,
        scope: VariableScope,
    ) -> tuple[AddOrUpdateResult, EnvironmentVariable | None]:
        is_valid, message = validate_for_add(name, value)
        if not is_valid:
            raise ValidationError(f"Invalid variable {name!r}: {message}")
        return add_or_update_variable(self.variables, name, value, type_, scope)

    def add_or_update(
        self,
        name: str,
        value: str,
        type_: RegistryValueKind = RegistryValueKind.STRING,
        scope: VariableScope = VariableScope.USER,
    ) -> tuple[AddOrUpdateResult, EnvironmentVariable | None]:
        """Add, update or restore one variable.

        Raises:
            ValidationError: if the name or value breaks a validation rule.
        """
        result = self._add_or_update(name, value, type_, scope)
        self._record()
        return result

    def remove(self, name: str, scope: VariableScope) -> bool:
        """Remove an active variable.

        Returns True if it was dropped (it had been added in this session),
        False if it was marked for deletion on save.
        """
        variable = self._active(name, scope)
        if variable is None:
            raise VariableNotFoundError(name, scope.value)
        if variable.is_volatile:
            raise VolatileVariableError(f"{variable.name} is volatile and cannot be removed")

        dropped = remove_variable(self.variables, variable)
        self._record()
        return dropped

    def path_entries(self, name: str, scope: VariableScope) -> list[str]:
        variable = self._active(name, scope)
        if variable is None:
            raise VariableNotFoundError(name, scope.value)
        return split_path_list(variable.data)

    def set_path_entries(
        self,
        name: str,
        entries: Iterable[str],
        scope: VariableScope,
    ) -> tuple[AddOrUpdateResult, tuple[list[tuple[int, str]], list[str], int]]:
        """Replace the entries of a semicolon-separated list variable.

        A missing variable is created, as ExpandString when an entry refers
        to another variable. Returns the add/update result together with
        the per-position edits from ``reconcile_path_lists``.
        """
        entries = [e.strip() for e in entries if e.strip()]
        for entry in entries:
            if PATH_SEPARATOR in entry:
                raise ValidationError(f"Path entry cannot contain '{PATH_SEPARATOR}': {entry}")

        variable = self._active(name, scope)
        if variable is not None and variable.is_volatile:
            raise VolatileVariableError(f"{variable.name} is volatile and cannot be edited")

        current = split_path_list(variable.data) if variable is not None else []
        type_ = RegistryValueKind.EXPAND_STRING if any("%" in e for e in entries) else RegistryValueKind.STRING
        result, _ = self.add_or_update(
            variable.name if variable is not None else name,
            join_path_list(entries),
            type_,
            scope,
        )

        edits = reconcile_path_lists(current, entries)
        logger.debug(
            f"{name}: {len(edits[0])} entries changed, {len(edits[1])} appended, {edits[2]} dropped"
        )
        return result, edits

    def filter(
        self,
        search_text: str | None = None,
        scope: VariableScope | None = None,
        show_volatile: bool = False,
        include_removed: bool = False,
    ) -> list[EnvironmentVariable]:
        variables = self.variables if scope is None else self.scope_variables(scope)
        return filter_variables(variables, search_text, show_volatile, include_removed)

    def paste(self, text: str, scope: VariableScope = VariableScope.USER) -> list[AddOrUpdateResult]:
        """Apply ``NAME=value`` lines as one undoable edit.

        Pasted text carries no type information, so new variables are plain
        strings and existing ones keep their type. Lines that fail
        validation are skipped.
        """
        results = []
        for name, value in parse_multi_line(text):
            try:
                result, _ = self._add_or_update(name, value, RegistryValueKind.STRING, scope)
            except ValidationError as e:
                logger.warning(f"Skipping pasted line: {e}")
                continue
            results.append(result)
        self._record()
        return results

    def copy_text(self, scope: VariableScope | None = None, search_text: str | None = None) -> str:
        return format_lines(self.filter(search_text, scope))

    def import_variables(self, imported: Iterable[EnvironmentVariable]) -> None:
        """Make the session match imported variables, scope by scope.

        Variables missing from the import are removed, the rest are added or
        updated. Volatile variables are left alone.
        """
        imported = list(imported)
        for variable in imported:
            is_valid, message = validate_for_add(variable.name, variable.data)
            if not is_valid:
                raise ValidationError(f"Invalid imported variable {variable.name!r}: {message}")

        for scope in VariableScope:
            names = {v.name for v in imported if v.scope == scope}
            remove_variables_not_in(self.variables, names, scope)

        for variable in imported:
            self._add_or_update(variable.name, variable.data, variable.type, variable.scope)

        self._record()
        logger.info(f"Imported {len(imported)} variable(s) into session")

    def export(self, path: Path) -> None:
        export_to_file(path, self.variables)

    def _restore(self, state: list[EnvironmentVariable] | None) -> bool:
        if state is None:
            return False
        # Flags stored in history go stale once a save moves the baseline
        self.variables = self.snapshot.reconcile(state)
        self.history.rebase(self.variables)
        self.check_consistency()
        return True

    def undo(self) -> bool:
        return self._restore(self.history.undo())

    def redo(self) -> bool:
        return self._restore(self.history.redo())

    def save(self) -> list[EnvironmentVariable]:
        """Persist pending changes and return the variables handed to the store."""
        self.check_consistency()
        changes = self.changed_variables()
        if not changes:
            return []

        saved = [v.clone() for v in changes]
        self.store.save(saved)
        cleanup_after_save(self.variables)
        self.snapshot.capture(self.variables)
        self.history.rebase(self.variables)
        logger.info(f"Saved {len(saved)} change(s)")
        return saved
