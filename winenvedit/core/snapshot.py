from dataclasses import dataclass
from typing import Iterable

from .collection import sort_variables
from .types import EnvironmentVariable, RegistryValueKind, VariableScope


@dataclass(frozen=True)
class SnapshotEntry:
    name: str
    data: str
    type: RegistryValueKind
    scope: VariableScope


class StateSnapshot:
    """Tracks dirty state by comparing variables against a captured baseline.

    The baseline holds what the store last reported: variables that are
    neither removed nor volatile, keyed by scope and case-insensitive name.
    """

    def __init__(self):
        self._entries: dict[tuple[VariableScope, str], SnapshotEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, variable: EnvironmentVariable) -> bool:
        return variable.key in self._entries

    def capture(self, variables: Iterable[EnvironmentVariable]) -> None:
        self._entries = {
            v.key: SnapshotEntry(v.name, v.data, v.type, v.scope)
            for v in variables
            if not v.is_removed and not v.is_volatile
        }

    def is_dirty(self, variables: Iterable[EnvironmentVariable]) -> bool:
        for _ in self._iter_changed(variables):
            return True
        return False

    def get_changed_variables(self, variables: Iterable[EnvironmentVariable]) -> list[EnvironmentVariable]:
        """Return the variables that must be handed to the store on save."""
        return list(self._iter_changed(variables))

    def _iter_changed(self, variables: Iterable[EnvironmentVariable]):
        for variable in variables:
            if variable.is_volatile:
                continue

            if variable.is_removed:
                # Removing something the store never had is not a change
                if variable.key in self._entries:
                    yield variable
                continue

            if variable.is_added:
                yield variable
                continue

            entry = self._entries.get(variable.key)
            if entry is not None and self.has_changed(variable, entry):
                yield variable

    def reconcile(self, variables: Iterable[EnvironmentVariable]) -> list[EnvironmentVariable]:
        """Realign edit flags with the baseline after an undo or redo.

        History records carry the flags a variable had when the step was
        recorded, which go stale once a save moves the baseline. Variables
        the baseline lacks become added, baseline variables missing from
        ``variables`` come back marked removed, and removals of variables
        the baseline never had are dropped.
        """
        result = []
        seen = set()
        for variable in variables:
            if variable.is_volatile:
                result.append(variable)
                continue

            known = variable.key in self._entries
            if variable.is_removed and not known:
                continue

            variable.is_added = not known and not variable.is_removed
            if known:
                seen.add(variable.key)
            result.append(variable)

        for key, entry in self._entries.items():
            if key not in seen:
                result.append(EnvironmentVariable(
                    name=entry.name,
                    data=entry.data,
                    type=entry.type,
                    scope=entry.scope,
                    is_removed=True,
                ))

        return sort_variables(result)

    @staticmethod
    def has_changed(variable: EnvironmentVariable, entry: SnapshotEntry) -> bool:
        # Name compared case-sensitively: a rename that only changes case counts
        return (
            variable.name != entry.name
            or variable.data != entry.data
            or variable.type != entry.type
        )
