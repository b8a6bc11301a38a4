"""The boundary between an edit session and wherever variables live.

A store hands out variables with every edit flag cleared and takes back the
changed variables of a session: removed ones are deleted, everything else is
created or overwritten. Volatile variables are never persisted.
"""

from typing import Iterable, Protocol

from ..core.collection import sort_variables
from ..core.types import EnvironmentVariable


class EnvironmentStore(Protocol):
    def load(self) -> list[EnvironmentVariable]:
        ...

    def save(self, changes: Iterable[EnvironmentVariable]) -> None:
        ...


def apply_changes(
    current: Iterable[EnvironmentVariable],
    changes: Iterable[EnvironmentVariable],
) -> list[EnvironmentVariable]:
    """Merge session changes into persisted variables.

    Returns the new persisted list, sorted by name, with edit flags cleared.
    """
    by_key = {v.key: v.clone() for v in current if not v.is_volatile}

    for change in changes:
        if change.is_volatile:
            continue
        if change.is_removed:
            by_key.pop(change.key, None)
            continue
        by_key[change.key] = EnvironmentVariable(
            name=change.name,
            data=change.data,
            type=change.type,
            scope=change.scope,
        )

    return sort_variables(list(by_key.values()))
