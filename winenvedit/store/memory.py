from typing import Iterable

from ..core.types import EnvironmentVariable
from .base import apply_changes


class MemoryStore:
    """Keeps variables in memory. Volatile variables are reported but never replaced."""

    def __init__(self, variables: Iterable[EnvironmentVariable] | None = None):
        variables = list(variables or [])
        self.persisted = [v.clone() for v in variables if not v.is_volatile]
        self.volatile = [v.clone() for v in variables if v.is_volatile]
        self.save_count = 0

    def load(self) -> list[EnvironmentVariable]:
        return [v.clone() for v in self.persisted + self.volatile]

    def save(self, changes: Iterable[EnvironmentVariable]) -> None:
        self.persisted = apply_changes(self.persisted, changes)
        self.save_count += 1
