import logging
import os
from pathlib import Path
from typing import Iterable, Mapping

from ..core.collection import sort_variables
from ..core.types import EnvironmentVariable, RegistryValueKind, VariableScope
from ..errors import StoreError
from ..profile import export_to_file, import_from_file
from .base import apply_changes

logger = logging.getLogger(__name__)


class TomlProfileStore:
    """Persists variables to a TOML profile file.

    With ``include_process_environment`` set, variables of the running
    process that the profile does not define are reported as volatile
    System variables, the way Windows shows values that only exist in the
    current environment block.
    """

    def __init__(
        self,
        path: Path,
        include_process_environment: bool = False,
        environ: Mapping[str, str] | None = None,
    ):
        self.path = Path(path)
        self.include_process_environment = include_process_environment
        self.environ = environ if environ is not None else os.environ

    def _read(self) -> list[EnvironmentVariable]:
        if not self.path.exists():
            logger.info(f"Profile {self.path} does not exist, starting empty")
            return []
        try:
            return import_from_file(self.path)
        except OSError as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e

    def _process_variables(self, persisted: list[EnvironmentVariable]) -> list[EnvironmentVariable]:
        known = {v.name.casefold() for v in persisted}
        return [
            EnvironmentVariable(
                name=name,
                data=value,
                scope=VariableScope.SYSTEM,
                type=RegistryValueKind.STRING,
                is_volatile=True,
            )
            for name, value in self.environ.items()
            if name and name.casefold() not in known
        ]

    def load(self) -> list[EnvironmentVariable]:
        variables = self._read()
        if self.include_process_environment:
            variables = variables + self._process_variables(variables)
        logger.info(f"Loaded {len(variables)} variable(s) from {self.path}")
        return sort_variables(variables)

    def save(self, changes: Iterable[EnvironmentVariable]) -> None:
        changes = list(changes)
        if not changes:
            return

        merged = apply_changes(self._read(), changes)
        try:
            export_to_file(self.path, merged)
        except OSError as e:
            raise StoreError(f"Failed to write {self.path}: {e}") from e
        logger.info(f"Saved {len(changes)} change(s) to {self.path}")
