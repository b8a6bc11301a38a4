"""Variable model and the pure operations over lists of variables.

EditSession lives in winenvedit.core.session and is not re-exported here:
it depends on profile and clipboard code that itself imports this package.
"""

from .builder import EnvironmentVariableBuilder
from .management import AddOrUpdateResult
from .types import EnvironmentVariable, RegistryValueKind, VariableScope

__all__ = [
    "EnvironmentVariableBuilder",
    "AddOrUpdateResult",
    "EnvironmentVariable",
    "RegistryValueKind",
    "VariableScope",
]
