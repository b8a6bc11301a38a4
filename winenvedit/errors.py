"""Exceptions raised by winenvedit."""


class WinEnvEditError(Exception):
    """Base class for all winenvedit errors."""


class ValidationError(WinEnvEditError, ValueError):
    """A variable name or value failed validation."""


class VariableNotFoundError(WinEnvEditError, KeyError):
    def __init__(self, name: str, scope: str | None = None):
        self.name = name
        self.scope = scope
        where = f" in {scope} scope" if scope else ""
        super().__init__(f"Variable not found: {name}{where}")

    def __str__(self) -> str:
        return self.args[0]


class VolatileVariableError(WinEnvEditError):
    """Volatile variables are read-only."""


class SessionStateError(WinEnvEditError):
    """The edit session holds an incoherent combination of edit flags."""


class ProfileFormatError(WinEnvEditError):
    """A profile file could not be parsed."""


class StoreError(WinEnvEditError):
    """Loading from or saving to a store failed."""
