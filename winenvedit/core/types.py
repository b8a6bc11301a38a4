from enum import StrEnum

from pydantic import BaseModel, Field


class VariableScope(StrEnum):
    USER = "User"
    SYSTEM = "System"

    @property
    def registry_key(self) -> str:
        if self is VariableScope.USER:
            return r"HKCU\Environment"
        return r"HKLM\SYSTEM\CurrentControlSet\Control\Session Manager\Environment"


class RegistryValueKind(StrEnum):
    """Registry value kinds, labelled the way exported profiles spell them."""

    STRING = "String"
    EXPAND_STRING = "ExpandString"
    MULTI_STRING = "MultiString"
    DWORD = "DWord"
    QWORD = "QWord"
    BINARY = "Binary"
    NONE = "None"
    UNKNOWN = "Unknown"

    @property
    def registry_type(self) -> int:
        return _REGISTRY_TYPES[self]

    @classmethod
    def parse(cls, label: str) -> "RegistryValueKind":
        for kind in cls:
            if kind.value == label:
                return kind
        return cls.STRING


# Matches winreg.REG_* constants
_REGISTRY_TYPES = {
    RegistryValueKind.NONE: 0,
    RegistryValueKind.STRING: 1,
    RegistryValueKind.EXPAND_STRING: 2,
    RegistryValueKind.BINARY: 3,
    RegistryValueKind.DWORD: 4,
    RegistryValueKind.MULTI_STRING: 7,
    RegistryValueKind.QWORD: 11,
    RegistryValueKind.UNKNOWN: -1,
}


class EnvironmentVariable(BaseModel):
    """One environment variable plus its pending edit state.

    ``scope`` is fixed once the variable exists; everything else can be
    assigned directly without validation.
    """

    name: str = ""
    data: str = ""
    type: RegistryValueKind = RegistryValueKind.STRING
    scope: VariableScope = Field(default=VariableScope.USER, frozen=True)
    is_added: bool = False
    is_removed: bool = False
    is_volatile: bool = False

    @property
    def key(self) -> tuple[VariableScope, str]:
        """Identity within a session: scope plus case-insensitive name."""
        return (self.scope, self.name.casefold())

    def clone(self) -> "EnvironmentVariable":
        return self.model_copy()
