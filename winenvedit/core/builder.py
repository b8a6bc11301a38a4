from ..errors import ValidationError
from .types import EnvironmentVariable, RegistryValueKind, VariableScope


class EnvironmentVariableBuilder:
    """Fluent construction of EnvironmentVariable instances.

    Every ``with_*`` method returns the builder so calls can be chained:

        EnvironmentVariableBuilder.default().with_name("PATH").with_data("C:\\bin").build()
    """

    def __init__(self):
        self._name = ""
        self._data = ""
        self._scope = VariableScope.USER
        self._type = RegistryValueKind.STRING
        self._is_volatile = False
        self._is_added = False
        self._is_removed = False

    @classmethod
    def default(cls) -> "EnvironmentVariableBuilder":
        return cls()

    def with_name(self, name: str) -> "EnvironmentVariableBuilder":
        self._name = name
        return self

    def with_data(self, data: str) -> "EnvironmentVariableBuilder":
        self._data = data
        return self

    def with_scope(self, scope: VariableScope) -> "EnvironmentVariableBuilder":
        self._scope = scope
        return self

    def with_type(self, type_: RegistryValueKind) -> "EnvironmentVariableBuilder":
        self._type = type_
        return self

    def with_is_volatile(self, is_volatile: bool) -> "EnvironmentVariableBuilder":
        self._is_volatile = is_volatile
        return self

    def with_is_added(self, is_added: bool) -> "EnvironmentVariableBuilder":
        self._is_added = is_added
        return self

    def with_is_removed(self, is_removed: bool) -> "EnvironmentVariableBuilder":
        self._is_removed = is_removed
        return self

    def build(self) -> EnvironmentVariable:
        """Assemble the variable.

        Raises:
            ValidationError: if no name was given, or if the variable would be
                flagged both added and removed.
        """
        if not self._name:
            raise ValidationError("Variable name is required")
        if self._is_added and self._is_removed:
            raise ValidationError(
                f"Variable {self._name} cannot be both added and removed"
            )

        return EnvironmentVariable(
            name=self._name,
            data=self._data,
            scope=self._scope,
            type=self._type,
            is_volatile=self._is_volatile,
            is_added=self._is_added,
            is_removed=self._is_removed,
        )
