from .types import EnvironmentVariable, VariableScope


def _sort_key(name: str) -> str:
    return name.casefold()


def has_changed(current: list[EnvironmentVariable], new: list[EnvironmentVariable]) -> bool:
    """Return True if new differs from current in membership or any field.

    Order does not matter; names are compared case-insensitively.
    """
    if len(current) != len(new):
        return True

    current_by_name = {v.name.casefold(): v for v in current}

    for new_var in new:
        current_var = current_by_name.get(new_var.name.casefold())
        if current_var is None:
            return True

        if (
            current_var.data != new_var.data
            or current_var.type != new_var.type
            or current_var.is_added != new_var.is_added
            or current_var.is_removed != new_var.is_removed
            or current_var.is_volatile != new_var.is_volatile
        ):
            return True

    return False


def sort_variables(variables: list[EnvironmentVariable]) -> list[EnvironmentVariable]:
    return sorted(variables, key=lambda v: _sort_key(v.name))


def find_variable(
    variables: list[EnvironmentVariable],
    name: str,
    scope: VariableScope | None = None,
) -> EnvironmentVariable | None:
    folded = name.casefold()
    for variable in variables:
        if variable.name.casefold() != folded:
            continue
        if scope is not None and variable.scope != scope:
            continue
        return variable
    return None


def find_insertion_index(variables: list[EnvironmentVariable], name: str) -> int:
    key = _sort_key(name)
    for i, variable in enumerate(variables):
        if key < _sort_key(variable.name):
            return i
    return len(variables)
