"""Edit operations on a list of variables.

All functions mutate the list (and the variables in it) in place. A variable
that was added during the session is dropped outright when it is removed, so
no variable is ever flagged both added and removed.
"""

import logging
from enum import Enum

from .collection import find_insertion_index
from .types import EnvironmentVariable, RegistryValueKind, VariableScope

logger = logging.getLogger(__name__)


class AddOrUpdateResult(Enum):
    NO_ACTION = "no_action"
    UPDATED = "updated"
    RESTORED = "restored"
    ADDED = "added"


def _matching(variables: list[EnvironmentVariable], name: str, scope: VariableScope, removed: bool):
    folded = name.casefold()
    for variable in variables:
        if (
            variable.scope == scope
            and variable.is_removed == removed
            and variable.name.casefold() == folded
        ):
            return variable
    return None


def add_or_update_variable(
    variables: list[EnvironmentVariable],
    name: str,
    value: str,
    type_: RegistryValueKind = RegistryValueKind.STRING,
    scope: VariableScope = VariableScope.USER,
) -> tuple[AddOrUpdateResult, EnvironmentVariable | None]:
    """Add a new variable, update an active one, or restore a removed one.

    Updates and restores keep the existing variable's type; only new
    variables take ``type_``. Volatile variables are never touched.
    """
    active = _matching(variables, name, scope, removed=False)
    if active is not None:
        if active.is_volatile or active.data == value:
            return AddOrUpdateResult.NO_ACTION, None

        active.data = value
        logger.debug(f"Updated {scope} variable {active.name}")
        return AddOrUpdateResult.UPDATED, active

    removed = _matching(variables, name, scope, removed=True)
    if removed is not None:
        removed.is_removed = False
        removed.data = value
        logger.debug(f"Restored {scope} variable {removed.name}")
        return AddOrUpdateResult.RESTORED, removed

    new_variable = EnvironmentVariable(
        name=name,
        data=value,
        scope=scope,
        type=type_,
        is_added=True,
    )
    variables.insert(find_insertion_index(variables, name), new_variable)
    logger.debug(f"Added {scope} variable {name}")
    return AddOrUpdateResult.ADDED, new_variable


def remove_variable(variables: list[EnvironmentVariable], variable: EnvironmentVariable) -> bool:
    """Remove a variable, or mark it removed if it exists in the store.

    Returns True if the variable was dropped from the list, False if it was
    only marked.
    """
    if variable.is_added:
        for i, candidate in enumerate(variables):
            if candidate is variable:
                del variables[i]
                return True
        return False

    variable.is_removed = True
    return False


def remove_variables_not_in(
    variables: list[EnvironmentVariable],
    names_to_keep: set[str],
    scope: VariableScope | None = None,
) -> int:
    """Remove every active, non-volatile variable whose name is not kept.

    Names are matched case-insensitively. Returns how many were removed.
    """
    keep = {name.casefold() for name in names_to_keep}
    candidates = [
        v for v in variables
        if not v.is_removed
        and not v.is_volatile
        and (scope is None or v.scope == scope)
    ]

    count = 0
    for variable in candidates:
        if variable.name.casefold() not in keep:
            remove_variable(variables, variable)
            count += 1
    return count


def cleanup_after_save(variables: list[EnvironmentVariable]) -> int:
    """Drop variables marked removed and clear the added flag on the rest."""
    removed_count = 0
    for i in range(len(variables) - 1, -1, -1):
        if variables[i].is_removed:
            del variables[i]
            removed_count += 1
        else:
            variables[i].is_added = False
    return removed_count
