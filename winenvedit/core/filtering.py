from .types import EnvironmentVariable


def filter_variables(
    variables: list[EnvironmentVariable],
    search_text: str | None = None,
    show_volatile: bool = False,
    include_removed: bool = False,
) -> list[EnvironmentVariable]:
    """Filter variables by search text and edit flags.

    The search is a case-insensitive substring match against both the name
    and the value. Removed and volatile variables are hidden unless asked for.
    """
    search = (search_text or "").strip().casefold()

    result = []
    for variable in variables:
        if variable.is_removed and not include_removed:
            continue
        if variable.is_volatile and not show_volatile:
            continue
        if search:
            if search not in variable.name.casefold() and search not in variable.data.casefold():
                continue
        result.append(variable)
    return result
