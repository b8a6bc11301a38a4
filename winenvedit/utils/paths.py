PATH_SEPARATOR = ";"


def split_path_list(path_list: str) -> list[str]:
    """Split a semicolon-delimited PATH value into trimmed, non-empty entries."""
    if not path_list or not path_list.strip():
        return []
    return [p.strip() for p in path_list.split(PATH_SEPARATOR) if p.strip()]


def join_path_list(paths: list[str]) -> str:
    return PATH_SEPARATOR.join(paths)


def reconcile_path_lists(
    current_paths: list[str],
    new_paths: list[str],
) -> tuple[list[tuple[int, str]], list[str], int]:
    """Compute the edits that turn current_paths into new_paths position by position.

    Returns (items_to_update, items_to_add, count_to_remove): ``(index, value)``
    pairs for positions whose value changed, values to append past the end of
    current_paths, and how many trailing entries to drop.
    """
    items_to_update = []
    items_to_add = []

    for i, new_path in enumerate(new_paths):
        if i < len(current_paths):
            if current_paths[i] != new_path:
                items_to_update.append((i, new_path))
        else:
            items_to_add.append(new_path)

    count_to_remove = max(len(current_paths) - len(new_paths), 0)
    return items_to_update, items_to_add, count_to_remove


def contains_path_entry(paths: list[str], entry: str) -> bool:
    folded = entry.strip().casefold()
    return any(p.casefold() == folded for p in paths)


def insert_path_entry(paths: list[str], entry: str, position: int | None = None) -> list[str]:
    """Return a copy of paths with entry inserted at position (default: the end)."""
    result = list(paths)
    if position is None:
        result.append(entry.strip())
    else:
        result.insert(position, entry.strip())
    return result


def remove_path_entry(paths: list[str], entry: str) -> list[str]:
    """Return a copy of paths without any entry equal to entry, ignoring case."""
    folded = entry.strip().casefold()
    return [p for p in paths if p.casefold() != folded]
