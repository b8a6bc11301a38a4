import json
from typing import Any


def format_output(data: Any, output_format: str = "plain") -> str:
    if output_format == "json":
        return json.dumps(data, indent=2)
    return format_plain(data)


def format_plain(data: Any) -> str:
    if data is None:
        return ""

    if isinstance(data, str):
        return data

    if isinstance(data, dict):
        if "error" in data:
            return f"Error: {data['error']}"

        if "valid" in data:
            return format_validation(data)

        if "paths" in data:
            return format_path_entries(data)

        if "saved" in data:
            return format_saved(data)

        if "status" in data:
            return data["status"]

        if "name" in data and "scope" in data:
            return format_variables([data])

        return json.dumps(data, indent=2)

    if isinstance(data, list):
        if not data:
            return "No variables"

        first = data[0]

        if isinstance(first, dict) and "name" in first and "scope" in first:
            return format_variables(data)

        return "\n".join(format_plain(item) for item in data)

    return str(data)


def _flags(var: dict) -> list[str]:
    flags = []
    if var.get("type") and var["type"] != "String":
        flags.append(var["type"])
    if var.get("is_added"):
        flags.append("added")
    if var.get("is_removed"):
        flags.append("removed")
    if var.get("is_volatile"):
        flags.append("volatile")
    return flags


def format_variables(variables: list[dict]) -> str:
    lines = []
    for var in variables:
        flags = _flags(var)
        suffix = f" ({', '.join(flags)})" if flags else ""
        lines.append(f"[{var['scope']}] {var['name']}={var.get('data', '')}{suffix}")
    return "\n".join(lines)


def format_path_entries(data: dict) -> str:
    lines = [f"{data['name']} ({data['scope']}):"]
    paths = data["paths"]
    if not paths:
        lines.append("  (empty)")
    for entry in paths:
        marker = "" if entry.get("exists", True) else "  [missing]"
        lines.append(f"  {entry['path']}{marker}")
    return "\n".join(lines)


def format_validation(data: dict) -> str:
    if data["valid"]:
        return f"{data['name']}: valid"
    lines = [f"{data['name']}: invalid"]
    for error in data.get("errors", []):
        lines.append(f"  - {error}")
    return "\n".join(lines)


def format_saved(data: dict) -> str:
    saved = data["saved"]
    if not saved:
        return "No changes"
    lines = [f"Saved {len(saved)} change(s):"]
    for var in saved:
        if var.get("is_removed"):
            action = "deleted"
        elif var.get("is_added"):
            action = "added"
        else:
            action = "updated"
        lines.append(f"  {action} [{var['scope']}] {var['name']}")
    return "\n".join(lines)
