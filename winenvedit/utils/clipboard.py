"""Parse and produce the ``NAME=value`` text used for copy and paste."""

import re

from ..core.types import EnvironmentVariable

_LINE_BREAK = re.compile(r"[\r\n]+")


def parse_single_line(text: str) -> tuple[str, str]:
    """Split one ``NAME=value`` line.

    Without a usable separator the whole text is returned as the value with
    an empty name.
    """
    if not text or not text.strip():
        return "", ""

    text = text.strip()
    separator = text.find("=")
    if separator > 0:
        return text[:separator].strip(), text[separator + 1:].strip()

    return "", text


def parse_multi_line(text: str) -> list[tuple[str, str]]:
    """Parse ``NAME=value`` lines, skipping lines without a name."""
    if not text or not text.strip():
        return []

    result = []
    for line in _LINE_BREAK.split(text.strip()):
        separator = line.find("=")
        if separator <= 0:
            continue

        name = line[:separator].strip()
        value = line[separator + 1:].strip()
        if name:
            result.append((name, value))
    return result


def format_lines(variables: list[EnvironmentVariable]) -> str:
    """Render variables as ``NAME=value`` lines; volatile ones are left out."""
    return "\n".join(f"{v.name}={v.data}" for v in variables if not v.is_volatile)
