"""TOML profile import and export.

A profile groups variables by scope as arrays of tables:

    [[System]]
    name = "Path"
    data = "C:\\Windows;C:\\Windows\\System32"
    type = "ExpandString"

    [[User]]
    name = "EDITOR"
    data = "code"
    type = "String"

Files are written as UTF-8 without a byte order mark, with LF line endings
and exactly one trailing newline.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterable

import tomli
import tomli_w

from .core.types import EnvironmentVariable, RegistryValueKind, VariableScope
from .errors import ProfileFormatError

logger = logging.getLogger(__name__)

FILE_EXTENSION = ".toml"
SUGGESTED_FILE_NAME = f"winenvedit{FILE_EXTENSION}"

# Section order in exported files
SECTIONS = [VariableScope.SYSTEM, VariableScope.USER]


def format_toml_output(content: str) -> str:
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")

    result: list[str] = []
    for line in normalized.split("\n"):
        if line.startswith("[[") and result and result[-1] != "":
            result.append("")
        result.append(line)

    return "\n".join(result).rstrip() + "\n"


def dumps_profile(variables: Iterable[EnvironmentVariable]) -> str:
    """Serialize variables to profile text. Removed and volatile ones are skipped."""
    variables = [v for v in variables if not v.is_removed and not v.is_volatile]

    # Written entry by entry: tomli_w would inline short arrays of tables
    chunks = []
    for scope in SECTIONS:
        for v in variables:
            if v.scope != scope:
                continue
            entry = {"name": v.name, "data": v.data, "type": v.type.value}
            chunks.append(f"[[{scope.value}]]\n" + tomli_w.dumps(entry))

    return format_toml_output("".join(chunks))


def loads_profile(content: str) -> list[EnvironmentVariable]:
    try:
        model = tomli.loads(content)
    except tomli.TOMLDecodeError as e:
        raise ProfileFormatError(f"Invalid profile: {e}") from e

    result = []
    for scope in SECTIONS:
        section = model.get(scope.value)
        if not isinstance(section, list):
            continue

        for item in section:
            if not isinstance(item, dict):
                continue

            name = str(item.get("name", "") or "")
            if not name:
                logger.warning(f"Skipping {scope} entry without a name")
                continue

            type_ = item.get("type")
            result.append(EnvironmentVariable(
                name=name,
                data=str(item.get("data", "") or ""),
                type=RegistryValueKind.parse(type_) if isinstance(type_, str) else RegistryValueKind.STRING,
                scope=scope,
            ))

    return result


def export_to_stream(stream: BinaryIO, variables: Iterable[EnvironmentVariable]) -> None:
    stream.write(dumps_profile(variables).encode("utf-8"))
    stream.flush()


def export_to_file(path: Path, variables: Iterable[EnvironmentVariable]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        export_to_stream(f, variables)
    logger.info(f"Exported profile to {path}")


def import_from_stream(stream: BinaryIO) -> list[EnvironmentVariable]:
    # utf-8-sig strips a byte order mark if one is present
    return loads_profile(stream.read().decode("utf-8-sig"))


def import_from_file(path: Path) -> list[EnvironmentVariable]:
    with open(path, "rb") as f:
        variables = import_from_stream(f)
    logger.info(f"Imported {len(variables)} variable(s) from {path}")
    return variables
