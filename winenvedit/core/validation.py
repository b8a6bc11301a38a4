"""Rules for environment variable names and values.

Windows stores environment variables as registry values under
``HKCU\\Environment`` and ``HKLM\\...\\Session Manager\\Environment``. The
registry itself accepts almost anything as a value name, but names that
contain ``=``, ``;``, ``%`` or whitespace break ``%NAME%`` expansion and the
``NAME=value`` block that processes receive, so they are rejected here.
"""

import ntpath
import os
from typing import Callable

from pydantic import BaseModel

MAX_NAME_LENGTH = 255
MAX_VALUE_LENGTH = 32767


class ValidationResult(BaseModel):
    is_valid: bool
    error_message: str = ""


Rule = tuple[Callable[[str], bool], str]

NAME_RULES: list[Rule] = [
    (lambda name: len(name) <= MAX_NAME_LENGTH, f"cannot exceed {MAX_NAME_LENGTH} characters"),
    (lambda name: "\0" not in name, "cannot contain null characters"),
    (lambda name: "=" not in name, "cannot contain '=' characters"),
    (lambda name: ";" not in name, "cannot contain ';' characters"),
    (lambda name: "%" not in name, "cannot contain '%' characters"),
    (lambda name: not any(c.isspace() for c in name), "cannot contain spaces"),
    (lambda name: bool(name), "cannot be empty"),
]

DATA_RULES: list[Rule] = [
    (lambda data: len(data) <= MAX_VALUE_LENGTH, f"cannot exceed {MAX_VALUE_LENGTH} characters"),
    (lambda data: "\0" not in data, "cannot contain null characters"),
]


def _first_error(rules: list[Rule], value: str) -> ValidationResult:
    for rule, message in rules:
        if not rule(value):
            return ValidationResult(is_valid=False, error_message=message)
    return ValidationResult(is_valid=True)


def _all_errors(rules: list[Rule], value: str) -> list[str]:
    return [message for rule, message in rules if not rule(value)]


def validate_name(name: str) -> ValidationResult:
    return _first_error(NAME_RULES, name)


def validate_data(data: str) -> ValidationResult:
    return _first_error(DATA_RULES, data)


def validate_name_all_errors(name: str) -> list[str]:
    return _all_errors(NAME_RULES, name)


def validate_data_all_errors(data: str) -> list[str]:
    return _all_errors(DATA_RULES, data)


def validate_for_add(name: str, data: str) -> tuple[bool, str]:
    """Check a name/value pair before it is added to a session.

    Returns (is_valid, message); the message names the first broken rule.
    """
    name_result = validate_name(name)
    if not name_result.is_valid:
        return False, name_result.error_message

    data_result = validate_data(data)
    if not data_result.is_valid:
        return False, data_result.error_message

    return True, ""


def looks_like_path(value: str) -> bool:
    """Return True if value starts like a filesystem path.

    Recognizes a drive letter ("C:\\", "D:") or a leading %MACRO%
    ("%SystemRoot%", "%USERPROFILE%\\go").
    """
    if not value or not value.strip():
        return False

    trimmed = value.strip()

    if len(trimmed) >= 2 and trimmed[0].isascii() and trimmed[0].isalpha() and trimmed[1] == ":":
        return True

    if len(trimmed) >= 3 and trimmed[0] == "%":
        for i in range(1, len(trimmed)):
            if trimmed[i] == "%":
                return i > 1
            if not (trimmed[i].isascii() and trimmed[i].isalpha()):
                break

    return False


def is_valid_path(path: str) -> bool:
    """Return True if path exists once %VAR% references are expanded."""
    if not path or not path.strip():
        return False
    expanded = ntpath.expandvars(path)
    return os.path.exists(expanded)
