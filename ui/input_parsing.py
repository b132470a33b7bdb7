"""
Input parsing helpers for the console shells.

Every helper raises InvalidArgumentError on bad input so the shell reports
it before any controller call.
"""

import shlex
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Type, TypeVar

from constants import StorageConstants
from models import InvalidArgumentError, Major

E = TypeVar("E", bound=Enum)


def parse_date(raw: str, field: str = "date") -> date:
    try:
        return datetime.strptime(raw.strip(), StorageConstants.DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {field} {raw!r}, expected YYYY-MM-DD") from e


def parse_optional_date(raw: Optional[str], field: str = "date") -> Optional[date]:
    if raw is None or not raw.strip():
        return None
    return parse_date(raw, field)


def parse_enum(enum_cls: Type[E], raw: str) -> E:
    """Case-insensitive lookup by value."""
    value = raw.strip().upper()
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(f"Invalid {enum_cls.__name__} {raw!r} (choose from {choices})") from e


def parse_int(raw: str, low: int, high: int, field: str = "number") -> int:
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {field} {raw!r}, expected an integer") from e
    if not low <= value <= high:
        raise InvalidArgumentError(f"{field.capitalize()} must be between {low} and {high}")
    return value


def parse_majors(raw: str) -> List[Major]:
    """Comma or semicolon separated majors; blank means none."""
    majors = []
    for part in raw.replace(StorageConstants.MAJOR_SEPARATOR, ",").split(","):
        if not part.strip():
            continue
        try:
            major = Major.parse(part)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e
        if major not in majors:
            majors.append(major)
    return majors


def split_args(arg: str) -> List[str]:
    """Shell-style split so quoted values may contain spaces."""
    try:
        return shlex.split(arg)
    except ValueError as e:
        raise InvalidArgumentError(f"Could not parse arguments: {e}") from e


def expect_args(arg: str, count: int, usage: str) -> List[str]:
    parts = split_args(arg)
    if len(parts) != count:
        raise InvalidArgumentError(f"Usage: {usage}")
    return parts


def parse_options(arg: str, allowed: Iterable[str]) -> Dict[str, str]:
    """
    Parse `key=value` tokens, e.g. `level=BASIC majors=CCDS,COE`.

    Keys are case-insensitive and must be one of `allowed`; a repeated key
    keeps the last value.
    """
    return parse_option_tokens(split_args(arg), allowed)


def parse_option_tokens(tokens: Iterable[str], allowed: Iterable[str]) -> Dict[str, str]:
    allowed = set(allowed)
    options = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if not sep or key not in allowed:
            raise InvalidArgumentError(
                f"Unexpected option {token!r} (allowed: {', '.join(sorted(allowed))})"
            )
        options[key] = value
    return options
