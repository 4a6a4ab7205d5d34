"""Line-level reading and writing of VMX text.

Every line of a VMX file has the form ``key = "value"``. Values are always
double-quoted and carry no escapes, so a value can never contain ``"`` or a
line break.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Any, Iterable

from ..exceptions import ParseError, TypeMismatchError

logger = logging.getLogger(__name__)

LINE_PATTERN = re.compile(r'^(\S+) = "([^"]*)"\s*$')

_FORBIDDEN_VALUE_CHARS = ('"', "\r", "\n")


def format_line(key: str, value: str) -> str:
    """Format one ``key = "value"`` line (without line terminator).

    Raises:
        TypeMismatchError: If the value cannot be carried by a quoted VMX value
    """
    if any(char in value for char in _FORBIDDEN_VALUE_CHARS):
        raise TypeMismatchError(
            f"Key {key}: value {value!r} contains a double quote or line break"
        )
    return f'{key} = "{value}"'


def format_scalar(value: Any) -> str:
    """Render a bool, int or str the way VMX files spell them.

    Raises:
        TypeMismatchError: If the value is not a bool, int or str
    """
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        try:
            return str(int(value))
        except ValueError as e:
            raise TypeMismatchError(f"Cannot encode int value: {e}") from e
    if isinstance(value, str):
        return str(value)
    raise TypeMismatchError(f"Cannot encode {type(value).__name__} value {value!r}")


def format_lines(pairs: Iterable[tuple[str, str]]) -> bytes:
    """Join key/value pairs into VMX text, one newline-terminated line each."""
    return "".join(format_line(key, value) + "\n" for key, value in pairs).encode("utf-8")


def parse_lines(data: bytes | str) -> dict[str, str]:
    """Parse VMX text into a mapping of key to raw value.

    Lines are separated by newlines (a trailing carriage return is tolerated).
    Blank lines are skipped. When a key appears more than once the last
    occurrence wins.

    Args:
        data: VMX text as bytes (UTF-8) or str

    Returns:
        Mapping of full key path to unquoted value, in first-seen key order

    Raises:
        ParseError: If the input is not UTF-8 or a line is not ``key = "value"``

    Example:
        >>> parse_lines(b'memsize = "1024"\\nmem.hotadd = "false"\\n')
        {'memsize': '1024', 'mem.hotadd': 'false'}
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"VMX data is not valid UTF-8: {e}") from e
    else:
        text = data

    values: dict[str, str] = {}
    for lineno, line in enumerate(text.split("\n"), 1):
        if not line.strip():
            continue

        match = LINE_PATTERN.match(line)
        if match is None:
            raise ParseError(f"Invalid line {lineno}: {line}")

        key, value = match.groups()
        if key in values:
            logger.debug("Duplicate key %s on line %d overrides earlier value", key, lineno)
        values[key] = value

    return values
