"""Exception hierarchy for vmxcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from VmxError for easy catching of any vmxcodec-specific error.
"""

from __future__ import annotations


class VmxError(Exception):
    """Base exception for all vmxcodec errors."""

    pass


class SchemaError(VmxError):
    """Raised when a record shape cannot be mapped onto VMX keys.

    Examples:
        - Two fields compose the same key
        - A record type contains itself (infinite key layout)
    """

    pass


class MalformedTagError(SchemaError):
    """Raised when a field's vmx tag does not follow the tag grammar.

    Examples:
        - Missing ``vmx:`` namespace or colon
        - Tag name not enclosed in double quotes
        - Empty tag name
    """

    pass


class ParseError(VmxError):
    """Raised when VMX text contains a line that is not ``key = "value"``.

    Examples:
        - Value not enclosed in double quotes
        - Missing ``=`` separator
        - Input is not valid UTF-8
    """

    pass


class TypeMismatchError(VmxError):
    """Raised when a value cannot be converted to or from its field type.

    Examples:
        - Non-numeric text decoded into an int field
        - ``"TRUE"`` decoded into a bool field
        - A tagged field with an unsupported annotation (float, dict, ...)
        - A string value containing a double quote or line break
    """

    pass
