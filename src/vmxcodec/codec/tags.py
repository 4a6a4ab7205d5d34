"""Parsing of per-field vmx tags.

A tag is a directive string attached to a model field that names the VMX key
fragment for that field, optionally followed by options:

    vmx:"memsize"
    vmx:"linkStatePropagation.enable,omitempty"

Only the ``omitempty`` option is recognized; other options are accepted and ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import MalformedTagError

TAG_NAMESPACE = "vmx"
"""Namespace token every tag must start with."""

TAG_METADATA_KEY = "vmx"
"""Key under which the raw tag is stored in a field's ``json_schema_extra``."""

OPTION_OMITEMPTY = "omitempty"


@dataclass(frozen=True)
class Directive:
    """Parsed form of a vmx tag.

    Attributes:
        fragment: Key fragment contributed by the field (never empty; ``-`` is literal)
        omitempty: Skip the field on encode when its value is empty
    """

    fragment: str
    omitempty: bool = False


def parse_tag(raw: str) -> Directive:
    """Parse a raw vmx tag into a Directive.

    Args:
        raw: Tag string such as ``vmx:"ethernet"`` or ``vmx:"present,omitempty"``

    Returns:
        Parsed Directive

    Raises:
        MalformedTagError: If the tag does not follow the grammar

    Examples:
        >>> parse_tag('vmx:"memsize"')
        Directive(fragment='memsize', omitempty=False)
        >>> parse_tag('vmx:"mem.hotadd,omitempty"')
        Directive(fragment='mem.hotadd', omitempty=True)
    """
    namespace, colon, body = raw.partition(":")
    if not colon or namespace != TAG_NAMESPACE or not body:
        raise MalformedTagError(f"Invalid tag: {raw}")

    if not body.startswith('"'):
        raise MalformedTagError(f"Tag name has to be enclosed in double quotes: {raw}")

    fragment, *options = body.strip('"').split(",")
    if not fragment:
        raise MalformedTagError(f"Tag name is missing: {raw}")
    if any(char.isspace() for char in fragment):
        raise MalformedTagError(f"Tag name must not contain whitespace: {raw}")

    return Directive(fragment=fragment, omitempty=OPTION_OMITEMPTY in options)


def format_tag(fragment: str, omitempty: bool = False) -> str:
    """Build a raw vmx tag from a fragment and options.

    Example:
        >>> format_tag("present", omitempty=True)
        'vmx:"present,omitempty"'
    """
    options = f",{OPTION_OMITEMPTY}" if omitempty else ""
    return f'{TAG_NAMESPACE}:"{fragment}{options}"'
