"""Composition of flat VMX key paths.

Nesting levels are joined with ``.``. An element of a repeated group appends its
zero-based index directly to the group's fragment, so the second element of
``ethernet`` lives under ``ethernet1.``. Fragments are never rewritten: a leading
dot (``.encoding``) is part of the key.
"""

from __future__ import annotations

from typing import Sequence

KEY_SEPARATOR = "."


def indexed_fragment(fragment: str, index: int | str) -> str:
    """Return the fragment of one repeated-group element, e.g. ``ethernet0``."""
    return f"{fragment}{index}"


def compose_path(ancestors: Sequence[str], leaf: str, index: int | None = None) -> str:
    """Compose the full key for a field.

    Args:
        ancestors: Fragments of the enclosing groups, outermost first
        leaf: Fragment of the field itself
        index: Element index when ``leaf`` is a repeated group fragment

    Returns:
        Dotted key path

    Examples:
        >>> compose_path(["virtualHW"], "version")
        'virtualHW.version'
        >>> compose_path([], "ethernet", 1)
        'ethernet1'
        >>> compose_path(["ethernet0"], "linkStatePropagation.enable")
        'ethernet0.linkStatePropagation.enable'
    """
    if index is not None:
        leaf = indexed_fragment(leaf, index)
    return KEY_SEPARATOR.join([*ancestors, leaf])


def group_prefix(ancestors: Sequence[str], fragment: str, index: int | None = None) -> str:
    """Return the prefix shared by every key inside a group (with trailing dot)."""
    return compose_path(ancestors, fragment, index) + KEY_SEPARATOR
