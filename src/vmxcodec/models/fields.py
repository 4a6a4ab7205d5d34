"""Field helpers for attaching vmx tags.

The tag of a field is kept in its ``json_schema_extra`` metadata, so tagged
fields remain ordinary Pydantic fields (defaults, constraints and descriptions
all work as usual).
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.tags import TAG_METADATA_KEY, format_tag


def VmxTag(tag: str, **kwargs: Any) -> FieldInfo:
    """Create a field carrying a raw vmx tag.

    The tag is validated lazily, when the record is first encoded or decoded.

    Args:
        tag: Raw tag string, e.g. ``'vmx:"memsize,omitempty"'``
        **kwargs: Additional Field() arguments (default, description, ge, ...)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class VM(VmxModel):
        ...     memsize: int = VmxTag('vmx:"memsize"', default=0)
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[TAG_METADATA_KEY] = tag
    return cast(FieldInfo, Field(json_schema_extra=extra, **kwargs))


def VmxKey(fragment: str, *, omitempty: bool = False, **kwargs: Any) -> FieldInfo:
    """Create a field mapped to a VMX key fragment.

    Args:
        fragment: Key fragment (may contain dots, e.g. ``"mem.hotadd"``)
        omitempty: Skip the line on encode when the value is empty
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Ethernet(VmxModel):
        ...     present: bool = VmxKey("present", default=False)
        ...     link_state: bool = VmxKey(
        ...         "linkStatePropagation.enable", omitempty=True, default=False
        ...     )
        ...     vlan: Annotated[int, VmxKey("vlan")] = 0
    """
    return VmxTag(format_tag(fragment, omitempty=omitempty), **kwargs)
