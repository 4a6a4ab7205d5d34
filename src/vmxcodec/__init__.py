"""vmxcodec: VMX configuration codec

A Python library for reading and writing the flat ``key = "value"`` format of
virtual machine descriptors (``.vmx`` files) through tagged Pydantic records.

Key Features:
- Pydantic-based record modeling with per-field vmx tags
- Dotted keys for nested records, numbered keys for lists of records
- Deterministic, declaration-ordered output
- ``omitempty`` option to skip empty values

Quick Start:
    >>> from vmxcodec import VmxKey, VmxModel, decode, marshal
    >>>
    >>> class VirtualHardware(VmxModel):
    ...     version: str = VmxKey("version", default="")
    >>>
    >>> class VM(VmxModel):
    ...     encoding: str = VmxKey(".encoding", default="utf-8")
    ...     memsize: int = VmxKey("memsize", default=0)
    ...     hardware: VirtualHardware = VmxKey("virtualHW", default_factory=VirtualHardware)
    >>>
    >>> vm = VM(memsize=1024, hardware=VirtualHardware(version="10"))
    >>> data = marshal(vm)
    >>> decoded = decode(VM, data)
"""

from __future__ import annotations

from .codec import (
    Directive,
    compose_path,
    decode,
    encode_lines,
    marshal,
    parse_lines,
    parse_tag,
    unmarshal,
    zero_record,
)
from .exceptions import (
    MalformedTagError,
    ParseError,
    SchemaError,
    TypeMismatchError,
    VmxError,
)
from .models import VmxKey, VmxModel, VmxTag
from .utils import KeySpec, key_layout

__version__ = "0.1.0"

__all__ = [
    # Core API
    "VmxModel",
    "marshal",
    "unmarshal",
    "decode",
    "encode_lines",
    "zero_record",
    # Field helpers
    "VmxKey",
    "VmxTag",
    # Tags and keys
    "parse_tag",
    "Directive",
    "compose_path",
    "parse_lines",
    # Exceptions
    "VmxError",
    "SchemaError",
    "MalformedTagError",
    "ParseError",
    "TypeMismatchError",
    # Layout
    "KeySpec",
    "key_layout",
    # Version
    "__version__",
]
