"""Base record class and vmxcodec-specific Pydantic configuration.

This module provides the VmxModel class that VMX records should inherit from.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="VmxModel")


class VmxModel(BaseModel):
    """Base class for all VMX records.

    Records define fields with VmxKey() (or VmxTag() for a raw tag string).
    Fields without a vmx tag are ignored by the codec. Nested records become
    dotted key groups and lists of records become numbered groups.

    Example:
        >>> class Ethernet(VmxModel):
        ...     present: bool = VmxKey("present", default=False)
        ...     connection_type: str = VmxKey("connectionType", default="")
        >>> class VM(VmxModel):
        ...     memsize: int = VmxKey("memsize", default=0)
        ...     ethernet: list[Ethernet] = VmxKey("ethernet", default_factory=list)
        >>> VM(memsize=512, ethernet=[Ethernet(present=True)]).to_vmx()
        b'memsize = "512"\\nethernet0.present = "true"\\nethernet0.connectionType = ""\\n'
    """

    # ConfigDict for Pydantic v2
    model_config = ConfigDict(
        # Decoded text values are coerced to field types on assignment
        strict=False,
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    def to_vmx(self) -> bytes:
        """Encode this record to VMX text."""
        # Import here to avoid circular dependency
        from ..codec.encoder import marshal

        return marshal(self)

    @classmethod
    def from_vmx(cls: type[T], data: bytes | str) -> T:
        """Decode VMX text into a new record of this class."""
        from ..codec.decoder import decode

        return decode(cls, data)
