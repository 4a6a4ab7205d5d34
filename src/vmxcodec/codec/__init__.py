"""VMX text codec for vmxcodec.

This module provides marshaling of Pydantic records to flat VMX
``key = "value"`` lines and unmarshaling of such lines back into records.
"""

from __future__ import annotations

from .decoder import decode, unmarshal
from .encoder import encode_lines, marshal
from .lines import parse_lines
from .paths import compose_path
from .schema import FieldSchema, RecordSchema, zero_record
from .tags import Directive, parse_tag

__all__ = [
    "marshal",
    "encode_lines",
    "unmarshal",
    "decode",
    "parse_lines",
    "parse_tag",
    "Directive",
    "compose_path",
    "RecordSchema",
    "FieldSchema",
    "zero_record",
]
