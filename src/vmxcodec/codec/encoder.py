"""VMX encoder for Pydantic records.

This module provides the marshal() function that converts a Pydantic record
instance into VMX text, one ``key = "value"`` line per tagged scalar field.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Sequence

from pydantic import BaseModel

from ..exceptions import SchemaError, TypeMismatchError
from .lines import format_lines, format_scalar
from .paths import compose_path, indexed_fragment
from .schema import FieldKind, FieldSchema, RecordSchema, is_empty

logger = logging.getLogger(__name__)


def marshal(record: BaseModel) -> bytes:
    """Encode a Pydantic record to VMX text.

    Fields are visited in declaration order. Nested records extend the key with
    their own fragment, and elements of a list of records are numbered from 0.

    Args:
        record: Pydantic record instance to encode

    Returns:
        UTF-8 encoded VMX text, each line terminated by a newline

    Raises:
        MalformedTagError: If a field carries an invalid vmx tag
        TypeMismatchError: If a field value cannot be written as a VMX value
        SchemaError: If two fields compose the same key

    Examples:
        ```python
        from vmxcodec import VmxKey, VmxModel, marshal

        class VM(VmxModel):
            encoding: str = VmxKey(".encoding", default="utf-8")
            memsize: int = VmxKey("memsize", default=0)
            mem_hot_add: bool = VmxKey("mem.hotadd", default=False)

        marshal(VM(memsize=1024))
        # b'.encoding = "utf-8"\\nmemsize = "1024"\\nmem.hotadd = "false"\\n'
        ```
    """
    return format_lines(encode_lines(record))


def encode_lines(record: BaseModel) -> list[tuple[str, str]]:
    """Encode a Pydantic record to an ordered list of (key, value) pairs.

    Raises:
        MalformedTagError: If a field carries an invalid vmx tag
        TypeMismatchError: If a field value cannot be written as a VMX value
        SchemaError: If two fields compose the same key
    """
    pairs: list[tuple[str, str]] = []
    _encode_record(record, (), pairs)

    seen: set[str] = set()
    for key, _value in pairs:
        if key in seen:
            raise SchemaError(f"Duplicate key {key} in {type(record).__name__}")
        seen.add(key)

    logger.debug("Encoded %s into %d lines", type(record).__name__, len(pairs))
    return pairs


def _encode_record(
    record: BaseModel, ancestors: Sequence[str], pairs: list[tuple[str, str]]
) -> None:
    """Append the lines of one (possibly nested) record."""
    schema = RecordSchema.from_model(type(record))

    for field_schema in schema.tagged_fields():
        value = getattr(record, field_schema.name)

        if field_schema.kind is FieldKind.GROUP:
            if value is None:
                continue
            _check_record(field_schema, value)
            _encode_record(value, (*ancestors, field_schema.fragment), pairs)
            continue

        if field_schema.kind is FieldKind.REPEATED:
            for index, element in enumerate(value or ()):
                _check_record(field_schema, element)
                child = (*ancestors, indexed_fragment(field_schema.fragment, index))
                _encode_record(element, child, pairs)
            continue

        if value is None or (field_schema.omitempty and is_empty(value)):
            continue

        key = compose_path(ancestors, field_schema.fragment)
        pairs.append((key, _encode_value(field_schema, value)))


def _check_record(field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, BaseModel):
        raise TypeMismatchError(
            f"Field {field_schema.name}: expected {field_schema.python_type.__name__}, "
            f"got {type(value).__name__}"
        )


def _encode_value(field_schema: FieldSchema, value: Any) -> str:
    """Stringify a single scalar field value.

    Args:
        field_schema: Schema information for the field
        value: Field value to encode

    Returns:
        Unquoted VMX value

    Raises:
        TypeMismatchError: If the field type or value is not supported
    """
    if field_schema.kind is not FieldKind.SCALAR:
        raise TypeMismatchError(
            f"Field {field_schema.name}: unsupported type {field_schema.type_name}"
        )

    if field_schema.enum_type is not None:
        if not isinstance(value, field_schema.enum_type):
            raise TypeMismatchError(
                f"Field {field_schema.name}: expected {field_schema.enum_type.__name__}, "
                f"got {type(value).__name__}"
            )
        return format_scalar(value.value)

    # int fields reject bool values
    expected = field_schema.python_type
    actual = type(value.value) if isinstance(value, enum.Enum) else type(value)
    if not issubclass(actual, expected) or (expected is int and actual is bool):
        raise TypeMismatchError(
            f"Field {field_schema.name}: expected {expected.__name__}, got {type(value).__name__}"
        )

    return format_scalar(value)

