"""VMX decoder for Pydantic records.

This module provides unmarshal(), which populates an existing Pydantic record
from VMX text, and decode(), which builds a fresh record of a given class.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import TypeMismatchError
from .lines import format_scalar, parse_lines
from .paths import compose_path, group_prefix, indexed_fragment
from .schema import FieldKind, FieldSchema, RecordSchema, zero_record

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_INT_PATTERN = re.compile(r"-?[0-9]+")
_BOOL_VALUES = {"true": True, "false": False}


def decode(record_class: type[T], data: bytes | str) -> T:
    """Decode VMX text into a new record.

    Args:
        record_class: Pydantic record class to decode to
        data: VMX text

    Returns:
        Record whose fields are taken from ``data``; tagged fields without a
        matching key hold their zero value, as marshal() would have skipped them

    Raises:
        ParseError: If a line is not ``key = "value"``
        MalformedTagError: If a field carries an invalid vmx tag
        TypeMismatchError: If a value cannot be converted to its field type

    Example:
        ```python
        vm = decode(VM, b'memsize = "1024"\\n')
        assert vm.memsize == 1024
        ```
    """
    record = zero_record(record_class)
    unmarshal(data, record)
    return record


def unmarshal(data: bytes | str, record: BaseModel) -> None:
    """Populate ``record`` in place from VMX text.

    Keys are looked up by the same paths marshal() would produce for the record's
    fields. Missing keys leave fields untouched. Lists of records are sized by
    probing ``<fragment>0.``, ``<fragment>1.``, ... until an index has no keys.

    Args:
        data: VMX text
        record: Pydantic record to populate

    Raises:
        ParseError: If a line is not ``key = "value"``
        MalformedTagError: If a field carries an invalid vmx tag
        TypeMismatchError: If a value cannot be converted to its field type
    """
    values = parse_lines(data)
    _decode_record(values, record, ())
    logger.debug("Decoded %d keys into %s", len(values), type(record).__name__)


def _decode_record(
    values: Mapping[str, str], record: BaseModel, ancestors: Sequence[str]
) -> None:
    """Assign every tagged field of one (possibly nested) record."""
    schema = RecordSchema.from_model(type(record))

    for field_schema in schema.tagged_fields():
        if field_schema.kind is FieldKind.GROUP:
            prefix = group_prefix(ancestors, field_schema.fragment)
            current = getattr(record, field_schema.name)
            if current is None:
                if not _has_prefix(values, prefix):
                    continue
                current = zero_record(field_schema.python_type)
                _decode_record(values, current, (*ancestors, field_schema.fragment))
                _assign(record, field_schema, current)
            else:
                _decode_record(values, current, (*ancestors, field_schema.fragment))
            continue

        if field_schema.kind is FieldKind.REPEATED:
            elements = _decode_repeated(values, field_schema, ancestors)
            if elements:
                _assign(record, field_schema, elements)
            continue

        key = compose_path(ancestors, field_schema.fragment)
        if key not in values:
            continue
        _assign(record, field_schema, _decode_value(field_schema, key, values[key]))


def _decode_repeated(
    values: Mapping[str, str], field_schema: FieldSchema, ancestors: Sequence[str]
) -> list[Any]:
    """Decode the elements of a list of records, in index order."""
    elements: list[Any] = []
    index = 0
    while _has_prefix(values, group_prefix(ancestors, field_schema.fragment, index)):
        element = zero_record(field_schema.python_type)
        child = (*ancestors, indexed_fragment(field_schema.fragment, index))
        _decode_record(values, element, child)
        elements.append(element)
        index += 1
    return elements


def _has_prefix(values: Mapping[str, str], prefix: str) -> bool:
    return any(key.startswith(prefix) for key in values)


def _assign(record: BaseModel, field_schema: FieldSchema, value: Any) -> None:
    """Set a field, letting pydantic validate the new value."""
    try:
        setattr(record, field_schema.name, value)
    except ValidationError as e:
        raise TypeMismatchError(
            f"Field {field_schema.name}: invalid value {value!r}: {e}"
        ) from e


def _decode_value(field_schema: FieldSchema, key: str, raw: str) -> Any:
    """Convert a raw VMX value to the field's Python type.

    Args:
        field_schema: Schema information for the field
        key: Full key the value was read from (for error messages)
        raw: Unquoted VMX value

    Returns:
        Converted value

    Raises:
        TypeMismatchError: If the value does not fit the field type
    """
    if field_schema.kind is not FieldKind.SCALAR:
        raise TypeMismatchError(
            f"Field {field_schema.name}: unsupported type {field_schema.type_name}"
        )

    if field_schema.enum_type is not None:
        for member in field_schema.enum_type:
            if format_scalar(member.value) == raw:
                return member
        raise TypeMismatchError(
            f"Key {key}: {raw!r} is not a valid {field_schema.enum_type.__name__}"
        )

    if field_schema.python_type is bool:
        if raw not in _BOOL_VALUES:
            raise TypeMismatchError(f"Key {key}: expected true or false, got {raw!r}")
        return _BOOL_VALUES[raw]

    if field_schema.python_type is int:
        if not _INT_PATTERN.fullmatch(raw):
            raise TypeMismatchError(f"Key {key}: expected an integer, got {raw!r}")
        try:
            return int(raw)
        except ValueError as e:
            raise TypeMismatchError(f"Key {key}: integer out of range: {e}") from e

    return raw

