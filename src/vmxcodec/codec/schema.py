"""Schema introspection for Pydantic models.

This module provides utilities to analyze Pydantic models and extract
VMX-relevant information: each field's tag directive and whether the field is a
scalar, a nested group, or a repeated group.
"""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass
from typing import Any, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from .tags import TAG_METADATA_KEY, Directive, parse_tag

SCALAR_TYPES = (bool, int, str)


class FieldKind(str, enum.Enum):
    """How a field maps onto VMX keys."""

    SCALAR = "scalar"
    GROUP = "group"
    REPEATED = "repeated"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name on the model
        directive: Parsed vmx tag, or None for untagged fields
        kind: Scalar, group, repeated group or unsupported
        python_type: Annotation with Optional unwrapped (element type for repeated groups)
        optional: Whether the annotation allows None
        enum_type: Enum class if the field is an enum scalar
    """

    name: str
    directive: Optional[Directive]
    kind: FieldKind
    python_type: Any
    optional: bool
    enum_type: Optional[Type[enum.Enum]]

    @property
    def fragment(self) -> str:
        """Key fragment of a tagged field."""
        if self.directive is None:
            raise SchemaError(f"Field {self.name} has no vmx tag")
        return self.directive.fragment

    @property
    def omitempty(self) -> bool:
        return self.directive is not None and self.directive.omitempty

    @property
    def type_name(self) -> str:
        """Readable name of the field type, for messages and layout reports."""
        name = getattr(self.python_type, "__name__", None) or str(self.python_type)
        if self.kind is FieldKind.REPEATED:
            return f"list[{name}]"
        return name


class RecordSchema:
    """Schema information for an entire record.

    This class introspects a Pydantic model and extracts the directive and kind
    of each field, in declaration order.

    Example:
        >>> schema = RecordSchema.from_model(VM)
        >>> for field in schema.tagged_fields():
        ...     print(f"{field.name}: {field.fragment}")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            MalformedTagError: If any field carries an invalid vmx tag
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordSchema:
        """Create a schema from a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            RecordSchema instance
        """
        return cls(model_class)

    def tagged_fields(self) -> List[FieldSchema]:
        """Fields carrying a vmx tag, in declaration order."""
        return [field for field in self.fields if field.directive is not None]

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            self.fields.append(self._extract_field_schema(field_name, field_info))

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        raw_tag = field_tag(field_info)
        directive = parse_tag(raw_tag) if raw_tag is not None else None

        annotation, optional = _unwrap_optional(field_info.annotation)
        kind, python_type = _classify(annotation)
        enum_type = python_type if kind is FieldKind.SCALAR and _is_enum(python_type) else None

        return FieldSchema(
            name=name,
            directive=directive,
            kind=kind,
            python_type=python_type,
            optional=optional,
            enum_type=enum_type,
        )


def field_tag(field_info: FieldInfo) -> Optional[str]:
    """Return the raw vmx tag stored on a field, if any."""
    extra = field_info.json_schema_extra
    if not isinstance(extra, dict):
        return None
    tag = extra.get(TAG_METADATA_KEY)
    return tag if isinstance(tag, str) else None


def zero_value(field: FieldSchema) -> Any:
    """Return the zero value a fresh record holds for a field."""
    if field.optional:
        return None
    if field.kind is FieldKind.REPEATED:
        return []
    if field.kind is FieldKind.GROUP:
        return zero_record(field.python_type)
    if field.enum_type is not None:
        members = list(field.enum_type)
        return next((member for member in members if is_empty(member)), members[0])
    if field.kind is FieldKind.SCALAR:
        return field.python_type()
    return None


def zero_record(model_class: Type[BaseModel]) -> Any:
    """Build an instance of ``model_class`` with every field at its zero value.

    A tagged field whose key is missing from the input must decode to the value
    that marshal() skipped, so tagged fields start at their zero value even when
    they declare a non-empty default. An empty default (``""``, ``0``, ``()``)
    is kept as is. Untagged and unsupported fields keep their default; required
    ones get the zero value of their type. Validation is skipped, so records
    with required fields can be created empty and filled in afterwards.
    """
    schema = RecordSchema.from_model(model_class)
    values: dict[str, Any] = {}
    for field in schema.fields:
        field_info = model_class.model_fields[field.name]
        if field_info.is_required():
            values[field.name] = zero_value(field)
        elif field.directive is not None and field.kind is not FieldKind.UNSUPPORTED:
            default = field_info.get_default(call_default_factory=True)
            if field.optional or not is_empty(default):
                values[field.name] = zero_value(field)
    return model_class.model_construct(**values)


def is_empty(value: Any) -> bool:
    """Whether a value counts as empty for the ``omitempty`` option."""
    if value is None:
        return True
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, SCALAR_TYPES):
        return not value
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``None`` from ``Optional[T]`` / ``T | None`` annotations."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none_args) == 1:
            return non_none_args[0], True
    return annotation, False


def _is_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def _is_enum(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, enum.Enum)


def _classify(annotation: Any) -> tuple[FieldKind, Any]:
    """Determine the field kind and the type the codec works with."""
    if _is_model(annotation):
        return FieldKind.GROUP, annotation

    if annotation in SCALAR_TYPES:
        return FieldKind.SCALAR, annotation

    if _is_enum(annotation):
        if all(isinstance(member.value, SCALAR_TYPES) for member in annotation):
            return FieldKind.SCALAR, annotation
        return FieldKind.UNSUPPORTED, annotation

    origin = get_origin(annotation)
    args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
    if origin in (list, tuple) and len(args) == 1 and _is_model(args[0]):
        return FieldKind.REPEATED, args[0]

    return FieldKind.UNSUPPORTED, annotation
