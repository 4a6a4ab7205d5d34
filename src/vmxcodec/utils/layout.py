"""Static key layout of record classes.

This module lists the VMX keys a record class can produce without encoding an
instance. Repeated groups are shown with an ``{n}`` placeholder index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel

from ..codec.paths import compose_path, indexed_fragment
from ..codec.schema import FieldKind, RecordSchema
from ..exceptions import SchemaError

INDEX_PLACEHOLDER = "{n}"


@dataclass(frozen=True)
class KeySpec:
    """One key of a record layout.

    Attributes:
        path: Full key path, with ``{n}`` for repeated group indices
        field: Dotted Python attribute path leading to the field
        type_name: Python type of the value
        omitempty: Whether the key is skipped for empty values
    """

    path: str
    field: str
    type_name: str
    omitempty: bool


def key_layout(model_or_class: BaseModel | type[BaseModel]) -> list[KeySpec]:
    """List the keys of a record class in encoding order.

    Args:
        model_or_class: Record instance or class

    Returns:
        KeySpec for every tagged scalar field, nested groups expanded

    Raises:
        MalformedTagError: If a field carries an invalid vmx tag
        SchemaError: If a record type contains itself

    Example:
        >>> [spec.path for spec in key_layout(VM)]
        ['.encoding', 'virtualHW.version', 'ethernet{n}.present']
    """
    # Get the class if we were passed an instance
    if isinstance(model_or_class, BaseModel):
        model_class = type(model_or_class)
    else:
        model_class = model_or_class

    specs: list[KeySpec] = []
    _collect(model_class, (), (), (model_class,), specs)
    return specs


def _collect(
    model_class: type[BaseModel],
    ancestors: Sequence[str],
    attributes: Sequence[str],
    seen: tuple[type[BaseModel], ...],
    specs: list[KeySpec],
) -> None:
    schema = RecordSchema.from_model(model_class)

    for field in schema.tagged_fields():
        attribute = (*attributes, field.name)

        if field.kind in (FieldKind.GROUP, FieldKind.REPEATED):
            if field.python_type in seen:
                raise SchemaError(
                    f"{model_class.__name__}.{field.name}: recursive record "
                    f"{field.python_type.__name__} has no finite key layout"
                )
            fragment = field.fragment
            if field.kind is FieldKind.REPEATED:
                fragment = indexed_fragment(fragment, INDEX_PLACEHOLDER)
            _collect(
                field.python_type,
                (*ancestors, fragment),
                attribute,
                (*seen, field.python_type),
                specs,
            )
            continue

        specs.append(
            KeySpec(
                path=compose_path(ancestors, field.fragment),
                field=".".join(attribute),
                type_name=field.type_name,
                omitempty=field.omitempty,
            )
        )
