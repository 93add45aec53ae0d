"""Mapping from accepted declarations to ``AttributeDescriptor`` values."""
from __future__ import annotations

from typing import Any

from statekeep.model.descriptors import AttributeDescriptor
from statekeep.typesystem.protocol import TypeSystem


def to_attribute_descriptor(
    declaration: Any, type_system: TypeSystem[Any, Any]
) -> AttributeDescriptor:
    """Describe ``declaration`` by its simple name, type and declaring type."""
    return AttributeDescriptor(
        name=type_system.simple_name_of(declaration),
        type=type_system.type_of(declaration),
        declaring_type=type_system.enclosing_type_of(declaration),
    )
