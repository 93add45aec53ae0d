"""Grouping of attribute descriptors by declaring type, with parent links.

Each group key is a ``ClassDescriptor`` carrying the qualified name of the
nearest ancestor that also appears in the ``ErasureIndex``.  Ancestors
without accepted members are walked through, so a generated handler can
delegate straight to the closest handler above it.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from statekeep.converter.erasure import ErasureIndex
from statekeep.model.descriptors import AttributeDescriptor, ClassDescriptor, ClassGroups
from statekeep.typesystem.protocol import TypeSystem

logger = logging.getLogger(__name__)

NESTED_SEPARATOR = "."
BINARY_SEPARATOR = "$"


def split_names(qualified_name: str, package: str) -> tuple[str, str]:
    """Return ``(binary_name, relative_name)`` for a qualified type name.

    ``p.Outer.Inner`` in package ``p`` gives ``("Outer$Inner", "Outer.Inner")``.
    A type in the default (empty) package keeps its full name.
    """
    if package:
        relative_name = qualified_name[len(package) + 1:]
    else:
        relative_name = qualified_name
    return relative_name.replace(NESTED_SEPARATOR, BINARY_SEPARATOR), relative_name


def find_parent_name(
    type_: Any, type_system: TypeSystem[Any, Any], index: ErasureIndex
) -> str | None:
    """Return the qualified name of the nearest indexed ancestor of ``type_``.

    The walk starts at the immediate supertype and stops at the first
    candidate whose erasure is in ``index``.  Returns ``None`` when the
    hierarchy is exhausted.
    """
    candidate = type_system.super_type_of(type_)
    while candidate is not None:
        if candidate in index:
            return type_system.qualified_name_of(candidate)
        candidate = type_system.super_type_of(candidate)
    return None


def describe_class(
    type_: Any, type_system: TypeSystem[Any, Any], index: ErasureIndex
) -> ClassDescriptor:
    """Build the ``ClassDescriptor`` for declaring type ``type_``."""
    package = type_system.package_of(type_)
    binary_name, relative_name = split_names(type_system.qualified_name_of(type_), package)
    return ClassDescriptor(
        package_name=package,
        binary_name=binary_name,
        relative_name=relative_name,
        parent_qualified_name=find_parent_name(type_, type_system, index),
        underlying_type=type_,
        erased_type=type_system.erase(type_),
    )


def group_by_class(
    descriptors: Iterable[AttributeDescriptor],
    type_system: TypeSystem[Any, Any],
    index: ErasureIndex,
) -> ClassGroups:
    """Group ``descriptors`` by erased declaring type.

    Descriptors whose declaring types erase to the same type share a group
    even when their type arguments differ.  Groups appear in order of first
    occurrence and keep input order inside each group.
    """
    buckets: list[tuple[Any, ClassDescriptor, list[AttributeDescriptor]]] = []
    for descriptor in descriptors:
        erased = type_system.erase(descriptor.declaring_type)
        for bucket_type, _, attributes in buckets:
            if type_system.types_equal(bucket_type, erased):
                attributes.append(descriptor)
                break
        else:
            owner = describe_class(descriptor.declaring_type, type_system, index)
            logger.debug(
                "Group %s (parent: %s)", owner.qualified_name, owner.parent_qualified_name
            )
            buckets.append((erased, owner, [descriptor]))

    return {owner: attributes for _, owner, attributes in buckets}
