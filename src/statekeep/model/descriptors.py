"""Result descriptors produced by a conversion.

An ``AttributeDescriptor`` describes one accepted member; a
``ClassDescriptor`` describes the declaring type that owns a group of them,
including the qualified name of its nearest annotated ancestor.  Both are
created fresh for each conversion and handed to the downstream generator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AttributeDescriptor:
    """An accepted member declaration.

    Parameters
    ----------
    name:
        Simple name of the member.
    type:
        The member's type handle, as returned by the type system.
    declaring_type:
        Handle of the type that declares the member.  Used only as the
        grouping key.
    """

    name: str
    type: Any
    declaring_type: Any


@dataclass(frozen=True)
class ClassDescriptor:
    """A declaring type that owns at least one accepted member.

    Parameters
    ----------
    package_name:
        Package (module) qualifier of the type; empty for the default package.
    binary_name:
        Name relative to the package with nesting flattened to ``$``,
        e.g. ``Outer$Inner``.
    relative_name:
        Name relative to the package in dotted form, e.g. ``Outer.Inner``.
    parent_qualified_name:
        Fully-qualified name of the nearest ancestor that also owns accepted
        members, or ``None``.
    underlying_type:
        The declaring type handle.  Not part of equality or hashing.
    erased_type:
        The erased declaring type.  Part of equality and hashing, so two
        distinct types that share a name stay separate keys; must be
        hashable when descriptors are used as mapping keys.
    """

    package_name: str
    binary_name: str
    relative_name: str
    parent_qualified_name: str | None
    underlying_type: Any = field(default=None, compare=False, repr=False)
    erased_type: Any = field(default=None, repr=False)

    @property
    def qualified_name(self) -> str:
        """The dotted fully-qualified name of the type."""
        if not self.package_name:
            return self.relative_name
        return f"{self.package_name}.{self.relative_name}"

    @property
    def has_parent(self) -> bool:
        """Return True if an annotated ancestor was found."""
        return self.parent_qualified_name is not None


ClassGroups = dict[ClassDescriptor, list[AttributeDescriptor]]
