"""The type-system query interface consumed by the converter.

The converter never inspects declarations or types directly.  Every
question it asks goes through an object satisfying ``TypeSystem``; the
bundled implementations are ``InMemoryTypeSystem`` (declarative models)
and ``PythonTypeSystem`` (live Python classes).
"""
from __future__ import annotations

from typing import Protocol, TypeVar

from statekeep.model.nodes import Location, Modifier

D = TypeVar("D", contravariant=True)
T = TypeVar("T")


class TypeSystem(Protocol[D, T]):
    """Queries over member declarations ``D`` and type handles ``T``."""

    def modifiers_of(self, declaration: D) -> frozenset[Modifier]:
        """Return the modifiers applied to ``declaration``."""
        ...

    def simple_name_of(self, declaration: D) -> str:
        """Return the member's simple name."""
        ...

    def location_of(self, declaration: D) -> Location:
        """Return where ``declaration`` appears in its source."""
        ...

    def enclosing_type_of(self, declaration: D) -> T:
        """Return the type that directly declares ``declaration``."""
        ...

    def type_of(self, declaration: D) -> T:
        """Return the member's own type."""
        ...

    def qualified_name_of(self, type_: T) -> str:
        """Return the fully-qualified name of the raw form of ``type_``."""
        ...

    def package_of(self, type_: T) -> str:
        """Return the package qualifier of ``type_``."""
        ...

    def super_type_of(self, type_: T) -> T | None:
        """Return the immediate supertype of ``type_``, or ``None`` at the root."""
        ...

    def erase(self, type_: T) -> T:
        """Return ``type_`` with its type arguments stripped."""
        ...

    def types_equal(self, first: T, second: T) -> bool:
        """Return True if both handles denote the same type."""
        ...
