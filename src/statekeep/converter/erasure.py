"""The set of erased declaring types in a batch.

Type handles are not assumed to be hashable or to implement ``__eq__``
the way the host type system defines equality, so membership is decided
with the type system's own ``types_equal`` predicate.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from statekeep.model.descriptors import AttributeDescriptor
from statekeep.typesystem.protocol import TypeSystem


class ErasureIndex:
    """Erased declaring types, deduplicated by semantic type equality.

    Parameters
    ----------
    type_system:
        Supplies ``erase`` and ``types_equal``.
    """

    def __init__(self, type_system: TypeSystem[Any, Any]) -> None:
        self._type_system = type_system
        self._erased: list[Any] = []

    @classmethod
    def build(
        cls,
        descriptors: Iterable[AttributeDescriptor],
        type_system: TypeSystem[Any, Any],
    ) -> "ErasureIndex":
        """Index the erasure of every descriptor's declaring type."""
        index = cls(type_system)
        for descriptor in descriptors:
            index.add(descriptor.declaring_type)
        return index

    def add(self, type_: Any) -> None:
        """Insert the erasure of ``type_`` unless an equal type is present."""
        erased = self._type_system.erase(type_)
        if self._find(erased) is None:
            self._erased.append(erased)

    def _find(self, erased: Any) -> Any | None:
        for member in self._erased:
            if self._type_system.types_equal(member, erased):
                return member
        return None

    def __contains__(self, type_: object) -> bool:
        # Both sides are compared in erased form.
        return self._find(self._type_system.erase(type_)) is not None

    def __iter__(self) -> Iterator[Any]:
        return iter(self._erased)

    def __len__(self) -> int:
        return len(self._erased)
