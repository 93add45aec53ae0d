"""A declarative, in-memory type system.

Types are registered as ``TypeDecl`` nodes and referenced through
``TypeRef`` handles.  Erasure drops type arguments and equality is
structural, which is all the converter needs to reason about generic
declaring types.

Usage
-----
::

    from statekeep.model.nodes import MemberDecl, Modifier, TypeDecl, TypeRef
    from statekeep.typesystem.memory import InMemoryTypeSystem

    types = InMemoryTypeSystem([
        TypeDecl("app.Base", "app"),
        TypeDecl("app.Screen", "app", superclass=TypeRef("app.Base")),
    ])
    types.check_hierarchy()
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from statekeep.errors import ModelError, UnknownTypeError
from statekeep.model.nodes import Location, MemberDecl, Modifier, TypeDecl, TypeRef

logger = logging.getLogger(__name__)


class InMemoryTypeSystem:
    """Type system backed by a dictionary of ``TypeDecl`` nodes.

    Parameters
    ----------
    types:
        Initial type declarations.  Names must be unique.
    """

    def __init__(self, types: Iterable[TypeDecl] = ()) -> None:
        self._types: dict[str, TypeDecl] = {}
        for decl in types:
            self.declare(decl)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def declare(self, decl: TypeDecl) -> None:
        """Register ``decl``.

        Raises
        ------
        ModelError
            If a type with the same qualified name is already registered.
        """
        if decl.qualified_name in self._types:
            raise ModelError(
                f"Type {decl.qualified_name!r} is declared more than once",
                origin=decl.location.origin,
            )
        self._types[decl.qualified_name] = decl
        logger.debug("Declared type %s", decl.qualified_name)

    def lookup(self, name: str) -> TypeDecl:
        """Return the declaration registered under ``name``.

        Raises
        ------
        UnknownTypeError
            If no such type is registered.
        """
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDecl]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def check_hierarchy(self) -> None:
        """Verify every superclass is declared and inheritance is acyclic.

        Raises
        ------
        ModelError
            On the first undeclared superclass or inheritance cycle found.
        """
        for decl in self._types.values():
            seen: list[str] = [decl.qualified_name]
            current = decl
            while current.superclass is not None:
                parent_name = current.superclass.name
                if parent_name not in self._types:
                    raise ModelError(
                        f"Type {current.qualified_name!r} extends undeclared type {parent_name!r}",
                        origin=current.location.origin,
                    )
                if parent_name in seen:
                    chain = " -> ".join([*seen, parent_name])
                    raise ModelError(
                        f"Inheritance cycle: {chain}",
                        origin=decl.location.origin,
                    )
                seen.append(parent_name)
                current = self._types[parent_name]

    # ------------------------------------------------------------------
    # TypeSystem protocol
    # ------------------------------------------------------------------

    def modifiers_of(self, declaration: MemberDecl) -> frozenset[Modifier]:
        return declaration.modifiers

    def simple_name_of(self, declaration: MemberDecl) -> str:
        return declaration.name

    def location_of(self, declaration: MemberDecl) -> Location:
        return declaration.location

    def enclosing_type_of(self, declaration: MemberDecl) -> TypeRef:
        return declaration.enclosing

    def type_of(self, declaration: MemberDecl) -> TypeRef:
        return declaration.type

    def qualified_name_of(self, type_: TypeRef) -> str:
        return type_.name

    def package_of(self, type_: TypeRef) -> str:
        return self.lookup(type_.name).package

    def super_type_of(self, type_: TypeRef) -> TypeRef | None:
        return self.lookup(type_.name).superclass

    def erase(self, type_: TypeRef) -> TypeRef:
        if type_.is_raw:
            return type_
        return TypeRef(type_.name)

    def types_equal(self, first: TypeRef, second: TypeRef) -> bool:
        return first == second
