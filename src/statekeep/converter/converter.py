"""The conversion pipeline: filter, describe, index, group.

Usage
-----
::

    from statekeep.converter import Converter
    from statekeep.diagnostics import CollectingSink

    sink = CollectingSink()
    groups = Converter(type_system, sink=sink).convert(declarations)
    for owner, attributes in groups.items():
        print(owner.binary_name, owner.parent_qualified_name, [a.name for a in attributes])
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Set
from typing import Any

from statekeep.converter.descriptors import to_attribute_descriptor
from statekeep.converter.erasure import ErasureIndex
from statekeep.converter.filters import DEFAULT_ACCEPTED_MODIFIERS, is_valid_member
from statekeep.converter.grouping import group_by_class
from statekeep.diagnostics import DiagnosticSink, LoggingSink
from statekeep.model.descriptors import ClassGroups
from statekeep.model.nodes import Modifier
from statekeep.typesystem.protocol import TypeSystem

logger = logging.getLogger(__name__)


class Converter:
    """Turns annotated member declarations into per-class groups.

    Parameters
    ----------
    type_system:
        Answers every question about declarations and types.  Borrowed
        for the duration of each call; nothing is cached.
    sink:
        Receives one error per rejected declaration.  Defaults to a
        ``LoggingSink``.
    accepted_modifiers:
        A declaration is kept if it carries any of these modifiers.
    """

    def __init__(
        self,
        type_system: TypeSystem[Any, Any],
        sink: DiagnosticSink | None = None,
        accepted_modifiers: Set[Modifier] = DEFAULT_ACCEPTED_MODIFIERS,
    ) -> None:
        self._type_system = type_system
        self._sink: DiagnosticSink = sink if sink is not None else LoggingSink()
        self._accepted_modifiers = frozenset(accepted_modifiers)

    @property
    def accepted_modifiers(self) -> frozenset[Modifier]:
        return self._accepted_modifiers

    def convert(self, declarations: Iterable[Any]) -> ClassGroups:
        """Run the whole pipeline over one batch of declarations.

        Parameters
        ----------
        declarations:
            Annotated member declarations understood by the type system.

        Returns
        -------
        ClassGroups
            Mapping of declaring class to its accepted attributes.  Empty
            when nothing was accepted.
        """
        batch = list(declarations)
        accepted = [
            to_attribute_descriptor(declaration, self._type_system)
            for declaration in batch
            if is_valid_member(
                declaration, self._type_system, self._sink, self._accepted_modifiers
            )
        ]
        index = ErasureIndex.build(accepted, self._type_system)
        groups = group_by_class(accepted, self._type_system, index)
        logger.debug(
            "Converted %d declarations: %d accepted, %d classes",
            len(batch),
            len(accepted),
            len(groups),
        )
        return groups


def convert(
    declarations: Iterable[Any],
    type_system: TypeSystem[Any, Any],
    sink: DiagnosticSink | None = None,
) -> ClassGroups:
    """Convenience function: convert with the default modifier policy."""
    return Converter(type_system, sink=sink).convert(declarations)
