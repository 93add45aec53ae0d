"""statekeep — member classification and hierarchy linking for state-saving generators.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from typing import Annotated, ClassVar

    import statekeep
    from statekeep import State

    class Base:
        __token: Annotated[str, State]

    class Screen(Base):
        title: ClassVar[Annotated[str, State]] = "home"

    groups = statekeep.reflect(Base, Screen)
    for owner, attributes in groups.items():
        print(owner.binary_name, owner.parent_qualified_name)

    # Or from a declarative model file
    batch = statekeep.load("model.yaml")
    groups = statekeep.convert(batch.members, batch.type_system)

    statekeep.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from statekeep.typesystem.reflect import State

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from collections.abc import Iterable

    from statekeep.diagnostics import DiagnosticSink
    from statekeep.model.descriptors import ClassGroups
    from statekeep.model.loader import Batch
    from statekeep.typesystem.protocol import TypeSystem


def convert(
    declarations: "Iterable[Any]",
    type_system: "TypeSystem[Any, Any]",
    sink: "DiagnosticSink | None" = None,
) -> "ClassGroups":
    """Group annotated member declarations by declaring class.

    Parameters
    ----------
    declarations:
        Member declarations understood by ``type_system``.
    type_system:
        The type-system query interface for the declarations.
    sink:
        Receives rejected-member errors.  Defaults to logging them.

    Returns
    -------
    ClassGroups
        Mapping of ``ClassDescriptor`` to its accepted attributes.
    """
    from statekeep.converter.converter import convert as _convert

    return _convert(declarations, type_system, sink=sink)


def load(path: str | Path) -> "Batch":
    """Load a YAML or JSON model file into a ``Batch``.

    Raises
    ------
    statekeep.errors.ModelError
        If the document is malformed.
    """
    from statekeep.model.loader import ModelLoader

    return ModelLoader().load(path)


def reflect(*classes: type, sink: "DiagnosticSink | None" = None) -> "ClassGroups":
    """Convert the ``State``-marked members of live Python classes.

    Parameters
    ----------
    classes:
        The classes to inspect.  Only members a class declares itself are
        collected for it.
    sink:
        Receives rejected-member errors.  Defaults to logging them.
    """
    from statekeep.converter.converter import convert as _convert
    from statekeep.typesystem.reflect import PythonTypeSystem, collect_members

    return _convert(collect_members(*classes), PythonTypeSystem(), sink=sink)


__all__ = [
    "__version__",
    "State",
    "convert",
    "load",
    "reflect",
]
