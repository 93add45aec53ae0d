"""A type system over live Python classes.

Members are marked for processing by placing the ``State`` marker in
``typing.Annotated`` metadata::

    from typing import Annotated, ClassVar

    from statekeep.typesystem.reflect import State

    class Screen:
        title: ClassVar[Annotated[str, State]] = "home"
        __cursor: Annotated[int, State]

Modifiers are derived from the annotation and the attribute name:

    ClassVar[...]        static
    Final[...]           final
    __name (mangled)     private
    _name                protected
    anything else        public

Type handles are classes or parameterized generic aliases such as
``Box[int]``; erasure is ``typing.get_origin``.
"""
from __future__ import annotations

import inspect
import logging
import typing
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Final, Generic, Protocol

from statekeep.model.nodes import Location, Modifier

logger = logging.getLogger(__name__)


class State:
    """Marker for members whose state should be saved and restored.

    Either the class itself or an instance may be used as
    ``Annotated`` metadata.
    """


@dataclass(frozen=True)
class ReflectedMember:
    """A marked attribute declared directly in ``owner``.

    Parameters
    ----------
    owner:
        The class whose body declares the attribute.
    name:
        The attribute name as stored in ``owner.__annotations__``
        (mangled for ``__private`` names).
    annotation:
        The resolved annotation, wrappers included.
    """

    owner: type
    name: str
    annotation: Any


def _unwrap(hint: Any) -> tuple[Any, frozenset[Modifier], tuple[Any, ...]]:
    """Strip ``ClassVar``, ``Final`` and ``Annotated`` layers from ``hint``."""
    modifiers: set[Modifier] = set()
    metadata: list[Any] = []
    while True:
        if hint is ClassVar:
            modifiers.add(Modifier.STATIC)
            return Any, frozenset(modifiers), tuple(metadata)
        if hint is Final:
            modifiers.add(Modifier.FINAL)
            return Any, frozenset(modifiers), tuple(metadata)
        origin = typing.get_origin(hint)
        if origin is ClassVar:
            modifiers.add(Modifier.STATIC)
        elif origin is Final:
            modifiers.add(Modifier.FINAL)
        elif origin is Annotated:
            metadata.extend(hint.__metadata__)
        else:
            return hint, frozenset(modifiers), tuple(metadata)
        hint = typing.get_args(hint)[0]


def _is_state_marker(value: Any) -> bool:
    return value is State or isinstance(value, State)


def collect_members(*classes: type) -> list[ReflectedMember]:
    """Return the ``State``-marked members each class declares itself.

    Inherited annotations are not repeated for subclasses; each member is
    reported once, for the class whose body declares it.  A class passed
    more than once is inspected once.  Order follows ``classes`` and then
    annotation order within each class.
    """
    members: list[ReflectedMember] = []
    seen: set[type] = set()
    for cls in classes:
        if cls in seen:
            continue
        seen.add(cls)
        own = inspect.get_annotations(cls)
        if not own:
            continue
        hints = typing.get_type_hints(cls, include_extras=True)
        for name in own:
            hint = hints.get(name, own[name])
            _, _, metadata = _unwrap(hint)
            if any(_is_state_marker(m) for m in metadata):
                members.append(ReflectedMember(owner=cls, name=name, annotation=hint))
    logger.debug("Collected %d marked members from %d classes", len(members), len(classes))
    return members


class PythonTypeSystem:
    """Answers type-system queries about ``ReflectedMember`` declarations."""

    def modifiers_of(self, declaration: ReflectedMember) -> frozenset[Modifier]:
        _, modifiers, _ = _unwrap(declaration.annotation)
        owner_name = declaration.owner.__name__.lstrip("_")
        if declaration.name.startswith(f"_{owner_name}__"):
            visibility = Modifier.PRIVATE
        elif declaration.name.startswith("_"):
            visibility = Modifier.PROTECTED
        else:
            visibility = Modifier.PUBLIC
        return modifiers | {visibility}

    def simple_name_of(self, declaration: ReflectedMember) -> str:
        return declaration.name

    def location_of(self, declaration: ReflectedMember) -> Location:
        owner = declaration.owner
        symbol = f"{owner.__module__}.{owner.__qualname__}.{declaration.name}"
        try:
            path = inspect.getsourcefile(owner)
            _, line = inspect.getsourcelines(owner)
        except (OSError, TypeError):
            return Location(origin=symbol)
        if path is None:
            return Location(origin=symbol)
        return Location(origin=path, line=line)

    def enclosing_type_of(self, declaration: ReflectedMember) -> Any:
        return declaration.owner

    def type_of(self, declaration: ReflectedMember) -> Any:
        hint, _, _ = _unwrap(declaration.annotation)
        return hint

    def qualified_name_of(self, type_: Any) -> str:
        raw = self.erase(type_)
        package = self.package_of(raw)
        if not package:
            return raw.__qualname__
        return f"{package}.{raw.__qualname__}"

    def package_of(self, type_: Any) -> str:
        module = self.erase(type_).__module__
        return "" if module == "builtins" else module

    def super_type_of(self, type_: Any) -> Any | None:
        cls = self.erase(type_)
        bases = cls.__dict__.get("__orig_bases__", cls.__bases__)
        for base in bases:
            raw = typing.get_origin(base) or base
            if raw is object or raw is Generic or raw is Protocol:
                continue
            return base
        return None

    def erase(self, type_: Any) -> Any:
        return typing.get_origin(type_) or type_

    def types_equal(self, first: Any, second: Any) -> bool:
        return first == second
