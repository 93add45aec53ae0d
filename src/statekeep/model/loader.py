"""Loading of declarative batch models from YAML or JSON.

A model document lists the types of a program and the annotated members
they declare::

    types:
      - name: app.BaseActivity
      - name: app.Box
        params: [T]
      - name: app.Screen
        extends: app.BaseActivity
      - name: app.Screen.Dialog
        package: app
        extends: app.Box<java.lang.String>
    members:
      - name: title
        type: java.lang.String
        in: app.Screen
        modifiers: [private]
        line: 12

``package`` defaults to everything before the last dot of ``name``, so it
must be given explicitly for nested types.  A member whose ``in`` type has
no type arguments is enclosed by the generic form of that type.

Usage
-----
::

    from statekeep.model.loader import ModelLoader

    batch = ModelLoader().load("model.yaml")
    groups = Converter(batch.type_system).convert(batch.members)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from statekeep.errors import ModelError
from statekeep.model.nodes import Location, MemberDecl, Modifier, TypeDecl, TypeRef
from statekeep.typesystem.memory import InMemoryTypeSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Batch:
    """A loaded model: its type system and the member declarations to convert."""

    type_system: InMemoryTypeSystem
    members: tuple[MemberDecl, ...]
    origin: str = "<string>"


class ModelLoader:
    """Builds a ``Batch`` from a plain dict, YAML, JSON, or a file path."""

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def load(self, path: str | Path) -> Batch:
        """Load a model file; ``.json`` files are read as JSON, others as YAML."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            return self.from_json(text, origin=str(path))
        return self.from_yaml(text, origin=str(path))

    def from_json(self, text: str, origin: str = "<string>") -> Batch:
        """Load a model from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ModelError(f"Invalid JSON: {exc}", origin=origin) from exc
        return self.from_dict(data, origin=origin)

    def from_yaml(self, text: str, origin: str = "<string>") -> Batch:
        """Load a model from YAML text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ModelError(f"Invalid YAML: {exc}", origin=origin) from exc
        return self.from_dict(data, origin=origin)

    def from_dict(self, data: Any, origin: str = "<string>") -> Batch:
        """Load a model from an already-parsed document.

        Raises
        ------
        ModelError
            If the document is not a mapping, an entry is missing a required
            key, a name cannot be resolved, or inheritance is cyclic.
        """
        if not isinstance(data, dict):
            raise ModelError("Model document must be a mapping", origin=origin)

        type_system = InMemoryTypeSystem()
        for position, entry in enumerate(self._entries(data, "types", origin)):
            type_system.declare(self._type_from_dict(entry, position, origin))
        type_system.check_hierarchy()

        members = tuple(
            self._member_from_dict(entry, position, type_system, origin)
            for position, entry in enumerate(self._entries(data, "members", origin))
        )
        logger.debug(
            "Loaded model %s: %d types, %d members", origin, len(type_system), len(members)
        )
        return Batch(type_system=type_system, members=members, origin=origin)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entries(self, data: dict[str, Any], key: str, origin: str) -> list[dict[str, Any]]:
        entries = data.get(key) or []
        if not isinstance(entries, list):
            raise ModelError(f"{key!r} must be a list", origin=origin)
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ModelError(f"{key}[{position}] must be a mapping", origin=origin)
        return entries

    def _require(self, entry: dict[str, Any], key: str, where: str, origin: str) -> str:
        value = entry.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ModelError(f"{where} is missing required key {key!r}", origin=origin)
        return value.strip()

    def _parse_ref(self, text: str, where: str, origin: str) -> TypeRef:
        try:
            return TypeRef.parse(text)
        except ValueError as exc:
            raise ModelError(f"{where}: {exc}", origin=origin) from exc

    def _location(self, entry: dict[str, Any], origin: str) -> Location:
        try:
            return Location(
                origin=origin, line=int(entry.get("line", 0)), col=int(entry.get("col", 0))
            )
        except (TypeError, ValueError) as exc:
            raise ModelError(f"Invalid line/col in entry {entry!r}", origin=origin) from exc

    def _type_from_dict(self, entry: dict[str, Any], position: int, origin: str) -> TypeDecl:
        where = f"types[{position}]"
        name = self._require(entry, "name", where, origin)
        package = entry.get("package")
        if package is None:
            package = name.rpartition(".")[0]
        elif not name.startswith(f"{package}.") and package:
            raise ModelError(f"{where}: {name!r} is not inside package {package!r}", origin=origin)

        extends = entry.get("extends")
        if extends is not None and not isinstance(extends, str):
            raise ModelError(f"{where}: 'extends' must be a type name", origin=origin)
        superclass = self._parse_ref(extends, where, origin) if extends else None
        params = entry.get("params") or []
        if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
            raise ModelError(f"{where}: 'params' must be a list of names", origin=origin)

        return TypeDecl(
            qualified_name=name,
            package=package,
            superclass=superclass,
            type_params=tuple(params),
            location=self._location(entry, origin),
        )

    def _member_from_dict(
        self,
        entry: dict[str, Any],
        position: int,
        type_system: InMemoryTypeSystem,
        origin: str,
    ) -> MemberDecl:
        where = f"members[{position}]"
        name = self._require(entry, "name", where, origin)
        member_type = self._parse_ref(self._require(entry, "type", where, origin), where, origin)
        enclosing = self._parse_ref(self._require(entry, "in", where, origin), where, origin)
        if enclosing.name not in type_system:
            raise ModelError(
                f"{where}: member {name!r} is declared in undeclared type {enclosing.name!r}",
                origin=origin,
            )
        if enclosing.is_raw:
            enclosing = type_system.lookup(enclosing.name).as_type

        raw_modifiers = entry.get("modifiers") or []
        if not isinstance(raw_modifiers, list):
            raise ModelError(f"{where}: 'modifiers' must be a list", origin=origin)
        try:
            modifiers = frozenset(Modifier.from_name(str(m)) for m in raw_modifiers)
        except ValueError as exc:
            raise ModelError(f"{where}: {exc}", origin=origin) from exc

        return MemberDecl(
            name=name,
            type=member_type,
            enclosing=enclosing,
            modifiers=modifiers,
            location=self._location(entry, origin),
        )
