"""Type-system query interface and its bundled implementations."""
from __future__ import annotations

from statekeep.typesystem.memory import InMemoryTypeSystem
from statekeep.typesystem.protocol import TypeSystem
from statekeep.typesystem.reflect import PythonTypeSystem, ReflectedMember, State, collect_members

__all__ = [
    "TypeSystem",
    "InMemoryTypeSystem",
    "PythonTypeSystem",
    "ReflectedMember",
    "State",
    "collect_members",
]
