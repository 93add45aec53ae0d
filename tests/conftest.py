"""Shared test fixtures for statekeep.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from statekeep.model.nodes import Location, MemberDecl, Modifier, TypeDecl, TypeRef
from statekeep.typesystem.memory import InMemoryTypeSystem


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "statekeep"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def chain_types() -> InMemoryTypeSystem:
    """``p.D extends p.C extends p.B extends p.A``; ``p.A`` is the root."""
    return InMemoryTypeSystem([
        TypeDecl("p.A", "p"),
        TypeDecl("p.B", "p", superclass=TypeRef("p.A")),
        TypeDecl("p.C", "p", superclass=TypeRef("p.B")),
        TypeDecl("p.D", "p", superclass=TypeRef("p.C")),
    ])


@pytest.fixture()
def chain_members() -> list[MemberDecl]:
    """One accepted member in each of ``p.B``, ``p.C`` and ``p.D``."""
    return [
        MemberDecl("b1", TypeRef("int"), TypeRef("p.B"), frozenset({Modifier.PRIVATE}), Location("m", 1)),
        MemberDecl("c1", TypeRef("int"), TypeRef("p.C"), frozenset({Modifier.STATIC}), Location("m", 2)),
        MemberDecl("d1", TypeRef("int"), TypeRef("p.D"), frozenset({Modifier.FINAL}), Location("m", 3)),
    ]


@pytest.fixture()
def model_file(tmp_path: Path) -> Path:
    """A YAML model with nested and generic types and one rejected member."""
    path = tmp_path / "model.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            types:
              - name: app.Base
              - name: app.Box
                params: [T]
                extends: app.Base
              - name: app.Screen
                extends: app.Box<java.lang.String>
              - name: app.Screen.Dialog
                package: app
                extends: app.Screen
            members:
              - name: token
                type: java.lang.String
                in: app.Box
                modifiers: [private]
                line: 3
              - name: title
                type: java.lang.String
                in: app.Screen.Dialog
                modifiers: [static]
                line: 9
              - name: visible
                type: boolean
                in: app.Screen
                modifiers: [public]
                line: 14
            """
        ),
        encoding="utf-8",
    )
    return path
