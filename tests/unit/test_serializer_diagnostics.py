"""Unit tests for statekeep.model.serializer and statekeep.diagnostics."""
from __future__ import annotations

import dataclasses
import json

import pytest
import yaml

from statekeep.converter import Converter
from statekeep.diagnostics import CollectingSink, Diagnostic, DiagnosticSeverity
from statekeep.model.nodes import Location, MemberDecl, Modifier, TypeRef
from statekeep.model.serializer import ResultSerializer, format_type
from statekeep.typesystem.memory import InMemoryTypeSystem


# ===========================================================================
# ResultSerializer
# ===========================================================================


class TestFormatType:
    def test_builtin_class(self) -> None:
        assert format_type(int) == "int"

    def test_user_class(self) -> None:
        assert format_type(Location) == "statekeep.model.nodes.Location"

    def test_type_ref(self) -> None:
        assert format_type(TypeRef.parse("p.Box<T>")) == "p.Box<T>"


class TestResultSerializer:
    @pytest.fixture()
    def groups(self, chain_types: InMemoryTypeSystem, chain_members: list[MemberDecl]):
        return Converter(chain_types, sink=CollectingSink()).convert(chain_members)

    def test_to_dict_shape(self, groups) -> None:
        data = ResultSerializer().to_dict(groups)
        assert data["classes"][0] == {
            "package": "p",
            "binary_name": "B",
            "relative_name": "B",
            "parent": None,
            "attributes": [{"name": "b1", "type": "int"}],
        }
        assert [c["parent"] for c in data["classes"]] == [None, "p.B", "p.C"]

    def test_to_json_parses_back(self, groups) -> None:
        text = ResultSerializer().to_json(groups)
        assert json.loads(text) == ResultSerializer().to_dict(groups)

    def test_to_yaml_parses_back(self, groups) -> None:
        text = ResultSerializer().to_yaml(groups)
        assert yaml.safe_load(text) == ResultSerializer().to_dict(groups)

    def test_custom_type_formatter(self, groups) -> None:
        data = ResultSerializer(type_formatter=lambda t: "?").to_dict(groups)
        assert {a["type"] for c in data["classes"] for a in c["attributes"]} == {"?"}

    def test_empty_groups(self) -> None:
        assert ResultSerializer().to_dict({}) == {"classes": []}


# ===========================================================================
# Diagnostics
# ===========================================================================


class TestDiagnostic:
    def test_default_severity_is_error(self) -> None:
        d = Diagnostic(message="bad", location=Location("m.yaml", 2))
        assert d.severity is DiagnosticSeverity.ERROR
        assert d.is_error

    def test_str(self) -> None:
        d = Diagnostic(message="bad", location=Location("m.yaml", 2, 5))
        assert str(d) == "ERROR at m.yaml:2:5: bad"

    def test_is_frozen(self) -> None:
        d = Diagnostic("bad", Location.unknown())
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.message = "other"  # type: ignore[misc]


class TestCollectingSink:
    def test_collects_in_order(self) -> None:
        sink = CollectingSink()
        sink.log_error(Location("a", 1), "first")
        sink.log_error(Location("a", 2), "second")
        assert [d.message for d in sink.diagnostics] == ["first", "second"]
        assert len(sink) == 2
        assert sink.error_count == 2

    def test_diagnostics_returns_copy(self) -> None:
        sink = CollectingSink()
        sink.log_error(Location("a"), "x")
        sink.diagnostics.clear()
        assert len(sink) == 1

    def test_clear(self) -> None:
        sink = CollectingSink()
        sink.log_error(Location("a"), "x")
        sink.clear()
        assert len(sink) == 0

    def test_converter_reports_each_rejection(self, chain_types: InMemoryTypeSystem) -> None:
        members = [
            MemberDecl(f"m{i}", TypeRef("int"), TypeRef("p.B"), frozenset({Modifier.PUBLIC}))
            for i in range(4)
        ]
        sink = CollectingSink()
        Converter(chain_types, sink=sink).convert(members)
        assert len(sink) == 4
