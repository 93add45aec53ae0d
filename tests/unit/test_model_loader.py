"""Unit tests for statekeep.model.loader."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from statekeep.errors import ModelError
from statekeep.model.loader import Batch, ModelLoader
from statekeep.model.nodes import Location, Modifier, TypeRef


@pytest.fixture()
def loader() -> ModelLoader:
    return ModelLoader()


def _doc(**extra: object) -> dict[str, object]:
    doc: dict[str, object] = {
        "types": [
            {"name": "app.Base"},
            {"name": "app.Box", "params": ["T"], "extends": "app.Base"},
            {"name": "app.Outer.Inner", "package": "app", "extends": "app.Box<java.lang.String>"},
        ],
        "members": [
            {"name": "item", "type": "T", "in": "app.Box", "modifiers": ["private"], "line": 4},
        ],
    }
    doc.update(extra)
    return doc


class TestFromDict:
    def test_types_and_members(self, loader: ModelLoader) -> None:
        batch = loader.from_dict(_doc(), origin="doc")
        assert isinstance(batch, Batch)
        assert batch.origin == "doc"
        assert len(batch.type_system) == 3
        [member] = batch.members
        assert member.name == "item"
        assert member.modifiers == frozenset({Modifier.PRIVATE})
        assert member.location == Location("doc", 4)

    def test_package_defaults_to_name_prefix(self, loader: ModelLoader) -> None:
        batch = loader.from_dict(_doc())
        assert batch.type_system.lookup("app.Box").package == "app"

    def test_explicit_package_for_nested_type(self, loader: ModelLoader) -> None:
        inner = loader.from_dict(_doc()).type_system.lookup("app.Outer.Inner")
        assert inner.package == "app"
        assert inner.superclass == TypeRef("app.Box", (TypeRef("java.lang.String"),))

    def test_raw_enclosing_becomes_generic_form(self, loader: ModelLoader) -> None:
        [member] = loader.from_dict(_doc()).members
        assert member.enclosing == TypeRef("app.Box", (TypeRef("T"),))

    def test_explicit_enclosing_arguments_kept(self, loader: ModelLoader) -> None:
        doc = _doc(members=[{"name": "x", "type": "int", "in": "app.Box<int>"}])
        [member] = loader.from_dict(doc).members
        assert member.enclosing == TypeRef("app.Box", (TypeRef("int"),))
        assert member.modifiers == frozenset()

    def test_missing_sections_give_empty_batch(self, loader: ModelLoader) -> None:
        batch = loader.from_dict({})
        assert batch.members == ()
        assert len(batch.type_system) == 0


class TestFromDictErrors:
    @pytest.mark.parametrize(
        ("doc", "match"),
        [
            ([], "must be a mapping"),
            ({"types": {"name": "a"}}, "'types' must be a list"),
            ({"types": ["app.A"]}, r"types\[0\] must be a mapping"),
            ({"types": [{"package": "app"}]}, "missing required key 'name'"),
            ({"types": [{"name": "app.A", "extends": "app.Missing"}]}, "undeclared type"),
            ({"types": [{"name": "app.A", "extends": "app.A"}]}, "Inheritance cycle"),
            ({"types": [{"name": "app.A", "package": "lib"}]}, "not inside package"),
            ({"types": [{"name": "app.A", "params": "T"}]}, "'params' must be a list"),
            ({"types": [{"name": "app.A", "extends": "app.B<"}]}, "types\\[0\\]"),
            ({"types": [{"name": "app.A"}, {"name": "app.A"}]}, "more than once"),
            ({"types": [{"name": "app.A", "extends": ["app.B"]}]}, "'extends' must be a type name"),
            ({"types": [{"name": "app.A", "extends": 3}]}, "'extends' must be a type name"),
            (
                {"types": [{"name": "app.A", "extends": {"name": "app.B"}}]},
                "'extends' must be a type name",
            ),
        ],
    )
    def test_type_errors(self, loader: ModelLoader, doc: object, match: str) -> None:
        with pytest.raises(ModelError, match=match):
            loader.from_dict(doc)

    @pytest.mark.parametrize(
        ("member", "match"),
        [
            ({"type": "int", "in": "app.Base"}, "missing required key 'name'"),
            ({"name": "x", "in": "app.Base"}, "missing required key 'type'"),
            ({"name": "x", "type": "int"}, "missing required key 'in'"),
            ({"name": "x", "type": "int", "in": "app.Nope"}, "undeclared type 'app.Nope'"),
            ({"name": "x", "type": "int", "in": "app.Base", "modifiers": ["sealed"]}, "Unknown modifier"),
            ({"name": "x", "type": "int", "in": "app.Base", "modifiers": "private"}, "must be a list"),
            ({"name": "x", "type": "int", "in": "app.Base", "line": "top"}, "Invalid line/col"),
        ],
    )
    def test_member_errors(self, loader: ModelLoader, member: dict[str, object], match: str) -> None:
        with pytest.raises(ModelError, match=match):
            loader.from_dict(_doc(members=[member]))

    def test_error_carries_origin(self, loader: ModelLoader) -> None:
        with pytest.raises(ModelError) as info:
            loader.from_dict([], origin="bad.yaml")
        assert info.value.origin == "bad.yaml"
        assert str(info.value).startswith("bad.yaml: ")


class TestTextFormats:
    def test_from_yaml(self, loader: ModelLoader) -> None:
        batch = loader.from_yaml("types:\n  - name: app.A\nmembers: []\n")
        assert "app.A" in batch.type_system

    def test_invalid_yaml(self, loader: ModelLoader) -> None:
        with pytest.raises(ModelError, match="Invalid YAML"):
            loader.from_yaml("types: [\n")

    def test_from_json(self, loader: ModelLoader) -> None:
        batch = loader.from_json(json.dumps(_doc()))
        assert len(batch.members) == 1

    def test_invalid_json(self, loader: ModelLoader) -> None:
        with pytest.raises(ModelError, match="Invalid JSON"):
            loader.from_json("{")

    def test_load_json_file_by_suffix(self, loader: ModelLoader, tmp_path: Path) -> None:
        path = tmp_path / "model.json"
        path.write_text(json.dumps(_doc()), encoding="utf-8")
        batch = loader.load(path)
        assert batch.origin == str(path)
        assert batch.members[0].location.origin == str(path)

    def test_load_yaml_file(self, loader: ModelLoader, model_file: Path) -> None:
        batch = loader.load(model_file)
        assert [m.name for m in batch.members] == ["token", "title", "visible"]

    def test_load_missing_file(self, loader: ModelLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "absent.yaml")
