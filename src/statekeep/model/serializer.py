"""Serialization of conversion results to JSON and YAML.

The serialized form is a plain dict/list structure that a code generator
can consume without importing statekeep::

    classes:
      - package: app
        binary_name: Screen$Dialog
        relative_name: Screen.Dialog
        parent: app.Box
        attributes:
          - name: title
            type: java.lang.String

Usage
-----
::

    from statekeep.model.serializer import ResultSerializer

    text = ResultSerializer().to_yaml(groups)
"""
from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import yaml

from statekeep.model.descriptors import AttributeDescriptor, ClassDescriptor, ClassGroups


def format_type(type_: Any) -> str:
    """Render a type handle as text: classes as ``module.qualname``, others via ``str``."""
    if isinstance(type_, type):
        if type_.__module__ == "builtins":
            return type_.__qualname__
        return f"{type_.__module__}.{type_.__qualname__}"
    return str(type_)


class ResultSerializer:
    """Converts ``ClassGroups`` to plain dicts, JSON and YAML.

    Parameters
    ----------
    type_formatter:
        Renders attribute type handles as strings.
    """

    def __init__(self, type_formatter: Callable[[Any], str] = format_type) -> None:
        self._format_type = type_formatter

    def to_dict(self, groups: ClassGroups) -> dict[str, object]:
        """Serialize ``groups`` to a JSON-compatible dict."""
        return {
            "classes": [
                self._class_to_dict(owner, attributes) for owner, attributes in groups.items()
            ]
        }

    def _class_to_dict(
        self, owner: ClassDescriptor, attributes: list[AttributeDescriptor]
    ) -> dict[str, object]:
        return {
            "package": owner.package_name,
            "binary_name": owner.binary_name,
            "relative_name": owner.relative_name,
            "parent": owner.parent_qualified_name,
            "attributes": [self._attribute_to_dict(a) for a in attributes],
        }

    def _attribute_to_dict(self, attribute: AttributeDescriptor) -> dict[str, str]:
        return {"name": attribute.name, "type": self._format_type(attribute.type)}

    # ------------------------------------------------------------------
    # Text formats
    # ------------------------------------------------------------------

    def to_json(self, groups: ClassGroups, indent: int = 2) -> str:
        """Serialize ``groups`` to a JSON string."""
        return json.dumps(self.to_dict(groups), indent=indent, ensure_ascii=False)

    def to_yaml(self, groups: ClassGroups) -> str:
        """Serialize ``groups`` to a YAML string."""
        return yaml.dump(
            self.to_dict(groups), default_flow_style=False, allow_unicode=True, sort_keys=False
        )
