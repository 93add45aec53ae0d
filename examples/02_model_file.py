#!/usr/bin/env python3
"""Example: Model files — statekeep

Describe a class hierarchy declaratively, convert it, and serialize the
result for a code generator.

Usage:
    python examples/02_model_file.py

Requirements:
    pip install statekeep
"""
from __future__ import annotations

from statekeep.converter import Converter
from statekeep.diagnostics import CollectingSink
from statekeep.model.loader import ModelLoader
from statekeep.model.serializer import ResultSerializer

MODEL = """
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
  - {name: token, type: java.lang.String, in: app.Box, modifiers: [private]}
  - {name: title, type: java.lang.String, in: app.Screen.Dialog, modifiers: [static]}
  - {name: visible, type: boolean, in: app.Screen, modifiers: [public]}
"""


def main() -> None:
    batch = ModelLoader().from_yaml(MODEL, origin="example")
    sink = CollectingSink()
    groups = Converter(batch.type_system, sink=sink).convert(batch.members)

    print(ResultSerializer().to_yaml(groups))
    for diagnostic in sink.diagnostics:
        print(diagnostic)


if __name__ == "__main__":
    main()
