#!/usr/bin/env python3
"""Example: Quickstart — statekeep

Mark state members on live Python classes, group them by class, and
print each class's nearest marked ancestor.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install statekeep
"""
from __future__ import annotations

from typing import Annotated, ClassVar

import statekeep
from statekeep import State
from statekeep.diagnostics import CollectingSink


class BaseActivity:
    __session: Annotated[str, State]


class ListActivity(BaseActivity):
    rows: int = 0


class DetailActivity(ListActivity):
    selected: ClassVar[Annotated[int, State]] = -1
    scroll: Annotated[int, State]


def main() -> None:
    print(f"statekeep version: {statekeep.__version__}")

    sink = CollectingSink()
    groups = statekeep.reflect(BaseActivity, ListActivity, DetailActivity, sink=sink)

    for owner, attributes in groups.items():
        parent = owner.parent_qualified_name or "(none)"
        names = ", ".join(a.name for a in attributes)
        print(f"{owner.binary_name}: [{names}] -> parent {parent}")

    for diagnostic in sink.diagnostics:
        print(f"rejected: {diagnostic}")


if __name__ == "__main__":
    main()
