"""statekeep command-line interface."""
from __future__ import annotations

from statekeep.cli.main import cli

__all__ = ["cli"]
