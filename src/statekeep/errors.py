"""Exception types raised by statekeep.

Per-member policy violations are never exceptions; they are reported as
diagnostics.  The errors here cover malformed model documents and type
handles a type system does not recognize.
"""
from __future__ import annotations


class StatekeepError(Exception):
    """Base class for all statekeep errors."""


class ModelError(StatekeepError, ValueError):
    """Raised when a model document is structurally invalid.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    origin:
        Where the document came from (a path or ``"<string>"``).
    """

    def __init__(self, message: str, origin: str = "<string>") -> None:
        self.origin = origin
        super().__init__(f"{origin}: {message}")


class UnknownTypeError(StatekeepError, KeyError):
    """Raised when a type system is asked about a type it does not know."""

    def __init__(self, name: str) -> None:
        self.type_name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown type {self.type_name!r}"
