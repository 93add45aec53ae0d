"""Diagnostic types and sinks.

A ``Diagnostic`` is a message attached to a source location.  The
converter reports rejected members through a ``DiagnosticSink``; the sink
never influences control flow.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from statekeep.model.nodes import Location

logger = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics."""

    ERROR = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single reported finding.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    location:
        Source location of the offending declaration.
    severity:
        How serious this finding is.
    """

    message: str
    location: Location
    severity: DiagnosticSeverity = field(default=DiagnosticSeverity.ERROR)

    def __str__(self) -> str:
        return f"{self.severity.name} at {self.location}: {self.message}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic has ERROR severity."""
        return self.severity == DiagnosticSeverity.ERROR


class DiagnosticSink(Protocol):
    """Receives error reports tied to a source location."""

    def log_error(self, location: Location, message: str) -> None: ...


class CollectingSink:
    """Sink that keeps every reported diagnostic in report order."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def log_error(self, location: Location, message: str) -> None:
        self._diagnostics.append(Diagnostic(message=message, location=location))

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """A copy of the diagnostics reported so far."""
        return list(self._diagnostics)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self._diagnostics if d.is_error)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def clear(self) -> None:
        self._diagnostics.clear()


class LoggingSink:
    """Sink that forwards every report to a ``logging.Logger``."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target if target is not None else logger

    def log_error(self, location: Location, message: str) -> None:
        self._logger.error("%s: %s", location, message)
