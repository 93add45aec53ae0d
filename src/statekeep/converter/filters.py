"""Modifier policy for annotated members.

A member is accepted when its modifiers include at least one of the
accepted modifiers (by default private, static or final).  Every rejected
member is reported to the diagnostic sink and dropped; rejection never
aborts the batch.
"""
from __future__ import annotations

import logging
from collections.abc import Set
from typing import Any

from statekeep.diagnostics import DiagnosticSink
from statekeep.model.nodes import Modifier
from statekeep.typesystem.protocol import TypeSystem

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTED_MODIFIERS: frozenset[Modifier] = frozenset(
    {Modifier.PRIVATE, Modifier.STATIC, Modifier.FINAL}
)

# Kept verbatim from the established diagnostic even though it reads as the
# inverse of the accept rule above.
INVALID_MODIFIERS_MESSAGE = "member must not be private, static, or immutable"


def is_valid_member(
    declaration: Any,
    type_system: TypeSystem[Any, Any],
    sink: DiagnosticSink,
    accepted_modifiers: Set[Modifier] = DEFAULT_ACCEPTED_MODIFIERS,
) -> bool:
    """Return True if ``declaration`` passes the modifier policy.

    Parameters
    ----------
    declaration:
        The member declaration to check.
    type_system:
        Supplies the declaration's modifiers and location.
    sink:
        Receives one error for a rejected declaration.
    accepted_modifiers:
        The declaration is accepted if it carries any of these.

    Returns
    -------
    bool
        ``True`` when accepted, ``False`` when rejected and reported.
    """
    modifiers = type_system.modifiers_of(declaration)
    if not modifiers.isdisjoint(accepted_modifiers):
        return True

    location = type_system.location_of(declaration)
    logger.debug("Rejected member at %s with modifiers %s", location, sorted(m.name for m in modifiers))
    sink.log_error(location, INVALID_MODIFIERS_MESSAGE)
    return False
