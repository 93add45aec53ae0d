"""statekeep converter.

Exports the ``Converter`` class, the ``convert`` convenience function and
the individual pipeline stages.
"""
from __future__ import annotations

from statekeep.converter.converter import Converter, convert
from statekeep.converter.descriptors import to_attribute_descriptor
from statekeep.converter.erasure import ErasureIndex
from statekeep.converter.filters import (
    DEFAULT_ACCEPTED_MODIFIERS,
    INVALID_MODIFIERS_MESSAGE,
    is_valid_member,
)
from statekeep.converter.grouping import find_parent_name, group_by_class, split_names

__all__ = [
    "Converter",
    "convert",
    "to_attribute_descriptor",
    "ErasureIndex",
    "DEFAULT_ACCEPTED_MODIFIERS",
    "INVALID_MODIFIERS_MESSAGE",
    "is_valid_member",
    "find_parent_name",
    "group_by_class",
    "split_names",
]
