"""statekeep model: declaration nodes and result descriptors."""
from __future__ import annotations

from statekeep.model.descriptors import AttributeDescriptor, ClassDescriptor, ClassGroups
from statekeep.model.nodes import Location, MemberDecl, Modifier, TypeDecl, TypeRef

__all__ = [
    "AttributeDescriptor",
    "ClassDescriptor",
    "ClassGroups",
    "Location",
    "MemberDecl",
    "Modifier",
    "TypeDecl",
    "TypeRef",
]
