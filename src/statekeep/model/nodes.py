"""Declaration-side node definitions for statekeep.

These nodes describe the *input* of a conversion when the in-memory type
system is used: named types with an optional superclass, and member
declarations with modifiers and a source location.  Every node is a frozen
dataclass so that type references can be used as dictionary keys and
compared structurally.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Location:
    """Where a declaration came from.

    Parameters
    ----------
    origin:
        A file path, module path or other human-readable source name.
    line:
        1-based line number, or 0 when unknown.
    col:
        1-based column number, or 0 when unknown.
    """

    origin: str
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        if self.line and self.col:
            return f"{self.origin}:{self.line}:{self.col}"
        if self.line:
            return f"{self.origin}:{self.line}"
        return self.origin

    @classmethod
    def unknown(cls) -> "Location":
        """Return a sentinel location used when position info is unavailable."""
        return cls(origin="<unknown>")


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------


class Modifier(Enum):
    """Member modifiers understood by the validity filter."""

    PUBLIC = auto()
    PROTECTED = auto()
    PRIVATE = auto()
    STATIC = auto()
    FINAL = auto()
    TRANSIENT = auto()
    VOLATILE = auto()

    @classmethod
    def from_name(cls, name: str) -> "Modifier":
        """Look up a modifier by case-insensitive name.

        Raises
        ------
        ValueError
            If ``name`` does not name a modifier.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown modifier {name!r}; expected one of: {valid}") from None


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------

_TYPE_TOKEN = re.compile(r"\s*(?:(?P<name>[\w.$?]+)|(?P<punct>[<>,]))")


@dataclass(frozen=True, slots=True)
class TypeRef:
    """A reference to a (possibly parameterized) type, e.g. ``p.Box<T>``.

    Parameters
    ----------
    name:
        Fully-qualified name of the raw type.
    args:
        Type arguments, empty for a raw type.
    """

    name: str
    args: tuple["TypeRef", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.args)}>"

    @property
    def is_raw(self) -> bool:
        """Return True if this reference carries no type arguments."""
        return not self.args

    @classmethod
    def parse(cls, text: str) -> "TypeRef":
        """Parse ``Name<Arg, Other<X>>`` notation into a ``TypeRef``.

        Raises
        ------
        ValueError
            If ``text`` is not a well-formed type reference.
        """
        tokens: list[str] = []
        pos = 0
        stripped = text.rstrip()
        while pos < len(stripped):
            match = _TYPE_TOKEN.match(stripped, pos)
            if match is None:
                raise ValueError(f"Unexpected character {stripped[pos]!r} in type {text!r}")
            tokens.append(match.group("name") or match.group("punct"))
            pos = match.end()
        if not tokens:
            raise ValueError("Empty type reference")

        ref, index = cls._parse_tokens(tokens, 0, text)
        if index != len(tokens):
            raise ValueError(f"Trailing input {tokens[index]!r} in type {text!r}")
        return ref

    @classmethod
    def _parse_tokens(cls, tokens: list[str], index: int, text: str) -> tuple["TypeRef", int]:
        if index >= len(tokens) or tokens[index] in "<>,":
            raise ValueError(f"Expected a type name in {text!r}")
        name = tokens[index]
        index += 1
        if index >= len(tokens) or tokens[index] != "<":
            return cls(name), index

        args: list[TypeRef] = []
        index += 1
        while True:
            arg, index = cls._parse_tokens(tokens, index, text)
            args.append(arg)
            if index >= len(tokens):
                raise ValueError(f"Unclosed '<' in type {text!r}")
            if tokens[index] == ",":
                index += 1
                continue
            if tokens[index] == ">":
                return cls(name, tuple(args)), index + 1
            raise ValueError(f"Unexpected {tokens[index]!r} in type {text!r}")


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """A declared type: its name, package and immediate superclass.

    Parameters
    ----------
    qualified_name:
        Fully-qualified name, nested types joined with ``.``.
    package:
        The package part of ``qualified_name`` (may be empty).
    superclass:
        Reference to the immediate superclass, or ``None`` at the root.
    type_params:
        Names of the type's own type parameters.
    location:
        Where the type was declared.
    """

    qualified_name: str
    package: str
    superclass: TypeRef | None = None
    type_params: tuple[str, ...] = ()
    location: Location = field(default_factory=Location.unknown)

    @property
    def as_type(self) -> TypeRef:
        """The generic form of this type, with its parameters as arguments."""
        return TypeRef(self.qualified_name, tuple(TypeRef(p) for p in self.type_params))


@dataclass(frozen=True, slots=True)
class MemberDecl:
    """An annotated member declaration inside a declared type."""

    name: str
    type: TypeRef
    enclosing: TypeRef
    modifiers: frozenset[Modifier] = frozenset()
    location: Location = field(default_factory=Location.unknown)
