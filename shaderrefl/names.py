"""Parsing of dotted/bracketed variable names into structure paths.

Program introspection flattens nested uniforms into one record per leaf, e.g.
``lights[2].colour`` or ``material.layers[0].scale``.  A name is read left to
right as a sequence of *steps* (a structure member, optionally indexed) followed
by the leaf name::

    lights[2].colour       -> steps: lights[2]          leaf: colour
    material.layers[0].a   -> steps: material, layers[0] leaf: a

The parser walks an immutable string with an explicit cursor.  Any violation of
the grammar raises :class:`~shaderrefl.errors.MalformedNameError`; callers are
expected to drop the offending record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import MalformedNameError

__all__ = [
    "ARRAY_ZERO_SUFFIX",
    "PathStep",
    "VariablePath",
    "NameCursor",
    "strip_array_zero",
    "parse_variable_path",
]

ARRAY_ZERO_SUFFIX = "[0]"


@dataclass(frozen=True)
class PathStep:
    """One enclosing structure on the way to a leaf."""

    name: str
    index: Optional[int] = None

    @property
    def is_array(self) -> bool:
        return self.index is not None


@dataclass(frozen=True)
class VariablePath:
    steps: Tuple[PathStep, ...]
    leaf: str


class NameCursor:
    """Read-only cursor over an encoded variable name."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.position]

    def take(self) -> str:
        char = self.peek()
        self.position += 1
        return char

    def error(self, reason: str) -> MalformedNameError:
        return MalformedNameError(self.text, self.position, reason)

    def read_segment(self) -> str:
        start = self.position
        while not self.at_end() and self.text[self.position] not in ".[":
            if self.text[self.position] == "]":
                raise self.error("unbalanced ']'")
            self.position += 1
        if self.position == start:
            raise self.error("empty name segment")
        return self.text[start : self.position]

    def read_index(self) -> int:
        start = self.position
        while not self.at_end() and self.text[self.position].isdigit():
            self.position += 1
        if self.position == start:
            raise self.error("array index must be a decimal number")
        digits = self.text[start : self.position]
        if self.take() != "]":
            self.position -= 1
            raise self.error("expected ']' after array index")
        return int(digits)


def strip_array_zero(name: str) -> Tuple[str, bool]:
    """Remove a trailing ``[0]`` and report whether one was present."""

    if name.endswith(ARRAY_ZERO_SUFFIX) and len(name) > len(ARRAY_ZERO_SUFFIX):
        return name[: -len(ARRAY_ZERO_SUFFIX)], True
    return name, False


def parse_variable_path(name: str) -> VariablePath:
    """Split ``name`` into its enclosing structure steps and leaf name.

    An array index must be followed by ``.``: a trailing ``[0]`` on a basic
    type has already been stripped by the caller, so a bare index at this point
    means the introspection returned something other than element zero of a
    flat array.
    """

    cursor = NameCursor(name)
    steps: List[PathStep] = []

    while True:
        segment = cursor.read_segment()
        if cursor.at_end():
            return VariablePath(tuple(steps), segment)

        if cursor.take() == ".":
            steps.append(PathStep(segment))
            continue

        index = cursor.read_index()
        if cursor.peek() != ".":
            raise cursor.error("unexpected naked array as member")
        cursor.take()
        steps.append(PathStep(segment, index))
