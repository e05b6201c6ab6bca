"""Exception types raised while rebuilding reflection data or decoding streams."""

from __future__ import annotations


class MalformedNameError(ValueError):
    """An encoded variable name does not follow the dot/bracket grammar."""

    def __init__(self, name: str, position: int, reason: str) -> None:
        super().__init__(f"malformed variable name {name!r} at {position}: {reason}")
        self.name = name
        self.position = position
        self.reason = reason


class OrphanVariableError(ValueError):
    """A flat variable references an enclosing block that cannot be resolved."""

    def __init__(self, name: str, group_index: int) -> None:
        super().__init__(
            f"found variable {name!r} without parent block index {group_index}"
        )
        self.name = name
        self.group_index = group_index


class StreamCorruptionError(ValueError):
    """The tagged instruction stream is structurally inconsistent."""

    def __init__(self, offset: int, reason: str) -> None:
        super().__init__(f"corrupt instruction stream at word {offset}: {reason}")
        self.offset = offset
        self.reason = reason


class IntrospectionError(ValueError):
    """A program introspection dump is missing fields or has the wrong shape."""


__all__ = [
    "MalformedNameError",
    "OrphanVariableError",
    "StreamCorruptionError",
    "IntrospectionError",
]
