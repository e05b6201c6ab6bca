"""In-memory and JSON forms of a linked program's introspection results.

The records mirror what ``glGetProgramResourceiv`` reports for each program
interface.  A dump is a JSON object::

    {
      "uniforms": [{"name": "mvp", "type": "GL_FLOAT_MAT4", "location": 0}],
      "uniform_blocks": ["Camera"],
      "storage_blocks": [{"name": "Particles", "active_variables": 2}],
      "buffer_variables": [{"name": "pos[0]", "type": 35666, "block_index": 0,
                            "offset": 0, "array_size": 0}],
      "inputs": [{"name": "position", "type": "GL_FLOAT_VEC3", "location": 0}],
      "outputs": []
    }

``type`` accepts either the numeric enum or its ``GL_*`` name.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence, Tuple

from . import gltypes
from .errors import IntrospectionError
from .model import FlatVariable


@dataclass(frozen=True)
class ResourceRecord:
    """One ``GL_UNIFORM`` or ``GL_BUFFER_VARIABLE`` entry."""

    name: str
    gl_type: int
    location: int = -1
    block_index: int = -1
    array_size: int = 0
    offset: int = -1
    row_major: bool = False

    def to_flat_variable(self) -> FlatVariable:
        return FlatVariable.from_properties(
            self.name,
            self.gl_type,
            location=self.location,
            block_index=self.block_index,
            array_size=self.array_size,
            offset=self.offset,
            row_major=self.row_major,
        )


@dataclass(frozen=True)
class StorageBlockRecord:
    name: str
    active_variables: int = 0


@dataclass(frozen=True)
class SignatureRecord:
    """One ``GL_PROGRAM_INPUT`` or ``GL_PROGRAM_OUTPUT`` entry."""

    name: str
    gl_type: int
    location: int = -1
    component: int = 0


@dataclass(frozen=True)
class ProgramIntrospection:
    uniforms: Tuple[ResourceRecord, ...] = ()
    uniform_blocks: Tuple[str, ...] = ()
    storage_blocks: Tuple[StorageBlockRecord, ...] = ()
    buffer_variables: Tuple[ResourceRecord, ...] = ()
    inputs: Tuple[SignatureRecord, ...] = ()
    outputs: Tuple[SignatureRecord, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProgramIntrospection":
        if not isinstance(data, Mapping):
            raise IntrospectionError("introspection dump must be a JSON object")

        return cls(
            uniforms=tuple(_resource(entry) for entry in _entries(data, "uniforms")),
            uniform_blocks=tuple(_block_name(entry) for entry in _entries(data, "uniform_blocks")),
            storage_blocks=tuple(_storage_block(entry) for entry in _entries(data, "storage_blocks")),
            buffer_variables=tuple(
                _resource(entry) for entry in _entries(data, "buffer_variables")
            ),
            inputs=tuple(_signature(entry) for entry in _entries(data, "inputs")),
            outputs=tuple(_signature(entry) for entry in _entries(data, "outputs")),
        )

    @classmethod
    def load(cls, path: Path) -> "ProgramIntrospection":
        try:
            data = json.loads(path.read_bytes().decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise IntrospectionError(f"{path}: {exc}") from exc
        return cls.from_mapping(data)


_GL_TYPE_NAMES = {
    name.upper(): value
    for name, value in vars(gltypes).items()
    if name.startswith("GL_") and isinstance(value, int)
}


def parse_gl_type(value: Any) -> int:
    """Accept a numeric GL enum or a ``GL_*`` constant name (any case)."""

    if isinstance(value, bool):
        raise IntrospectionError(f"invalid GL type {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.upper() in _GL_TYPE_NAMES:
            return _GL_TYPE_NAMES[text.upper()]
        try:
            return int(text, 0)
        except ValueError:
            pass
    raise IntrospectionError(f"unknown GL type {value!r}")


def _entries(data: Mapping[str, Any], key: str) -> Sequence[Any]:
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise IntrospectionError(f"{key!r} must be a list")
    return entries


def _require(entry: Any, key: str) -> Any:
    if not isinstance(entry, Mapping):
        raise IntrospectionError(f"expected an object, got {entry!r}")
    if key not in entry:
        raise IntrospectionError(f"entry {dict(entry)!r} is missing {key!r}")
    return entry[key]


def _int(entry: Mapping[str, Any], key: str, default: int) -> int:
    value = entry.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise IntrospectionError(f"{key!r} must be an integer, got {value!r}")
    return value


def _resource(entry: Any) -> ResourceRecord:
    name = str(_require(entry, "name"))
    return ResourceRecord(
        name=name,
        gl_type=parse_gl_type(_require(entry, "type")),
        location=_int(entry, "location", -1),
        block_index=_int(entry, "block_index", -1),
        array_size=_int(entry, "array_size", 0),
        offset=_int(entry, "offset", -1),
        row_major=bool(entry.get("row_major", False)),
    )


def _block_name(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    return str(_require(entry, "name"))


def _storage_block(entry: Any) -> StorageBlockRecord:
    if isinstance(entry, str):
        return StorageBlockRecord(entry)
    return StorageBlockRecord(
        name=str(_require(entry, "name")),
        active_variables=_int(entry, "active_variables", 0),
    )


def _signature(entry: Any) -> SignatureRecord:
    return SignatureRecord(
        name=str(_require(entry, "name")),
        gl_type=parse_gl_type(_require(entry, "type")),
        location=_int(entry, "location", -1),
        component=_int(entry, "component", 0),
    )


__all__ = [
    "ResourceRecord",
    "StorageBlockRecord",
    "SignatureRecord",
    "ProgramIntrospection",
    "parse_gl_type",
]
