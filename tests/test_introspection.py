import json
from pathlib import Path

import pytest

from shaderrefl import gltypes
from shaderrefl.errors import IntrospectionError
from shaderrefl.introspection import ProgramIntrospection, StorageBlockRecord, parse_gl_type
from shaderrefl.model import StorageOrder


def _write_dump(base: Path) -> Path:
    payload = {
        "uniforms": [
            {"name": "mvp", "type": "GL_FLOAT_MAT4", "location": 0},
            {"name": "albedo", "type": "GL_SAMPLER_2D", "location": 1},
            {"name": "tint", "type": 35666, "block_index": 0, "offset": 16},
        ],
        "uniform_blocks": ["Material"],
        "storage_blocks": [{"name": "Particles", "active_variables": 2}, "Counters"],
        "buffer_variables": [],
        "inputs": [{"name": "position", "type": "GL_FLOAT_VEC3", "location": 0}],
        "outputs": [{"name": "uv", "type": "gl_float_vec2", "location": 1, "component": 2}],
    }
    path = base / "program.json"
    path.write_text(json.dumps(payload, indent=2), "utf-8")
    return path


def test_load_dump(tmp_path: Path) -> None:
    program = ProgramIntrospection.load(_write_dump(tmp_path))

    assert [uniform.name for uniform in program.uniforms] == ["mvp", "albedo", "tint"]
    assert program.uniforms[0].gl_type == gltypes.GL_FLOAT_MAT4
    assert program.uniforms[2].gl_type == gltypes.GL_FLOAT_VEC4
    assert program.uniform_blocks == ("Material",)
    assert program.storage_blocks == (
        StorageBlockRecord("Particles", 2),
        StorageBlockRecord("Counters", 0),
    )
    assert program.inputs[0].location == 0
    assert program.outputs[0].gl_type == gltypes.GL_FLOAT_VEC2
    assert program.outputs[0].component == 2


def test_records_convert_to_flat_variables(tmp_path: Path) -> None:
    program = ProgramIntrospection.load(_write_dump(tmp_path))

    tint = program.uniforms[2].to_flat_variable()
    assert tint.group_index == 0
    assert tint.storage == StorageOrder(1, 0)

    albedo = program.uniforms[1].to_flat_variable()
    assert albedo.base_type is None


def test_gl_type_spellings() -> None:
    assert parse_gl_type("GL_FLOAT_MAT2x3") == gltypes.GL_FLOAT_MAT2x3
    assert parse_gl_type("GL_FLOAT_MAT2X3") == gltypes.GL_FLOAT_MAT2x3
    assert parse_gl_type("0x8B52") == gltypes.GL_FLOAT_VEC4
    assert parse_gl_type(5126) == gltypes.GL_FLOAT

    with pytest.raises(IntrospectionError, match="unknown GL type"):
        parse_gl_type("GL_NOT_A_TYPE")
    with pytest.raises(IntrospectionError):
        parse_gl_type(True)


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", "utf-8")

    with pytest.raises(IntrospectionError, match="broken.json"):
        ProgramIntrospection.load(path)


def test_dump_that_is_not_utf8(tmp_path: Path) -> None:
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe{}")

    with pytest.raises(IntrospectionError, match="binary.json"):
        ProgramIntrospection.load(path)


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "JSON object"),
        ({"uniforms": {}}, "must be a list"),
        ({"uniforms": [{"name": "x"}]}, "missing 'type'"),
        ({"inputs": ["position"]}, "expected an object"),
        ({"uniforms": [{"name": "x", "type": "GL_FLOAT", "offset": "4"}]}, "'offset' must be an integer"),
    ],
)
def test_malformed_dumps(payload, message: str) -> None:
    with pytest.raises(IntrospectionError, match=message):
        ProgramIntrospection.from_mapping(payload)
