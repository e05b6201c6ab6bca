from shaderrefl import gltypes
from shaderrefl.gltypes import (
    CompType,
    ResourceType,
    VarType,
    resource_type,
    signature_layout,
    variable_type,
)


def test_vector_types() -> None:
    info = variable_type(gltypes.GL_FLOAT_VEC3)
    assert info is not None
    assert (info.base_type, info.rows, info.cols, info.name) == (VarType.FLOAT, 1, 3, "vec3")

    info = variable_type(gltypes.GL_UNSIGNED_INT)
    assert info is not None
    assert (info.base_type, info.cols, info.name) == (VarType.UINT, 1, "uint")


def test_booleans_are_unsigned() -> None:
    info = variable_type(gltypes.GL_BOOL_VEC2)
    assert info is not None
    assert info.base_type is VarType.UINT
    assert info.name == "bvec2"


def test_matrix_rows_and_columns() -> None:
    info = variable_type(gltypes.GL_FLOAT_MAT4x3)
    assert info is not None
    assert (info.rows, info.cols, info.name) == (3, 4, "mat4x3")

    info = variable_type(gltypes.GL_DOUBLE_MAT2)
    assert info is not None
    assert (info.base_type, info.rows, info.cols, info.name) == (VarType.DOUBLE, 2, 2, "dmat2")


def test_opaque_types_are_not_numeric() -> None:
    assert variable_type(gltypes.GL_SAMPLER_2D) is None
    assert variable_type(gltypes.GL_UNSIGNED_INT_ATOMIC_COUNTER) is None


def test_sampler_resources() -> None:
    info = resource_type(gltypes.GL_SAMPLER_2D_SHADOW)
    assert info is not None
    assert info.resource_type is ResourceType.TEXTURE_2D
    assert info.name == "sampler2DShadow"
    assert not info.read_write

    info = resource_type(gltypes.GL_UNSIGNED_INT_SAMPLER_CUBE_MAP_ARRAY)
    assert info is not None
    assert info.resource_type is ResourceType.TEXTURE_CUBE_ARRAY
    assert (info.name, info.base_type) == ("usamplerCubeArray", VarType.UINT)


def test_image_families_share_layout_order() -> None:
    info = resource_type(gltypes.GL_INT_IMAGE_1D + 1)
    assert info is not None
    assert info.resource_type is ResourceType.TEXTURE_2D
    assert (info.name, info.base_type, info.read_write) == ("iimage2D", VarType.INT, True)

    info = resource_type(gltypes.GL_IMAGE_1D + 5)
    assert info is not None
    assert (info.resource_type, info.name) == (ResourceType.BUFFER, "imageBuffer")


def test_atomic_counter_resource() -> None:
    info = resource_type(gltypes.GL_UNSIGNED_INT_ATOMIC_COUNTER)
    assert info is not None
    assert info.resource_type is ResourceType.BUFFER
    assert not info.is_texture
    assert info.cols == 1


def test_signature_layout() -> None:
    assert signature_layout(gltypes.GL_INT_VEC2) == (CompType.SINT, 2, 1)
    assert signature_layout(gltypes.GL_DOUBLE) == (CompType.FLOAT, 1, 1)
    assert signature_layout(gltypes.GL_FLOAT_MAT4x3) == (CompType.FLOAT, 4, 3)
    assert signature_layout(gltypes.GL_FLOAT_MAT3x4) == (CompType.FLOAT, 3, 4)
    assert signature_layout(gltypes.GL_SAMPLER_2D) is None
