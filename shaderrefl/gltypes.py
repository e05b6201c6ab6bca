"""OpenGL type enumerations and the lookup tables built on top of them.

Program introspection reports every interface variable with a ``GL_TYPE``
enum.  Numeric types (scalars, vectors and matrices) feed the constant tree;
opaque types (samplers, images and atomic counters) become resources.  The
tables below translate both families into the vocabulary used by the
reflection model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple


class VarType(Enum):
    """Base component type of a numeric shader variable."""

    FLOAT = auto()
    INT = auto()
    UINT = auto()
    DOUBLE = auto()


class ResourceType(Enum):
    """Shape of a texture, image or buffer resource."""

    BUFFER = auto()
    TEXTURE_1D = auto()
    TEXTURE_1D_ARRAY = auto()
    TEXTURE_2D = auto()
    TEXTURE_RECT = auto()
    TEXTURE_2D_ARRAY = auto()
    TEXTURE_2D_MS = auto()
    TEXTURE_2D_MS_ARRAY = auto()
    TEXTURE_3D = auto()
    TEXTURE_CUBE = auto()
    TEXTURE_CUBE_ARRAY = auto()


class CompType(Enum):
    """Component interpretation of a signature element."""

    FLOAT = auto()
    SINT = auto()
    UINT = auto()


# Scalars, vectors and matrices.
GL_FLOAT = 0x1406
GL_FLOAT_VEC2 = 0x8B50
GL_FLOAT_VEC3 = 0x8B51
GL_FLOAT_VEC4 = 0x8B52
GL_INT = 0x1404
GL_INT_VEC2 = 0x8B53
GL_INT_VEC3 = 0x8B54
GL_INT_VEC4 = 0x8B55
GL_BOOL = 0x8B56
GL_BOOL_VEC2 = 0x8B57
GL_BOOL_VEC3 = 0x8B58
GL_BOOL_VEC4 = 0x8B59
GL_UNSIGNED_INT = 0x1405
GL_UNSIGNED_INT_VEC2 = 0x8DC6
GL_UNSIGNED_INT_VEC3 = 0x8DC7
GL_UNSIGNED_INT_VEC4 = 0x8DC8
GL_FLOAT_MAT2 = 0x8B5A
GL_FLOAT_MAT3 = 0x8B5B
GL_FLOAT_MAT4 = 0x8B5C
GL_FLOAT_MAT2x3 = 0x8B65
GL_FLOAT_MAT2x4 = 0x8B66
GL_FLOAT_MAT3x2 = 0x8B67
GL_FLOAT_MAT3x4 = 0x8B68
GL_FLOAT_MAT4x2 = 0x8B69
GL_FLOAT_MAT4x3 = 0x8B6A
GL_DOUBLE = 0x140A
GL_DOUBLE_VEC2 = 0x8FFC
GL_DOUBLE_VEC3 = 0x8FFD
GL_DOUBLE_VEC4 = 0x8FFE
GL_DOUBLE_MAT2 = 0x8F46
GL_DOUBLE_MAT3 = 0x8F47
GL_DOUBLE_MAT4 = 0x8F48
GL_DOUBLE_MAT2x3 = 0x8F49
GL_DOUBLE_MAT2x4 = 0x8F4A
GL_DOUBLE_MAT3x2 = 0x8F4B
GL_DOUBLE_MAT3x4 = 0x8F4C
GL_DOUBLE_MAT4x2 = 0x8F4D
GL_DOUBLE_MAT4x3 = 0x8F4E

# Samplers.
GL_SAMPLER_1D = 0x8B5D
GL_SAMPLER_2D = 0x8B5E
GL_SAMPLER_3D = 0x8B5F
GL_SAMPLER_CUBE = 0x8B60
GL_SAMPLER_1D_SHADOW = 0x8B61
GL_SAMPLER_2D_SHADOW = 0x8B62
GL_SAMPLER_2D_RECT = 0x8B63
GL_SAMPLER_2D_RECT_SHADOW = 0x8B64
GL_SAMPLER_1D_ARRAY = 0x8DC0
GL_SAMPLER_2D_ARRAY = 0x8DC1
GL_SAMPLER_BUFFER = 0x8DC2
GL_SAMPLER_1D_ARRAY_SHADOW = 0x8DC3
GL_SAMPLER_2D_ARRAY_SHADOW = 0x8DC4
GL_SAMPLER_CUBE_SHADOW = 0x8DC5
GL_INT_SAMPLER_1D = 0x8DC9
GL_INT_SAMPLER_2D = 0x8DCA
GL_INT_SAMPLER_3D = 0x8DCB
GL_INT_SAMPLER_CUBE = 0x8DCC
GL_INT_SAMPLER_2D_RECT = 0x8DCD
GL_INT_SAMPLER_1D_ARRAY = 0x8DCE
GL_INT_SAMPLER_2D_ARRAY = 0x8DCF
GL_INT_SAMPLER_BUFFER = 0x8DD0
GL_UNSIGNED_INT_SAMPLER_1D = 0x8DD1
GL_UNSIGNED_INT_SAMPLER_2D = 0x8DD2
GL_UNSIGNED_INT_SAMPLER_3D = 0x8DD3
GL_UNSIGNED_INT_SAMPLER_CUBE = 0x8DD4
GL_UNSIGNED_INT_SAMPLER_2D_RECT = 0x8DD5
GL_UNSIGNED_INT_SAMPLER_1D_ARRAY = 0x8DD6
GL_UNSIGNED_INT_SAMPLER_2D_ARRAY = 0x8DD7
GL_UNSIGNED_INT_SAMPLER_BUFFER = 0x8DD8
GL_SAMPLER_CUBE_MAP_ARRAY = 0x900C
GL_INT_SAMPLER_CUBE_MAP_ARRAY = 0x900E
GL_UNSIGNED_INT_SAMPLER_CUBE_MAP_ARRAY = 0x900F
GL_SAMPLER_2D_MULTISAMPLE = 0x9108
GL_INT_SAMPLER_2D_MULTISAMPLE = 0x9109
GL_UNSIGNED_INT_SAMPLER_2D_MULTISAMPLE = 0x910A
GL_SAMPLER_2D_MULTISAMPLE_ARRAY = 0x910B
GL_INT_SAMPLER_2D_MULTISAMPLE_ARRAY = 0x910C
GL_UNSIGNED_INT_SAMPLER_2D_MULTISAMPLE_ARRAY = 0x910D

# Images.  Each signedness family uses the same layout order.
GL_IMAGE_1D = 0x904C
GL_INT_IMAGE_1D = 0x9057
GL_UNSIGNED_INT_IMAGE_1D = 0x9062

GL_UNSIGNED_INT_ATOMIC_COUNTER = 0x92DB


@dataclass(frozen=True)
class VariableTypeInfo:
    """Numeric layout of a GL type enum."""

    base_type: VarType
    rows: int
    cols: int
    name: str


@dataclass(frozen=True)
class ResourceTypeInfo:
    """Resource description of an opaque GL type enum."""

    resource_type: ResourceType
    name: str
    base_type: VarType
    read_write: bool = False
    is_texture: bool = True
    cols: int = 4


def _numeric_table() -> Dict[int, VariableTypeInfo]:
    table: Dict[int, VariableTypeInfo] = {}

    vectors = (
        (VarType.FLOAT, "", (GL_FLOAT, GL_FLOAT_VEC2, GL_FLOAT_VEC3, GL_FLOAT_VEC4), "float"),
        (VarType.DOUBLE, "d", (GL_DOUBLE, GL_DOUBLE_VEC2, GL_DOUBLE_VEC3, GL_DOUBLE_VEC4), "double"),
        (VarType.INT, "i", (GL_INT, GL_INT_VEC2, GL_INT_VEC3, GL_INT_VEC4), "int"),
        (
            VarType.UINT,
            "u",
            (GL_UNSIGNED_INT, GL_UNSIGNED_INT_VEC2, GL_UNSIGNED_INT_VEC3, GL_UNSIGNED_INT_VEC4),
            "uint",
        ),
        # booleans are exposed as unsigned integers
        (VarType.UINT, "b", (GL_BOOL, GL_BOOL_VEC2, GL_BOOL_VEC3, GL_BOOL_VEC4), "bool"),
    )
    for base_type, prefix, enums, scalar_name in vectors:
        for cols, enum_value in enumerate(enums, start=1):
            name = scalar_name if cols == 1 else f"{prefix}vec{cols}"
            table[enum_value] = VariableTypeInfo(base_type, 1, cols, name)

    # matCxR: C columns, R rows
    matrices = (
        (2, 2, GL_FLOAT_MAT2, GL_DOUBLE_MAT2),
        (3, 3, GL_FLOAT_MAT3, GL_DOUBLE_MAT3),
        (4, 4, GL_FLOAT_MAT4, GL_DOUBLE_MAT4),
        (2, 3, GL_FLOAT_MAT2x3, GL_DOUBLE_MAT2x3),
        (2, 4, GL_FLOAT_MAT2x4, GL_DOUBLE_MAT2x4),
        (3, 2, GL_FLOAT_MAT3x2, GL_DOUBLE_MAT3x2),
        (3, 4, GL_FLOAT_MAT3x4, GL_DOUBLE_MAT3x4),
        (4, 2, GL_FLOAT_MAT4x2, GL_DOUBLE_MAT4x2),
        (4, 3, GL_FLOAT_MAT4x3, GL_DOUBLE_MAT4x3),
    )
    for cols, rows, float_enum, double_enum in matrices:
        suffix = f"{cols}" if cols == rows else f"{cols}x{rows}"
        table[float_enum] = VariableTypeInfo(VarType.FLOAT, rows, cols, f"mat{suffix}")
        table[double_enum] = VariableTypeInfo(VarType.DOUBLE, rows, cols, f"dmat{suffix}")

    return table


def _resource_table() -> Dict[int, ResourceTypeInfo]:
    table: Dict[int, ResourceTypeInfo] = {}

    float_samplers = (
        (GL_SAMPLER_BUFFER, ResourceType.BUFFER, "samplerBuffer"),
        (GL_SAMPLER_1D, ResourceType.TEXTURE_1D, "sampler1D"),
        (GL_SAMPLER_1D_ARRAY, ResourceType.TEXTURE_1D_ARRAY, "sampler1DArray"),
        (GL_SAMPLER_1D_SHADOW, ResourceType.TEXTURE_1D, "sampler1DShadow"),
        (GL_SAMPLER_1D_ARRAY_SHADOW, ResourceType.TEXTURE_1D_ARRAY, "sampler1DArrayShadow"),
        (GL_SAMPLER_2D, ResourceType.TEXTURE_2D, "sampler2D"),
        (GL_SAMPLER_2D_ARRAY, ResourceType.TEXTURE_2D_ARRAY, "sampler2DArray"),
        (GL_SAMPLER_2D_SHADOW, ResourceType.TEXTURE_2D, "sampler2DShadow"),
        (GL_SAMPLER_2D_ARRAY_SHADOW, ResourceType.TEXTURE_2D_ARRAY, "sampler2DArrayShadow"),
        (GL_SAMPLER_2D_RECT, ResourceType.TEXTURE_RECT, "sampler2DRect"),
        (GL_SAMPLER_2D_RECT_SHADOW, ResourceType.TEXTURE_RECT, "sampler2DRectShadow"),
        (GL_SAMPLER_3D, ResourceType.TEXTURE_3D, "sampler3D"),
        (GL_SAMPLER_CUBE, ResourceType.TEXTURE_CUBE, "samplerCube"),
        (GL_SAMPLER_CUBE_SHADOW, ResourceType.TEXTURE_CUBE, "samplerCubeShadow"),
        (GL_SAMPLER_CUBE_MAP_ARRAY, ResourceType.TEXTURE_CUBE_ARRAY, "samplerCubeArray"),
        (GL_SAMPLER_2D_MULTISAMPLE, ResourceType.TEXTURE_2D_MS, "sampler2DMS"),
        (GL_SAMPLER_2D_MULTISAMPLE_ARRAY, ResourceType.TEXTURE_2D_MS_ARRAY, "sampler2DMSArray"),
    )
    for enum_value, resource_type, name in float_samplers:
        table[enum_value] = ResourceTypeInfo(resource_type, name, VarType.FLOAT)

    integer_samplers = (
        (ResourceType.BUFFER, "samplerBuffer", GL_INT_SAMPLER_BUFFER, GL_UNSIGNED_INT_SAMPLER_BUFFER),
        (ResourceType.TEXTURE_1D, "sampler1D", GL_INT_SAMPLER_1D, GL_UNSIGNED_INT_SAMPLER_1D),
        (
            ResourceType.TEXTURE_1D_ARRAY,
            "sampler1DArray",
            GL_INT_SAMPLER_1D_ARRAY,
            GL_UNSIGNED_INT_SAMPLER_1D_ARRAY,
        ),
        (ResourceType.TEXTURE_2D, "sampler2D", GL_INT_SAMPLER_2D, GL_UNSIGNED_INT_SAMPLER_2D),
        (
            ResourceType.TEXTURE_2D_ARRAY,
            "sampler2DArray",
            GL_INT_SAMPLER_2D_ARRAY,
            GL_UNSIGNED_INT_SAMPLER_2D_ARRAY,
        ),
        (ResourceType.TEXTURE_RECT, "sampler2DRect", GL_INT_SAMPLER_2D_RECT, GL_UNSIGNED_INT_SAMPLER_2D_RECT),
        (ResourceType.TEXTURE_3D, "sampler3D", GL_INT_SAMPLER_3D, GL_UNSIGNED_INT_SAMPLER_3D),
        (ResourceType.TEXTURE_CUBE, "samplerCube", GL_INT_SAMPLER_CUBE, GL_UNSIGNED_INT_SAMPLER_CUBE),
        (
            ResourceType.TEXTURE_CUBE_ARRAY,
            "samplerCubeArray",
            GL_INT_SAMPLER_CUBE_MAP_ARRAY,
            GL_UNSIGNED_INT_SAMPLER_CUBE_MAP_ARRAY,
        ),
        (
            ResourceType.TEXTURE_2D_MS,
            "sampler2DMS",
            GL_INT_SAMPLER_2D_MULTISAMPLE,
            GL_UNSIGNED_INT_SAMPLER_2D_MULTISAMPLE,
        ),
        (
            ResourceType.TEXTURE_2D_MS_ARRAY,
            "sampler2DMSArray",
            GL_INT_SAMPLER_2D_MULTISAMPLE_ARRAY,
            GL_UNSIGNED_INT_SAMPLER_2D_MULTISAMPLE_ARRAY,
        ),
    )
    for resource_type, name, int_enum, uint_enum in integer_samplers:
        table[int_enum] = ResourceTypeInfo(resource_type, f"i{name}", VarType.INT)
        table[uint_enum] = ResourceTypeInfo(resource_type, f"u{name}", VarType.UINT)

    image_layouts = (
        (ResourceType.TEXTURE_1D, "image1D"),
        (ResourceType.TEXTURE_2D, "image2D"),
        (ResourceType.TEXTURE_3D, "image3D"),
        (ResourceType.TEXTURE_RECT, "image2DRect"),
        (ResourceType.TEXTURE_CUBE, "imageCube"),
        (ResourceType.BUFFER, "imageBuffer"),
        (ResourceType.TEXTURE_1D_ARRAY, "image1DArray"),
        (ResourceType.TEXTURE_2D_ARRAY, "image2DArray"),
        (ResourceType.TEXTURE_CUBE_ARRAY, "imageCubeArray"),
        (ResourceType.TEXTURE_2D_MS, "image2DMS"),
        (ResourceType.TEXTURE_2D_MS_ARRAY, "image2DMSArray"),
    )
    image_families = (
        (GL_IMAGE_1D, "", VarType.FLOAT),
        (GL_INT_IMAGE_1D, "i", VarType.INT),
        (GL_UNSIGNED_INT_IMAGE_1D, "u", VarType.UINT),
    )
    for first_enum, prefix, base_type in image_families:
        for offset, (resource_type, name) in enumerate(image_layouts):
            table[first_enum + offset] = ResourceTypeInfo(
                resource_type, f"{prefix}{name}", base_type, read_write=True
            )

    table[GL_UNSIGNED_INT_ATOMIC_COUNTER] = ResourceTypeInfo(
        ResourceType.BUFFER,
        "atomic_uint",
        VarType.UINT,
        read_write=True,
        is_texture=False,
        cols=1,
    )
    return table


NUMERIC_TYPES: Dict[int, VariableTypeInfo] = _numeric_table()
RESOURCE_TYPES: Dict[int, ResourceTypeInfo] = _resource_table()


def variable_type(gl_type: int) -> Optional[VariableTypeInfo]:
    """Return the numeric layout of ``gl_type`` or ``None`` for opaque types."""

    return NUMERIC_TYPES.get(gl_type)


def resource_type(gl_type: int) -> Optional[ResourceTypeInfo]:
    """Return the resource description of ``gl_type`` if it is opaque."""

    return RESOURCE_TYPES.get(gl_type)


_SIGNATURE_COMP_TYPES = {
    VarType.FLOAT: CompType.FLOAT,
    VarType.DOUBLE: CompType.FLOAT,
    VarType.INT: CompType.SINT,
    VarType.UINT: CompType.UINT,
}


def signature_layout(gl_type: int) -> Optional[Tuple[CompType, int, int]]:
    """Return ``(comp_type, component_count, rows)`` for a signature element.

    A ``matCxR`` occupies ``R`` consecutive registers of ``C`` components.
    """

    info = NUMERIC_TYPES.get(gl_type)
    if info is None:
        return None
    return _SIGNATURE_COMP_TYPES[info.base_type], info.cols, info.rows
