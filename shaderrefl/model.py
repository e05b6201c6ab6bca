"""Data model shared by the tree builder, the reflection assembler and the printer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Tuple

from .gltypes import CompType, ResourceType, VarType, variable_type


logger = logging.getLogger(__name__)

UNBOUND_INDEX = 0xFFFFFFFF
STRUCT_TYPE_NAME = "struct"


class ShaderStage(Enum):
    """Programmable pipeline stages, in pipeline order."""

    VERTEX = auto()
    TESS_CONTROL = auto()
    TESS_EVAL = auto()
    GEOMETRY = auto()
    FRAGMENT = auto()
    COMPUTE = auto()

    @property
    def title(self) -> str:
        return _STAGE_TITLES[self]

    @classmethod
    def from_name(cls, name: str) -> "ShaderStage":
        key = name.strip().upper().replace("-", "_")
        aliases = {
            "VS": "VERTEX",
            "TCS": "TESS_CONTROL",
            "TES": "TESS_EVAL",
            "GS": "GEOMETRY",
            "FS": "FRAGMENT",
            "PS": "FRAGMENT",
            "CS": "COMPUTE",
        }
        try:
            return cls[aliases.get(key, key)]
        except KeyError:
            raise ValueError(f"unknown shader stage {name!r}") from None


_STAGE_TITLES = {
    ShaderStage.VERTEX: "Vertex Shader",
    ShaderStage.TESS_CONTROL: "Tessellation Control Shader",
    ShaderStage.TESS_EVAL: "Tessellation Evaluation Shader",
    ShaderStage.GEOMETRY: "Geometry Shader",
    ShaderStage.FRAGMENT: "Fragment Shader",
    ShaderStage.COMPUTE: "Compute Shader",
}


class SystemAttribute(Enum):
    """System-value semantics; declaration order is the signature sort order."""

    NONE = auto()
    POSITION = auto()
    POINT_SIZE = auto()
    CLIP_DISTANCE = auto()
    CULL_DISTANCE = auto()
    RT_INDEX = auto()
    VIEWPORT_INDEX = auto()
    VERTEX_INDEX = auto()
    PRIMITIVE_INDEX = auto()
    INSTANCE_INDEX = auto()
    INVOCATION_INDEX = auto()
    DISPATCH_SIZE = auto()
    DISPATCH_THREAD_INDEX = auto()
    GROUP_INDEX = auto()
    GROUP_FLAT_INDEX = auto()
    GROUP_THREAD_INDEX = auto()
    GS_INSTANCE_INDEX = auto()
    OUTPUT_CONTROL_POINT_INDEX = auto()
    DOMAIN_LOCATION = auto()
    IS_FRONT_FACE = auto()
    MSAA_COVERAGE = auto()
    MSAA_SAMPLE_POSITION = auto()
    MSAA_SAMPLE_INDEX = auto()
    PATCH_NUM_VERTICES = auto()
    OUTER_TESS_FACTOR = auto()
    INSIDE_TESS_FACTOR = auto()
    COLOUR_OUTPUT = auto()
    DEPTH_OUTPUT = auto()


@dataclass(frozen=True, order=True)
class StorageOrder:
    """Register-style position used only to order sibling variables."""

    vec: int
    comp: int = 0

    @classmethod
    def unbound(cls) -> "StorageOrder":
        return cls(UNBOUND_INDEX, UNBOUND_INDEX)

    @property
    def is_bound(self) -> bool:
        return self.vec != UNBOUND_INDEX

    def describe(self) -> str:
        if not self.is_bound:
            return "unbound"
        return f"{self.vec}.{'xyzw'[self.comp] if self.comp < 4 else self.comp}"


@dataclass(frozen=True)
class FlatVariable:
    """One introspected variable before its hierarchy is reconstructed.

    ``base_type`` is ``None`` for records whose GL type is not numeric
    (samplers, images, atomic counters).  Those belong to the resource list
    and are ignored by the tree builder.
    """

    name: str
    base_type: Optional[VarType]
    rows: int = 1
    cols: int = 1
    elements: int = 0
    group_index: Optional[int] = None
    storage: StorageOrder = field(default_factory=StorageOrder.unbound)
    row_major: bool = False
    type_name: str = ""

    @classmethod
    def from_properties(
        cls,
        name: str,
        gl_type: int,
        *,
        location: int = -1,
        block_index: int = -1,
        array_size: int = 0,
        offset: int = -1,
        row_major: bool = False,
    ) -> "FlatVariable":
        """Create a record from raw program-resource property values."""

        info = variable_type(gl_type)

        if offset == -1 and location >= 0:
            storage = StorageOrder(location, 0)
        elif offset >= 0:
            if offset % 4:
                logger.warning("variable %r has unaligned offset %d", name, offset)
            storage = StorageOrder(offset // 16, (offset // 4) % 4)
        else:
            storage = StorageOrder.unbound()

        return cls(
            name=name,
            base_type=info.base_type if info else None,
            rows=info.rows if info else 0,
            cols=info.cols if info else 0,
            elements=array_size,
            group_index=block_index if block_index >= 0 else None,
            storage=storage,
            row_major=row_major,
            type_name=info.name if info else "",
        )


@dataclass(frozen=True)
class ConstantNode:
    """A leaf variable or a structure/structure-array in the constant tree."""

    name: str
    base_type: Optional[VarType]
    rows: int
    cols: int
    elements: int
    row_major: bool
    storage: StorageOrder
    type_name: str
    members: Tuple["ConstantNode", ...] = ()

    @property
    def is_struct(self) -> bool:
        return self.type_name == STRUCT_TYPE_NAME

    def member(self, name: str) -> Optional["ConstantNode"]:
        for member in self.members:
            if member.name == name:
                return member
        return None

    def walk(self) -> Iterator["ConstantNode"]:
        yield self
        for member in self.members:
            yield from member.walk()

    def describe(self) -> str:
        array = f"[{self.elements}]" if self.elements else ""
        layout = " row_major" if self.row_major else ""
        return f"{self.type_name} {self.name}{array}{layout} @{self.storage.describe()}"


@dataclass(frozen=True)
class ConstantBlock:
    """Named group of constants, buffer backed or the loose ``$Globals``."""

    name: str
    buffer_backed: bool
    bind_point: int
    variables: Tuple[ConstantNode, ...] = ()


@dataclass(frozen=True)
class ShaderResource:
    """Texture, image, atomic counter or storage buffer binding."""

    name: str
    resource_type: ResourceType
    type_name: str
    base_type: VarType
    bind_point: int
    rows: int = 1
    cols: int = 4
    elements: int = 0
    is_texture: bool = True
    is_srv: bool = True
    is_read_write: bool = False
    members: Tuple[ConstantNode, ...] = ()


@dataclass(frozen=True)
class SigParameter:
    """One register of an input or output signature."""

    var_name: str
    comp_type: CompType
    comp_count: int
    reg_index: int
    reg_channel_mask: int
    channel_used_mask: int
    system_value: SystemAttribute = SystemAttribute.NONE


@dataclass(frozen=True)
class ShaderReflection:
    """Everything known about one shader stage's interface."""

    stage: ShaderStage
    entry_func: str = "main"
    resources: Tuple[ShaderResource, ...] = ()
    constant_blocks: Tuple[ConstantBlock, ...] = ()
    input_sig: Tuple[SigParameter, ...] = ()
    output_sig: Tuple[SigParameter, ...] = ()
