"""Public package exports for the OpenGL shader reflection toolkit."""

from .errors import (
    IntrospectionError,
    MalformedNameError,
    OrphanVariableError,
    StreamCorruptionError,
)
from .introspection import ProgramIntrospection
from .model import (
    ConstantBlock,
    ConstantNode,
    FlatVariable,
    ShaderReflection,
    ShaderResource,
    ShaderStage,
    SigParameter,
    StorageOrder,
    SystemAttribute,
)
from .printer import ReflectionTextRenderer
from .reflection import ReflectionBuilder, check_vertex_output_uses
from .spirv import SpirvDisassembler
from .tree import ReconstructedTree, TreeBuilder

__all__ = [
    "IntrospectionError",
    "MalformedNameError",
    "OrphanVariableError",
    "StreamCorruptionError",
    "ProgramIntrospection",
    "ConstantBlock",
    "ConstantNode",
    "FlatVariable",
    "ShaderReflection",
    "ShaderResource",
    "ShaderStage",
    "SigParameter",
    "StorageOrder",
    "SystemAttribute",
    "ReflectionTextRenderer",
    "ReflectionBuilder",
    "check_vertex_output_uses",
    "SpirvDisassembler",
    "ReconstructedTree",
    "TreeBuilder",
]
