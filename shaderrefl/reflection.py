"""Assemble a :class:`ShaderReflection` from program introspection records."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .gltypes import CompType, ResourceType, VarType, resource_type, signature_layout
from .introspection import ProgramIntrospection, SignatureRecord
from .model import (
    ConstantBlock,
    ShaderReflection,
    ShaderResource,
    ShaderStage,
    SigParameter,
    SystemAttribute,
)
from .names import strip_array_zero
from .tree import TreeBuilder


logger = logging.getLogger(__name__)

GLOBALS_BLOCK_NAME = "$Globals"

# Prefix matches; when several prefixes match a name the last entry wins.
BUILTIN_SYSTEM_VALUES: Sequence[Tuple[str, SystemAttribute]] = (
    ("gl_VertexID", SystemAttribute.VERTEX_INDEX),
    ("gl_InstanceID", SystemAttribute.INSTANCE_INDEX),
    ("gl_Position", SystemAttribute.POSITION),
    ("gl_PointSize", SystemAttribute.POINT_SIZE),
    ("gl_ClipDistance", SystemAttribute.CLIP_DISTANCE),
    ("gl_CullDistance", SystemAttribute.CULL_DISTANCE),
    ("gl_PatchVerticesIn", SystemAttribute.PATCH_NUM_VERTICES),
    ("gl_PrimitiveID", SystemAttribute.PRIMITIVE_INDEX),
    ("gl_InvocationID", SystemAttribute.INVOCATION_INDEX),
    ("gl_TessLevelOuter", SystemAttribute.OUTER_TESS_FACTOR),
    ("gl_TessLevelInner", SystemAttribute.INSIDE_TESS_FACTOR),
    ("gl_TessCoord", SystemAttribute.DOMAIN_LOCATION),
    ("gl_Layer", SystemAttribute.RT_INDEX),
    ("gl_ViewportIndex", SystemAttribute.VIEWPORT_INDEX),
    ("gl_FragCoord", SystemAttribute.POSITION),
    ("gl_FrontFacing", SystemAttribute.IS_FRONT_FACE),
    ("gl_SampleID", SystemAttribute.MSAA_SAMPLE_INDEX),
    ("gl_SamplePosition", SystemAttribute.MSAA_SAMPLE_POSITION),
    ("gl_SampleMask", SystemAttribute.MSAA_COVERAGE),
    ("gl_FragDepth", SystemAttribute.DEPTH_OUTPUT),
    ("gl_NumWorkGroups", SystemAttribute.DISPATCH_SIZE),
    ("gl_WorkGroupID", SystemAttribute.GROUP_INDEX),
    ("gl_LocalInvocationID", SystemAttribute.GROUP_THREAD_INDEX),
    ("gl_GlobalInvocationID", SystemAttribute.DISPATCH_THREAD_INDEX),
    ("gl_LocalInvocationIndex", SystemAttribute.GROUP_FLAT_INDEX),
)


def builtin_system_value(name: str) -> SystemAttribute:
    value = SystemAttribute.NONE
    for prefix, attribute in BUILTIN_SYSTEM_VALUES:
        if name.startswith(prefix):
            value = attribute
    return value


def _is_written(source: str, identifier: str) -> bool:
    # an '=' between the identifier and the next ';' counts as a write
    offset = source.find(identifier)
    while offset != -1:
        while offset < len(source):
            char = source[offset]
            if char == "=":
                return True
            if char == ";":
                break
            offset += 1
        offset = source.find(identifier, offset)
    return False


def check_vertex_output_uses(sources: Iterable[str]) -> Tuple[bool, bool]:
    """Report whether ``gl_PointSize`` and ``gl_ClipDistance`` are written.

    Separable programs get a ``gl_PerVertex`` block injected; the built-ins it
    declares are only kept in the output signature if the shader assigns them.
    """

    point_size_used = False
    clip_distance_used = False
    for source in sources:
        point_size_used = point_size_used or _is_written(source, "gl_PointSize")
        clip_distance_used = clip_distance_used or _is_written(source, "gl_ClipDistance")
    return point_size_used, clip_distance_used


class ReflectionBuilder:
    """Build the reflection of one shader stage from its introspection dump."""

    def __init__(self, tree_builder: Optional[TreeBuilder] = None) -> None:
        self.tree_builder = tree_builder or TreeBuilder()

    def build(
        self,
        program: ProgramIntrospection,
        stage: ShaderStage,
        *,
        point_size_used: bool = True,
        clip_distance_used: bool = True,
    ) -> ShaderReflection:
        resources = self._texture_resources(program)
        resources = self._storage_buffers(program, resources)
        constant_blocks = self._constant_blocks(program)

        input_sig = self._signature(
            program.inputs, stage, False, point_size_used, clip_distance_used
        )
        output_sig = self._signature(
            program.outputs, stage, True, point_size_used, clip_distance_used
        )

        return ShaderReflection(
            stage=stage,
            resources=tuple(resources),
            constant_blocks=tuple(constant_blocks),
            input_sig=tuple(input_sig),
            output_sig=tuple(output_sig),
        )

    # ------------------------------------------------------------------
    # resources
    # ------------------------------------------------------------------
    @staticmethod
    def _texture_resources(program: ProgramIntrospection) -> List[ShaderResource]:
        resources: List[ShaderResource] = []
        for uniform in program.uniforms:
            info = resource_type(uniform.gl_type)
            if info is None:
                continue

            resource = ShaderResource(
                name=uniform.name,
                resource_type=info.resource_type,
                type_name=info.name,
                base_type=info.base_type,
                bind_point=len(resources),
                cols=info.cols,
                is_texture=info.is_texture,
                is_srv=not info.read_write,
                is_read_write=info.read_write,
            )
            resources.append(resource)

            # arrays of samplers get one resource per element
            if uniform.array_size > 1:
                base, _ = strip_array_zero(uniform.name)
                for index in range(1, uniform.array_size):
                    resources.append(
                        dataclasses.replace(
                            resource, name=f"{base}[{index}]", bind_point=len(resources)
                        )
                    )
        return resources

    def _storage_buffers(
        self, program: ProgramIntrospection, resources: List[ShaderResource]
    ) -> List[ShaderResource]:
        if not program.storage_blocks:
            return resources

        tree = self.tree_builder.build(
            (variable.to_flat_variable() for variable in program.buffer_variables),
            len(program.storage_blocks),
            with_ungrouped=False,
        )

        for index, block in enumerate(program.storage_blocks):
            resources.append(
                ShaderResource(
                    name=block.name,
                    resource_type=ResourceType.BUFFER,
                    type_name="buffer",
                    base_type=VarType.UINT,
                    bind_point=len(resources),
                    rows=0,
                    cols=0,
                    elements=block.active_variables,
                    is_texture=False,
                    is_srv=False,
                    is_read_write=True,
                    members=tree.group(index),
                )
            )
        return resources

    def _constant_blocks(self, program: ProgramIntrospection) -> List[ConstantBlock]:
        tree = self.tree_builder.build(
            (uniform.to_flat_variable() for uniform in program.uniforms),
            len(program.uniform_blocks),
        )

        blocks: List[ConstantBlock] = []
        for name, variables in zip(program.uniform_blocks, tree.groups):
            if not variables:
                continue
            blocks.append(ConstantBlock(name, True, len(blocks), variables))

        if tree.ungrouped:
            blocks.append(ConstantBlock(GLOBALS_BLOCK_NAME, False, len(blocks), tree.ungrouped))
        return blocks

    # ------------------------------------------------------------------
    # signatures
    # ------------------------------------------------------------------
    def _signature(
        self,
        records: Sequence[SignatureRecord],
        stage: ShaderStage,
        is_output: bool,
        point_size_used: bool,
        clip_distance_used: bool,
    ) -> List[SigParameter]:
        params: List[SigParameter] = []
        for position, record in enumerate(records):
            name = record.name

            # only present because a gl_PerVertex block was added to make the
            # program separable
            if name.startswith("gl_PointSize") and not point_size_used:
                continue
            if name.startswith("gl_ClipDistance") and not clip_distance_used:
                continue

            layout = signature_layout(record.gl_type)
            if layout is None:
                logger.warning(
                    "unhandled signature element type 0x%04X for %r", record.gl_type, name
                )
                layout = (CompType.FLOAT, 4, 1)
            comp_type, comp_count, rows = layout

            system_value = builtin_system_value(name)
            if (
                stage is ShaderStage.FRAGMENT
                and is_output
                and system_value is SystemAttribute.NONE
            ):
                system_value = SystemAttribute.COLOUR_OUTPUT

            if record.location >= 0:
                reg_index = record.location
            elif system_value is SystemAttribute.NONE:
                reg_index = position
            else:
                reg_index = 0

            mask = ((1 << comp_count) - 1) << record.component
            param = SigParameter(
                var_name=name,
                comp_type=comp_type,
                comp_count=comp_count,
                reg_index=reg_index,
                reg_channel_mask=mask,
                channel_used_mask=mask,
                system_value=system_value,
            )

            if rows == 1:
                params.append(param)
                continue
            for row in range(rows):
                params.append(
                    dataclasses.replace(
                        param, var_name=f"{name}:row{row}", reg_index=reg_index + row
                    )
                )

        params.sort(key=lambda param: (param.system_value.value, param.reg_index))
        return params
