"""Utilities for serialising a shader reflection into a text format."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from .model import (
    ConstantBlock,
    ConstantNode,
    ShaderReflection,
    ShaderResource,
    SigParameter,
    SystemAttribute,
)


class ReflectionTextRenderer:
    """Render :class:`ShaderReflection` instances into a stable textual form."""

    def render(self, reflection: ShaderReflection) -> str:
        lines: List[str] = [
            f"; {reflection.stage.title} entry={reflection.entry_func}",
            "",
        ]
        lines.extend(self._render_resources(reflection.resources))
        lines.extend(self._render_constant_blocks(reflection.constant_blocks))
        lines.extend(self._render_signature("input signature", reflection.input_sig))
        lines.extend(self._render_signature("output signature", reflection.output_sig))
        return "\n".join(lines) + "\n"

    def write(self, reflection: ShaderReflection, output_path: Path) -> None:
        output_path.write_text(self.render(reflection), "utf-8")

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _render_resources(self, resources: Sequence[ShaderResource]) -> Iterable[str]:
        yield "; resources"
        if not resources:
            yield ";   (empty)"
        for resource in resources:
            access = "rw" if resource.is_read_write else "ro"
            line = (
                f"resource {resource.bind_point} {resource.type_name} {resource.name} "
                f"type={resource.resource_type.name} base={resource.base_type.name} {access}"
            )
            if not resource.is_texture and resource.elements:
                line += f" variables={resource.elements}"
            yield line
            for member in resource.members:
                yield from self._render_node(member, 1)
        yield ""

    def _render_constant_blocks(self, blocks: Sequence[ConstantBlock]) -> Iterable[str]:
        yield "; constant blocks"
        if not blocks:
            yield ";   (empty)"
        for block in blocks:
            backing = "buffer" if block.buffer_backed else "loose"
            yield f"block {block.bind_point} {block.name} ({backing})"
            for variable in block.variables:
                yield from self._render_node(variable, 1)
        yield ""

    def _render_node(self, node: ConstantNode, depth: int) -> Iterable[str]:
        yield "  " * depth + node.describe()
        for member in node.members:
            yield from self._render_node(member, depth + 1)

    def _render_signature(self, label: str, params: Sequence[SigParameter]) -> Iterable[str]:
        yield f"; {label}"
        if not params:
            yield ";   (empty)"
        for param in params:
            semantic = ""
            if param.system_value is not SystemAttribute.NONE:
                semantic = f" {param.system_value.name}"
            yield (
                f"reg {param.reg_index} mask=0x{param.reg_channel_mask:X} "
                f"{param.comp_type.name.lower()}{param.comp_count} {param.var_name}{semantic}"
            )
        yield ""


__all__ = ["ReflectionTextRenderer"]
