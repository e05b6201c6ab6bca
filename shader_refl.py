#!/usr/bin/env python3
"""Command-line interface for OpenGL shader reflection and SPIR-V disassembly."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from shaderrefl import (
    IntrospectionError,
    ProgramIntrospection,
    ReflectionBuilder,
    ReflectionTextRenderer,
    ShaderStage,
    SpirvDisassembler,
    StreamCorruptionError,
    check_vertex_output_uses,
)
from shaderrefl.spirv import MAGIC_NUMBER, read_words


logger = logging.getLogger("shader_refl")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        type=Path,
        help="Program introspection dump (.json) or SPIR-V module (.spv)",
    )
    parser.add_argument(
        "--format",
        choices=("auto", "json", "spirv"),
        default="auto",
        help="Input format; auto looks at the suffix and the leading magic word",
    )
    parser.add_argument(
        "--stage",
        default=None,
        help="Shader stage (vertex, fragment, VS, PS, ...). Defaults to vertex for"
        " reflection; SPIR-V listings only get a title line when it is set.",
    )
    parser.add_argument(
        "--sources",
        type=Path,
        nargs="*",
        default=None,
        help="GLSL sources checked for writes to gl_PointSize and gl_ClipDistance",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the text output here instead of stdout",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def detect_format(path: Path, data: bytes) -> str:
    if path.suffix.lower() == ".spv":
        return "spirv"
    if path.suffix.lower() == ".json":
        return "json"
    if len(data) >= 4 and int.from_bytes(data[:4], "little") == MAGIC_NUMBER:
        return "spirv"
    return "json"


def resolve_stage(name: Optional[str]) -> Optional[ShaderStage]:
    if name is None:
        return None
    try:
        return ShaderStage.from_name(name)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def disassemble(data: bytes, stage: Optional[ShaderStage]) -> str:
    words, remainder = read_words(data)
    if remainder:
        logger.warning("ignoring %d trailing bytes", remainder)
    return SpirvDisassembler().disassemble(words, stage=stage)


def reflect(
    path: Path, stage: Optional[ShaderStage], sources: Optional[Sequence[Path]]
) -> str:
    program = ProgramIntrospection.load(path)

    point_size_used = clip_distance_used = True
    if sources is not None:
        texts = [source.read_text("utf-8") for source in sources]
        point_size_used, clip_distance_used = check_vertex_output_uses(texts)
        logger.debug(
            "gl_PointSize used: %s, gl_ClipDistance used: %s",
            point_size_used,
            clip_distance_used,
        )

    reflection = ReflectionBuilder().build(
        program,
        stage or ShaderStage.VERTEX,
        point_size_used=point_size_used,
        clip_distance_used=clip_distance_used,
    )
    return ReflectionTextRenderer().render(reflection)


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if not args.input.exists():
        raise SystemExit(f"missing input file: {args.input}")
    for source in args.sources or ():
        if not source.exists():
            raise SystemExit(f"missing source file: {source}")

    stage = resolve_stage(args.stage)
    data = args.input.read_bytes()
    input_format = args.format
    if input_format == "auto":
        input_format = detect_format(args.input, data)
    logger.debug("reading %s as %s", args.input, input_format)

    try:
        if input_format == "spirv":
            text = disassemble(data, stage)
        else:
            text = reflect(args.input, stage, args.sources)
    except (StreamCorruptionError, IntrospectionError) as exc:
        raise SystemExit(f"{args.input}: {exc}") from exc

    if args.out is None:
        sys.stdout.write(text)
        return
    args.out.write_text(text, "utf-8")
    print(f"output written to {args.out}")


if __name__ == "__main__":
    main()
