"""Two-pass SPIR-V disassembly listings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from ..errors import StreamCorruptionError
from ..model import ShaderStage
from .constants import (
    ADDRESSING_MODELS,
    EXECUTION_MODELS,
    HEADER_WORDS,
    MAGIC_NUMBER,
    MEMORY_MODELS,
    OP_ENTRY_POINT,
    OP_EXT_INST_IMPORT,
    OP_FUNCTION,
    OP_FUNCTION_END,
    OP_MEMORY_MODEL,
    OP_NAME,
    OP_SOURCE,
    SOURCE_LANGUAGES,
    enum_name,
    generator_name,
)
from .instruction import Instruction, ModuleHeader, iter_instructions


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisassemblyLine:
    """A rendered instruction; ``index`` is set only inside a function body."""

    index: Optional[int]
    mnemonic: str
    operands: str

    def render(self) -> str:
        body = f"{self.mnemonic} {self.operands}".rstrip()
        if self.index is None:
            return f"      {body}"
        return f"{self.index:4d}: {body}"


class SymbolTable:
    """Display names for result ids below the module's id bound.

    Ids without an explicit name render as ``<id>``.
    """

    def __init__(self, id_bound: int) -> None:
        self.id_bound = id_bound
        self._names: Dict[int, str] = {}

    def _check(self, result_id: int, offset: int) -> None:
        if not 0 <= result_id < self.id_bound:
            raise StreamCorruptionError(
                offset, f"id {result_id} outside declared bound {self.id_bound}"
            )

    def bind(self, result_id: int, name: str, offset: int) -> None:
        self._check(result_id, offset)
        self._names[result_id] = name

    def name(self, result_id: int, offset: int) -> str:
        self._check(result_id, offset)
        return self._names.get(result_id) or f"<{result_id}>"


class SpirvDisassembler:
    """Render SPIR-V word streams as text.

    Names can be attached to an id after its first use, so the stream is read
    twice: the first pass collects every ``OpName`` and the second formats
    instructions with all names already known.
    """

    def disassemble(
        self,
        words: Sequence[int],
        magic: int = MAGIC_NUMBER,
        header_words: int = HEADER_WORDS,
        *,
        stage: Optional[ShaderStage] = None,
    ) -> str:
        lines: List[str] = []
        if stage is not None:
            lines.append(f"{stage.title} SPIR-V:")
            lines.append("")

        if not words:
            raise StreamCorruptionError(0, "empty stream")
        if words[0] != magic:
            lines.append(f"Unrecognised magic number {int(words[0]):08x}")
            return "\n".join(lines) + "\n"

        header = self._read_header(words, header_words)
        lines.extend(self._render_header(header))
        lines.extend(line.render() for line in self._lines(words, header, header_words))
        return "\n".join(lines) + "\n"

    def lines(
        self,
        words: Sequence[int],
        magic: int = MAGIC_NUMBER,
        header_words: int = HEADER_WORDS,
    ) -> List[DisassemblyLine]:
        """Return the instruction lines without the header banner."""

        if not words or words[0] != magic:
            raise StreamCorruptionError(0, "stream does not start with the magic number")
        header = self._read_header(words, header_words)
        return list(self._lines(words, header, header_words))

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _read_header(words: Sequence[int], header_words: int) -> ModuleHeader:
        if len(words) < header_words:
            raise StreamCorruptionError(
                len(words), f"header needs {header_words} words, stream has {len(words)}"
            )
        return ModuleHeader.from_words(words)

    @staticmethod
    def _render_header(header: ModuleHeader) -> Iterator[str]:
        yield (
            f"Version {header.describe_version()}, Generator {header.generator:08x} "
            f"({generator_name(header.generator)})"
        )
        yield f"IDs up to <{header.id_bound}>"
        if header.reserved != 0:
            yield "Reserved word 4 is non-zero"
        yield ""

    def _lines(
        self, words: Sequence[int], header: ModuleHeader, header_words: int
    ) -> Iterator[DisassemblyLine]:
        instructions = list(iter_instructions(words, header_words))
        symbols = self._collect_names(instructions, header.id_bound)

        in_function = False
        index = 0
        for instruction in instructions:
            opcode = instruction.opcode
            if opcode == OP_NAME:
                continue
            if opcode == OP_FUNCTION_END:
                in_function = False

            operands = self._format_operands(instruction, symbols)
            yield DisassemblyLine(
                index if in_function else None, instruction.mnemonic, operands
            )
            if in_function:
                index += 1

            if opcode == OP_FUNCTION:
                if in_function:
                    logger.warning(
                        "nested function at word %d; restarting numbering", instruction.offset
                    )
                in_function = True
                index = 0

    @staticmethod
    def _collect_names(instructions: Sequence[Instruction], id_bound: int) -> SymbolTable:
        symbols = SymbolTable(id_bound)
        for instruction in instructions:
            if instruction.opcode == OP_NAME:
                symbols.bind(
                    instruction.operand(0), instruction.literal_string(1), instruction.offset
                )
        return symbols

    @staticmethod
    def _format_operands(instruction: Instruction, symbols: SymbolTable) -> str:
        opcode = instruction.opcode
        if opcode == OP_SOURCE:
            language = enum_name(SOURCE_LANGUAGES, instruction.operand(0))
            return f"{language} {instruction.operand(1)}"
        if opcode == OP_EXT_INST_IMPORT:
            name = instruction.literal_string(1)
            symbols.bind(instruction.operand(0), name, instruction.offset)
            return name
        if opcode == OP_MEMORY_MODEL:
            addressing = enum_name(ADDRESSING_MODELS, instruction.operand(0))
            memory = enum_name(MEMORY_MODELS, instruction.operand(1))
            return f"{addressing} Addressing, {memory} Memory model"
        if opcode == OP_ENTRY_POINT:
            function = symbols.name(instruction.operand(1), instruction.offset)
            model = enum_name(EXECUTION_MODELS, instruction.operand(0))
            return f"{function} ({model})"
        return " ".join(str(word) for word in instruction.operands)
