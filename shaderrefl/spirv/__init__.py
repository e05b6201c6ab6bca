"""SPIR-V word stream decoding and disassembly."""

from .constants import HEADER_WORDS, MAGIC_NUMBER
from .disassembler import DisassemblyLine, SpirvDisassembler, SymbolTable
from .instruction import (
    Instruction,
    ModuleHeader,
    decode_literal_string,
    encode_literal_string,
    iter_instructions,
    read_words,
)

__all__ = [
    "HEADER_WORDS",
    "MAGIC_NUMBER",
    "DisassemblyLine",
    "SpirvDisassembler",
    "SymbolTable",
    "Instruction",
    "ModuleHeader",
    "decode_literal_string",
    "encode_literal_string",
    "iter_instructions",
    "read_words",
]
