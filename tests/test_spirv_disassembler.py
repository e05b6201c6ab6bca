from typing import List

import pytest

from shaderrefl.errors import StreamCorruptionError
from shaderrefl.model import ShaderStage
from shaderrefl.spirv import (
    MAGIC_NUMBER,
    DisassemblyLine,
    SpirvDisassembler,
    SymbolTable,
    decode_literal_string,
    encode_literal_string,
    read_words,
)

GLSLANG = (8 << 16) | 1


def _op(opcode: int, *operands: int) -> List[int]:
    return [((len(operands) + 1) << 16) | opcode, *operands]


def _name(result_id: int, text: str) -> List[int]:
    return _op(5, result_id, *encode_literal_string(text))


def _module(*instructions: List[int], bound: int = 10, reserved: int = 0) -> List[int]:
    words = [MAGIC_NUMBER, 0x00010000, GLSLANG, bound, reserved]
    for instruction in instructions:
        words.extend(instruction)
    return words


def _function(result_id: int, label: int) -> List[List[int]]:
    return [
        _op(54, 2, result_id, 0, 3),
        _op(248, label),
        _op(253),
        _op(56),
    ]


def _sample_module() -> List[int]:
    return _module(
        _op(3, 2, 450),
        _op(14, 0, 1),
        _op(15, 0, 4, *encode_literal_string("main")),
        _op(19, 2),
        _op(33, 3, 2),
        *_function(4, 5),
        _name(4, "main"),
    )


def test_scope_numbering_inside_function() -> None:
    lines = SpirvDisassembler().lines(_sample_module())

    assert [line.mnemonic for line in lines] == [
        "Source",
        "MemoryModel",
        "EntryPoint",
        "TypeVoid",
        "TypeFunction",
        "Function",
        "Label",
        "Return",
        "FunctionEnd",
    ]
    assert [line.index for line in lines] == [None, None, None, None, None, None, 0, 1, None]


def test_numbering_restarts_per_function() -> None:
    words = _module(*_function(4, 5), *_function(6, 7))

    lines = SpirvDisassembler().lines(words)

    assert [line.index for line in lines] == [None, 0, 1, None, None, 0, 1, None]


def test_names_resolve_before_declaration() -> None:
    lines = SpirvDisassembler().lines(_sample_module())

    entry = lines[2]
    assert entry.operands == "main (Vertex Shader)"
    assert all(line.mnemonic != "Name" for line in lines)


def test_unnamed_ids_use_placeholder() -> None:
    words = _module(_op(15, 4, 7, *encode_literal_string("main")))

    (line,) = SpirvDisassembler().lines(words)

    assert line.operands == "<7> (Fragment Shader)"


def test_formatted_operands() -> None:
    lines = SpirvDisassembler().lines(_sample_module())

    assert lines[0].operands == "GLSL 450"
    assert lines[1].operands == "Logical Addressing, GLSL450 Memory model"
    assert lines[4].operands == "3 2"


def test_ext_inst_import_binds_its_name() -> None:
    words = _module(
        _op(11, 1, *encode_literal_string("GLSL.std.450")),
        _op(15, 0, 1, *encode_literal_string("main")),
    )

    lines = SpirvDisassembler().lines(words)

    assert lines[0].operands == "GLSL.std.450"
    assert lines[1].operands == "GLSL.std.450 (Vertex Shader)"


def test_unknown_opcode_mnemonic() -> None:
    (line,) = SpirvDisassembler().lines(_module(_op(1000, 1, 2)))

    assert line.mnemonic == "Unknown1000"
    assert line.operands == "1 2"


def test_listing_header_and_body() -> None:
    text = SpirvDisassembler().disassemble(_sample_module())

    assert text.startswith(
        "Version 1.0, Generator 00080001 (glslang)\n"
        "IDs up to <10>\n"
        "\n"
        "      Source GLSL 450\n"
    )
    assert "   0: Label 5\n" in text
    assert "   1: Return\n" in text
    assert "      FunctionEnd\n" in text
    assert "Reserved word 4" not in text


def test_listing_with_stage_title_and_reserved_word() -> None:
    text = SpirvDisassembler().disassemble(
        _module(_op(19, 2), reserved=1), stage=ShaderStage.FRAGMENT
    )

    assert text.splitlines()[:5] == [
        "Fragment Shader SPIR-V:",
        "",
        "Version 1.0, Generator 00080001 (glslang)",
        "IDs up to <10>",
        "Reserved word 4 is non-zero",
    ]


def test_magic_mismatch_short_circuits() -> None:
    text = SpirvDisassembler().disassemble([0xDEADBEEF, 0, 0, 0, 0, 0])

    assert text == "Unrecognised magic number deadbeef\n"


def test_lines_requires_magic() -> None:
    with pytest.raises(StreamCorruptionError, match="magic number"):
        SpirvDisassembler().lines([0x12345678, 0, 0, 10, 0])


def test_zero_word_count_is_corrupt() -> None:
    words = _module(_op(19, 2)) + [0x00000013]

    with pytest.raises(StreamCorruptionError, match="zero word count") as excinfo:
        SpirvDisassembler().disassemble(words)

    assert excinfo.value.offset == 7


def test_overrunning_word_count_is_corrupt() -> None:
    words = _module() + [(5 << 16) | 19, 2]

    with pytest.raises(ValueError, match="needs 5 words, 2 remain"):
        SpirvDisassembler().disassemble(words)


def test_truncated_header_is_corrupt() -> None:
    with pytest.raises(StreamCorruptionError, match="header needs 5 words"):
        SpirvDisassembler().disassemble([MAGIC_NUMBER, 0x00010000])


def test_id_outside_bound_is_corrupt() -> None:
    words = _module(_name(20, "far"), bound=10)

    with pytest.raises(StreamCorruptionError, match="outside declared bound 10"):
        SpirvDisassembler().disassemble(words)


def test_symbol_table_placeholder() -> None:
    symbols = SymbolTable(8)
    symbols.bind(3, "colour", 0)

    assert symbols.name(3, 0) == "colour"
    assert symbols.name(4, 0) == "<4>"
    with pytest.raises(StreamCorruptionError):
        symbols.name(8, 0)


def test_line_rendering() -> None:
    assert DisassemblyLine(None, "Capability", "1").render() == "      Capability 1"
    assert DisassemblyLine(12, "Return", "").render() == "  12: Return"


def test_read_words_reports_trailing_bytes() -> None:
    data = b"".join(word.to_bytes(4, "little") for word in (MAGIC_NUMBER, 7)) + b"\x01\x02"

    words, remainder = read_words(data)

    assert words == [MAGIC_NUMBER, 7]
    assert remainder == 2


def test_literal_string_word_packing() -> None:
    words = encode_literal_string("main")

    assert len(words) == 2
    assert decode_literal_string(words + [0xFFFFFFFF]) == ("main", 2)
    assert decode_literal_string(encode_literal_string("abc")) == ("abc", 1)


def test_three_instruction_scope() -> None:
    words = _module(
        _op(19, 2),
        _op(54, 2, 4, 0, 3),
        _op(248, 5),
        _op(1, 2, 6),
        _op(253),
        _op(56),
        _op(19, 8),
    )

    lines = SpirvDisassembler().lines(words)

    assert [line.index for line in lines] == [None, None, 0, 1, 2, None, None]
