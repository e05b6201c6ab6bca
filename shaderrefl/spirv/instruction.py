"""Word-level decoding of SPIR-V modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from ..errors import StreamCorruptionError
from .constants import HEADER_WORDS, opcode_name


WORD_SIZE = 4


@dataclass(frozen=True)
class Instruction:
    """One tagged instruction: a header word followed by operand words."""

    offset: int
    words: Tuple[int, ...]

    @property
    def opcode(self) -> int:
        return self.words[0] & 0xFFFF

    @property
    def word_count(self) -> int:
        return self.words[0] >> 16

    @property
    def operands(self) -> Tuple[int, ...]:
        return self.words[1:]

    @property
    def mnemonic(self) -> str:
        return opcode_name(self.opcode)

    def operand(self, index: int) -> int:
        """Return operand ``index`` or fail as a corrupt stream."""

        if index >= len(self.words) - 1:
            raise StreamCorruptionError(
                self.offset, f"{self.mnemonic} is missing operand {index}"
            )
        return self.words[index + 1]

    def literal_string(self, index: int) -> str:
        """Decode the nul-terminated literal starting at operand ``index``."""

        if index >= len(self.words) - 1:
            raise StreamCorruptionError(
                self.offset, f"{self.mnemonic} is missing its literal string"
            )
        text, _ = decode_literal_string(self.words[index + 1 :])
        return text


@dataclass(frozen=True)
class ModuleHeader:
    magic: int
    version: int
    generator: int
    id_bound: int
    reserved: int

    @classmethod
    def from_words(cls, words: Sequence[int]) -> "ModuleHeader":
        if len(words) < HEADER_WORDS:
            raise StreamCorruptionError(
                len(words), f"header needs {HEADER_WORDS} words, stream has {len(words)}"
            )
        return cls(*(int(word) for word in words[:HEADER_WORDS]))

    def describe_version(self) -> str:
        return f"{(self.version >> 16) & 0xFF}.{(self.version >> 8) & 0xFF}"


def read_words(data: bytes) -> Tuple[List[int], int]:
    """Split ``data`` into little-endian words.

    Returns the decoded words together with the number of trailing bytes that
    did not form a full word.
    """

    remainder = len(data) % WORD_SIZE
    usable = len(data) - remainder
    words = [
        int.from_bytes(data[idx : idx + WORD_SIZE], "little")
        for idx in range(0, usable, WORD_SIZE)
    ]
    return words, remainder


def iter_instructions(words: Sequence[int], start: int = HEADER_WORDS) -> Iterator[Instruction]:
    """Yield every instruction from ``start`` to the end of ``words``.

    A zero word count would never advance and a count running past the end of
    the stream would read out of bounds; both abort the scan.
    """

    total = len(words)
    offset = start
    while offset < total:
        header = int(words[offset])
        word_count = header >> 16
        if word_count == 0:
            raise StreamCorruptionError(
                offset, f"zero word count for opcode {header & 0xFFFF}"
            )
        end = offset + word_count
        if end > total:
            raise StreamCorruptionError(
                offset,
                f"{opcode_name(header & 0xFFFF)} needs {word_count} words, "
                f"{total - offset} remain",
            )
        yield Instruction(offset, tuple(int(word) for word in words[offset:end]))
        offset = end


def decode_literal_string(words: Sequence[int]) -> Tuple[str, int]:
    """Decode a nul-terminated UTF-8 literal packed into little-endian words.

    Returns the string and the number of words it occupied.  A literal that is
    not terminated within ``words`` is decoded up to the last byte.
    """

    data = bytearray()
    for consumed, word in enumerate(words, start=1):
        chunk = int(word).to_bytes(WORD_SIZE, "little")
        terminator = chunk.find(b"\0")
        if terminator != -1:
            data.extend(chunk[:terminator])
            return data.decode("utf-8", "replace"), consumed
        data.extend(chunk)
    return data.decode("utf-8", "replace"), len(words)


def encode_literal_string(text: str) -> List[int]:
    """Pack ``text`` into nul-terminated little-endian words."""

    data = text.encode("utf-8") + b"\0"
    data += b"\0" * (-len(data) % WORD_SIZE)
    return [int.from_bytes(data[idx : idx + WORD_SIZE], "little") for idx in range(0, len(data), WORD_SIZE)]
