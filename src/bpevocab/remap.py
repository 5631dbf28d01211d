"""
Byte <-> character bijection used by the legacy data-gym vocabulary format.

GPT-2 era ``vocab.bpe`` files store every byte as a printable character so
the file can be handled as plain text. Bytes that are already printable in
Latin-1 stand for themselves; the rest (control characters, space, DEL, the
C1 block, NBSP and the soft hyphen) are shifted to code points starting at
U+0100, in byte order.
"""

from types import MappingProxyType
from typing import Final, Mapping

from .errors import UndecodableCodePointError
from .types import RankTable

# bytes whose Latin-1 character is printable and stands for itself
PRINTABLE_RANGES: Final[tuple[range, ...]] = (
    range(ord("!"), ord("~") + 1),
    range(ord("¡"), ord("¬") + 1),
    range(ord("®"), ord("ÿ") + 1),
)

# bytes that get a shifted placeholder, in assignment order
SHIFTED_RANGES: Final[tuple[range, ...]] = (
    range(0, ord(" ") + 1),
    range(127, 160 + 1),
    range(173, 173 + 1),
)

SHIFT_OFFSET: Final[int] = 256


class ByteRemapTable:
    """
    Immutable bidirectional map between the 256 byte values and their
    data-gym characters.

    Use :func:`build_byte_remap` to construct one.
    """

    __slots__ = ("_byte_to_char", "_char_to_byte", "_ranks")

    def __init__(self, pairs: list[tuple[int, str, int]]) -> None:
        """Initialize from ``(byte, char, rank)`` triples in construction order."""
        self._byte_to_char: Mapping[int, str] = MappingProxyType(
            {b: c for b, c, _ in pairs}
        )
        self._char_to_byte: Mapping[str, int] = MappingProxyType(
            {c: b for b, c, _ in pairs}
        )
        self._ranks: Mapping[int, int] = MappingProxyType(
            {b: rank for b, _, rank in pairs}
        )

    def __len__(self) -> int:
        return len(self._byte_to_char)

    def __contains__(self, char: object) -> bool:
        return char in self._char_to_byte

    @property
    def byte_to_char(self) -> Mapping[int, str]:
        return self._byte_to_char

    @property
    def char_to_byte(self) -> Mapping[str, int]:
        return self._char_to_byte

    def decode(self, text: str) -> bytes:
        """
        Map each character of ``text`` back to its raw byte.

        :raises UndecodableCodePointError: On the first character that has no
                                           entry in the table.
        """
        out = bytearray()
        for c in text:
            b = self._char_to_byte.get(c)
            if b is None:
                raise UndecodableCodePointError("character not in byte remap table", char=c)
            out.append(b)
        return bytes(out)

    def encode(self, data: bytes) -> str:
        """Map raw bytes to their data-gym characters."""
        return "".join(self._byte_to_char[b] for b in data)

    def base_ranks(self) -> RankTable:
        """Return a fresh rank table holding the 256 single-byte tokens."""
        return {bytes([b]): rank for b, rank in self._ranks.items()}


def build_byte_remap() -> ByteRemapTable:
    """
    Build the data-gym byte remap table.

    Printable bytes are registered first, then the remaining bytes in
    ``SHIFTED_RANGES`` order, each taking the next free code point above
    U+00FF. The order matters: reordering the shifted ranges moves every
    placeholder after the change.
    """
    pairs: list[tuple[int, str, int]] = []

    for r in PRINTABLE_RANGES:
        for b in r:
            pairs.append((b, chr(b), b))

    n = 0
    for r in SHIFTED_RANGES:
        for b in r:
            pairs.append((b, chr(SHIFT_OFFSET + n), b))
            n += 1

    return ByteRemapTable(pairs)
