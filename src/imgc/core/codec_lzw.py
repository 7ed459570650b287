"""LZW codec with a fixed 16-bit code width.

Wire format: flat sequence of big-endian u16 codes. No magic, no header,
no code count. The table size is NOT in the stream: compress and decompress
must use the same max_table_size, a mismatch is not detectable.

Table policy: literals 0..255 are always present; new entries get the next
sequential code until max_table_size is reached, then the table is frozen
(no reset, no eviction).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from imgc.core.codec_base import Compressor, require_bytes
from imgc.errors import CompressionError, DecompressionError, InvalidParameter

CODE_WIDTH = 2
LITERALS = 256
MAX_CODES = 1 << (8 * CODE_WIDTH)
DEFAULT_MAX_TABLE_SIZE = 4096


def check_table_size(max_table_size: int) -> int:
    if isinstance(max_table_size, bool) or not isinstance(max_table_size, int):
        raise InvalidParameter(f"lzw: max_table_size must be int, got {max_table_size!r}")
    if not (LITERALS <= max_table_size <= MAX_CODES):
        raise InvalidParameter(
            f"lzw: max_table_size must be {LITERALS}..{MAX_CODES}, got {max_table_size}"
        )
    return max_table_size


def lzw_encode(data: bytes, max_table_size: int = DEFAULT_MAX_TABLE_SIZE) -> bytes:
    """Compress `data` into a stream of u16 big-endian codes."""
    table: dict[bytes, int] = {bytes((i,)): i for i in range(LITERALS)}
    codes: list[int] = []

    w = b""
    for k in data:
        kb = bytes((k,))
        wk = w + kb
        if wk in table:
            w = wk
            continue

        code = table.get(w)
        if code is None:
            raise CompressionError(f"lzw: match di {len(w)} byte assente dal dizionario")
        codes.append(code)
        if len(table) < max_table_size:
            table[wk] = len(table)
        w = kb

    if w:
        code = table.get(w)
        if code is None:
            raise CompressionError(f"lzw: match finale di {len(w)} byte assente dal dizionario")
        codes.append(code)

    return struct.pack(f">{len(codes)}H", *codes)


def lzw_decode(data: bytes, max_table_size: int = DEFAULT_MAX_TABLE_SIZE) -> bytes:
    """Inverse of lzw_encode(); the table is rebuilt one code behind the encoder."""
    if not data:
        raise DecompressionError("lzw: stream vuoto (serve almeno un codice)")
    if len(data) % CODE_WIDTH:
        raise DecompressionError(
            f"lzw: stream troncato ({len(data)} byte, non multiplo di {CODE_WIDTH})"
        )

    codes = struct.unpack(f">{len(data) // CODE_WIDTH}H", data)
    table: list[bytes] = [bytes((i,)) for i in range(LITERALS)]

    first = codes[0]
    if first >= len(table):
        raise DecompressionError(f"lzw: primo codice non valido: {first}")
    w = table[first]
    out = bytearray(w)

    for pos, k in enumerate(codes[1:], start=1):
        if k < len(table):
            entry = table[k]
        elif k == len(table):
            # code emitted before the encoder could insert it: must be w + w[0]
            entry = w + w[:1]
        else:
            raise DecompressionError(
                f"lzw: codice non valido {k} alla posizione {pos} (tabella={len(table)})"
            )
        out += entry
        if len(table) < max_table_size:
            table.append(w + entry[:1])
        w = entry

    return bytes(out)


@dataclass
class CodecLzw(Compressor):
    """LZW byte codec (16-bit codes, frozen table once full)."""

    max_table_size: int = DEFAULT_MAX_TABLE_SIZE
    codec_id: str = field(default="lzw", init=False)

    def __post_init__(self) -> None:
        check_table_size(self.max_table_size)

    def compress(self, data: bytes) -> bytes:
        return lzw_encode(require_bytes(data), self.max_table_size)

    def decompress(self, data: bytes) -> bytes:
        return lzw_decode(require_bytes(data, "comp"), self.max_table_size)
