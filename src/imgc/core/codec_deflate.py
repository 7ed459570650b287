from __future__ import annotations

import zlib
from dataclasses import dataclass, field

from imgc.core.codec_base import Compressor, require_bytes
from imgc.errors import CompressionError, DecompressionError, InvalidLevel

DEFAULT_LEVEL = 6

# raw DEFLATE: no zlib header, no adler32 trailer
_WBITS = -15


@dataclass
class CodecDeflate(Compressor):
    """Raw DEFLATE byte codec (stdlib zlib, no external deps)."""

    level: int = DEFAULT_LEVEL
    codec_id: str = field(default="deflate", init=False)

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidLevel(f"deflate level must be int, got {self.level!r}")
        if not (0 <= self.level <= 9):
            raise InvalidLevel(f"deflate level must be 0..9, got {self.level}")

    def __str__(self) -> str:
        return f"CodecDeflate (level {self.level})"

    def compress(self, data: bytes) -> bytes:
        raw = require_bytes(data)
        try:
            c = zlib.compressobj(self.level, zlib.DEFLATED, _WBITS)
            return c.compress(raw) + c.flush()
        except zlib.error as e:
            raise CompressionError(f"deflate: {e}") from e

    def decompress(self, data: bytes) -> bytes:
        comp = require_bytes(data, "comp")
        d = zlib.decompressobj(_WBITS)
        try:
            out = d.decompress(comp) + d.flush()
        except zlib.error as e:
            raise DecompressionError(f"deflate: stream non valido: {e}") from e
        if not d.eof:
            raise DecompressionError("deflate: stream troncato")
        if d.unused_data:
            raise DecompressionError(f"deflate: {len(d.unused_data)} byte in coda allo stream")
        return out
