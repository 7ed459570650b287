from __future__ import annotations

from dataclasses import dataclass, field

from imgc.core.codec_base import Compressor, require_bytes
from imgc.errors import CompressionError, DecompressionError, InvalidLevel, MissingDependency

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

DEFAULT_LEVEL = 19


def have_zstd() -> bool:
    return zstd is not None


@dataclass
class CodecZstd(Compressor):
    """
    Codec byte-compressor zstd.

    "tight" prova a minimizzare l'overhead del frame zstd:
      - no content size nel frame
      - no checksum
    """

    level: int = DEFAULT_LEVEL
    tight: bool = False
    codec_id: str = field(default="zstd", init=False)

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidLevel(f"zstd level must be int, got {self.level!r}")
        if not (1 <= self.level <= 22):
            raise InvalidLevel(f"zstd level must be 1..22, got {self.level}")

    def _require(self) -> None:
        if zstd is None:
            raise MissingDependency(
                "Modulo 'zstandard' non disponibile. Installa con: python3 -m pip install zstandard"
            )

    def compress(self, data: bytes) -> bytes:
        self._require()
        raw = require_bytes(data)

        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))

        try:
            return c.compress(raw)
        except zstd.ZstdError as e:
            raise CompressionError(f"zstd: {e}") from e

    def decompress(self, data: bytes) -> bytes:
        self._require()
        comp = require_bytes(data, "comp")
        d = zstd.ZstdDecompressor()
        try:
            # tight frames have no content size: decompressobj() does not need it
            dobj = d.decompressobj()
            out = dobj.decompress(comp)
        except zstd.ZstdError as e:
            raise DecompressionError(f"zstd: stream non valido: {e}") from e
        if not dobj.eof:
            raise DecompressionError("zstd: frame troncato")
        if dobj.unused_data:
            raise DecompressionError(f"zstd: {len(dobj.unused_data)} byte in coda allo stream")
        return out
