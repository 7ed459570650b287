from __future__ import annotations

from imgc.core.codec_base import Compressor
from imgc.core.codec_deflate import CodecDeflate
from imgc.core.codec_deflate import DEFAULT_LEVEL as DEFLATE_DEFAULT_LEVEL
from imgc.core.codec_lzw import DEFAULT_MAX_TABLE_SIZE, CodecLzw
from imgc.core.codec_zstd import DEFAULT_LEVEL as ZSTD_DEFAULT_LEVEL
from imgc.core.codec_zstd import CodecZstd
from imgc.errors import UnknownAlgorithm

DEFAULT_ALGORITHM = "lzw"

_ALGORITHMS: tuple[str, ...] = ("deflate", "lzw", "zstd", "zstd_tight")


def available_algorithms() -> tuple[str, ...]:
    return _ALGORITHMS


def normalize_algorithm(algorithm: str) -> str:
    name = str(algorithm).strip().lower()
    if name not in _ALGORITHMS:
        raise UnknownAlgorithm(
            f"algoritmo sconosciuto: {algorithm!r} (disponibili: {', '.join(_ALGORITHMS)})"
        )
    return name


def create_compressor(
    algorithm: str,
    level: int | None = None,
    max_table_size: int | None = None,
) -> Compressor:
    """Build a codec by name.

    - lzw ignores `level` (the table size is its only knob)
    - deflate/zstd ignore `max_table_size`
    """
    name = normalize_algorithm(algorithm)

    if name == "lzw":
        return CodecLzw(
            max_table_size=DEFAULT_MAX_TABLE_SIZE if max_table_size is None else max_table_size
        )
    if name == "deflate":
        return CodecDeflate(level=DEFLATE_DEFAULT_LEVEL if level is None else level)
    if name in ("zstd", "zstd_tight"):
        return CodecZstd(
            level=ZSTD_DEFAULT_LEVEL if level is None else level,
            tight=(name == "zstd_tight"),
        )
    raise AssertionError("unreachable")
