from __future__ import annotations

from abc import ABC, abstractmethod


class Compressor(ABC):
    """
    Interfaccia minima per codec pluggabili (whole-buffer, no streaming).

    Contract:
      - compress() fails only with CompressionError
      - decompress() fails only with DecompressionError, never with partial output
      - no header is added by the interface itself: each codec owns its wire format
    """

    codec_id: str

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        raise NotImplementedError


def require_bytes(data: object, name: str = "data") -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    return bytes(data)
