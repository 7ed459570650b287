"""Compression config for imgc.

Small and strict, like the rest of the project:
  - JSON only
  - unknown keys are rejected
  - '@file.json' or inline JSON object
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from imgc.core.codec_base import Compressor
from imgc.core.registry import create_compressor, normalize_algorithm
from imgc.errors import ConfigError, InvalidParameter, UnknownAlgorithm

_ALLOWED_KEYS = {"compression_algorithm", "compression_level", "max_table_size"}


def _parse_json_object(raw: str, where: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw)
    except Exception as e:
        raise ConfigError(f"config: JSON non valido in {where}: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigError(f"config: il JSON in {where} deve essere un oggetto")
    return obj


def _read_json_file(path: Path) -> dict[str, Any]:
    p = Path(path).expanduser()
    if not p.exists() or not p.is_file():
        raise ConfigError(f"config: file non trovato: {p}")
    return _parse_json_object(p.read_text(encoding="utf-8"), str(p))


def _optional_int(obj: dict[str, Any], key: str) -> int | None:
    v = obj.get(key)
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConfigError(f"config: campo '{key}' deve essere intero")
    return v


@dataclass(frozen=True)
class Config:
    """Which codec to build, and its knobs."""

    compression_algorithm: str
    compression_level: int | None = None
    max_table_size: int | None = None

    def create_compressor(self) -> Compressor:
        return create_compressor(
            self.compression_algorithm,
            level=self.compression_level,
            max_table_size=self.max_table_size,
        )


def config_from_dict(obj: dict[str, Any]) -> Config:
    extra = sorted(set(obj.keys()) - _ALLOWED_KEYS)
    if extra:
        raise ConfigError(f"config: chiavi non supportate: {', '.join(extra)}")

    algo = obj.get("compression_algorithm")
    if not isinstance(algo, str) or not algo.strip():
        raise ConfigError("config: campo 'compression_algorithm' richiesto (string)")
    try:
        algo = normalize_algorithm(algo)
    except UnknownAlgorithm as e:
        raise ConfigError(f"config: {e}") from e

    cfg = Config(
        compression_algorithm=algo,
        compression_level=_optional_int(obj, "compression_level"),
        max_table_size=_optional_int(obj, "max_table_size"),
    )
    # level/table size are checked by the codec constructors
    try:
        cfg.create_compressor()
    except InvalidParameter as e:
        raise ConfigError(f"config: {e}") from e
    return cfg


def load_config(path: str | Path) -> Config:
    """Load and validate a config file (JSON object)."""
    return config_from_dict(_read_json_file(Path(path)))


def load_config_arg(config_arg: str) -> Config:
    """Load and validate a config.

    config_arg:
      - '@file.json'
      - inline JSON object
    """
    s = config_arg.strip()
    if not s:
        raise ConfigError("config: argomento vuoto")
    if s.startswith("@"):
        return load_config(s[1:])
    return config_from_dict(_parse_json_object(s, "argomento inline"))
