from __future__ import annotations

from pathlib import Path

from imgc.errors import OutputError


def write_bytes(path: str | Path, data: bytes) -> None:
    """Write `data` to `path`, creating parent dirs. Existing files are overwritten."""
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(bytes(data))
    except OSError as e:
        raise OutputError(f"scrittura fallita: {p}: {e}") from e
