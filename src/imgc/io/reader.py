from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imgc.errors import InputError


def read_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image file (format sniffed by Pillow)."""
    p = Path(path)
    if not p.is_file():
        raise InputError(f"immagine non trovata: {p}")
    try:
        with Image.open(p) as im:
            im.load()
            return im.copy()
    except UnidentifiedImageError as e:
        raise InputError(f"formato immagine non riconosciuto: {p}") from e
    except Image.DecompressionBombError as e:
        raise InputError(f"immagine troppo grande (decompression bomb): {p}: {e}") from e
    except OSError as e:
        raise InputError(f"immagine non leggibile: {p}: {e}") from e


def image_to_bytes(image: Image.Image) -> bytes:
    """Packed 8-bit RGB samples, row-major (alpha dropped, palette expanded)."""
    if image.mode != "RGB":
        image = image.convert("RGB")
    return image.tobytes()


def read_image_bytes(path: str | Path) -> bytes:
    return image_to_bytes(read_image(path))


def read_bytes(path: str | Path) -> bytes:
    p = Path(path)
    try:
        return p.read_bytes()
    except FileNotFoundError as e:
        raise InputError(f"file non trovato: {p}") from e
    except OSError as e:
        raise InputError(f"file non leggibile: {p}: {e}") from e
