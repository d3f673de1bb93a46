from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import get_settings

settings = get_settings()
logger = logging.getLogger("preisdetektiv")

NORMALIZED_MIME = "image/jpeg"
FALLBACK_MIME = "application/octet-stream"


@dataclass(frozen=True)
class NormalizedImage:
    data: bytes
    mime: str
    normalized: bool
    filename: str = "image.jpg"

    def as_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{encoded}"


def _reencode_upright(raw: bytes, quality: int) -> bytes:
    with Image.open(BytesIO(raw)) as image:
        # Kamera-Orientierung (EXIF) in die Pixel übernehmen, Metadaten fallen beim Speichern weg
        upright = ImageOps.exif_transpose(image)
        rgb = upright.convert("RGB")
    buffer = BytesIO()
    rgb.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def normalize_orientation(
    raw: bytes,
    declared_mime: str | None = None,
    filename: str | None = None,
    quality: int | None = None,
) -> NormalizedImage:
    """Decode and re-encode an image so it renders upright on every device.

    Falls back to the untouched bytes when the image cannot be decoded;
    ``normalized`` tells which path was taken.
    """
    try:
        data = _reencode_upright(raw, quality or settings.JPEG_QUALITY)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.info("Orientation fix skipped for %s: %s", filename or "upload", exc)
        return NormalizedImage(
            data=raw,
            mime=declared_mime or FALLBACK_MIME,
            normalized=False,
            filename=filename or "image",
        )
    return NormalizedImage(
        data=data,
        mime=NORMALIZED_MIME,
        normalized=True,
        filename=_jpeg_name(filename),
    )


def _jpeg_name(filename: str | None) -> str:
    if not filename:
        return "image.jpg"
    stem = filename.rsplit(".", 1)[0] or "image"
    return f"{stem}.jpg"
