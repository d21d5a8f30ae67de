"""Image codec capability and its Pillow implementation."""
import io
import logging
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from converter.conversion.errors import CodecError
from converter.conversion.models import ConversionOptions, ImageInfo

logger = logging.getLogger("converter.codec")


class ImageCodec(Protocol):
    """Blocking decode/encode backend used by the conversion service."""

    def inspect(self, data: bytes) -> ImageInfo:
        ...

    def encode(self, data: bytes, target_format: str, options: ConversionOptions) -> bytes:
        ...


class PillowCodec:
    """ImageCodec backed by Pillow. Calls block; run them off the event loop."""

    def inspect(self, data: bytes) -> ImageInfo:
        try:
            with Image.open(io.BytesIO(data)) as img:
                fmt = img.format.lower() if img.format else None
                return ImageInfo(format=fmt, width=img.width, height=img.height)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise CodecError(f"Could not read image metadata: {e}") from e

    @staticmethod
    def _save_kwargs(target_format: str, options: ConversionOptions) -> dict:
        fmt = target_format.lower()
        quality = options.quality
        if fmt == "webp":
            return {"format": "WEBP", "quality": quality, "lossless": options.lossless, "method": 6}
        if fmt == "avif":
            if options.lossless:
                return {"format": "AVIF", "quality": 100, "subsampling": "4:4:4"}
            return {"format": "AVIF", "quality": quality}
        if fmt in ("jpg", "jpeg"):
            return {"format": "JPEG", "quality": quality, "optimize": True, "progressive": True}
        if fmt == "png":
            # PNG is lossless; quality has no effect beyond the effort hint
            return {"format": "PNG", "optimize": True, "compress_level": 9}
        raise CodecError(f"Unsupported format: {target_format}")

    def encode(self, data: bytes, target_format: str, options: ConversionOptions) -> bytes:
        save_kw = self._save_kwargs(target_format, options)
        try:
            with Image.open(io.BytesIO(data)) as img:
                if save_kw["format"] == "JPEG" and img.mode != "RGB":
                    out_img = img.convert("RGB")
                elif img.mode not in ("RGB", "RGBA"):
                    out_img = img.convert("RGBA" if img.has_transparency_data else "RGB")
                else:
                    out_img = img
                buffer = io.BytesIO()
                out_img.save(buffer, **save_kw)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, KeyError) as e:
            raise CodecError(f"Failed to convert to {target_format}: {e}") from e
        out = buffer.getvalue()
        logger.debug("Encoded %s bytes -> %s bytes (%s)", len(data), len(out), target_format)
        return out
