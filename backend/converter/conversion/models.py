"""Conversion request/response models."""
from dataclasses import dataclass
from typing import Optional

from converter.config import DEFAULT_QUALITY


@dataclass(frozen=True)
class ConversionOptions:
    """Encoder options applied to every file of one request."""

    quality: int = DEFAULT_QUALITY
    lossless: bool = False


@dataclass(frozen=True)
class UploadedFile:
    name: str
    declared_type: str
    raw_bytes: bytes

    @property
    def size(self) -> int:
        return len(self.raw_bytes)


@dataclass(frozen=True)
class ImageInfo:
    format: Optional[str]
    width: int
    height: int

    def to_dict(self, size: int) -> dict:
        return {"format": self.format, "width": self.width, "height": self.height, "size": size}


@dataclass(frozen=True)
class ConvertedFileResult:
    name: str
    original_name: str
    buffer: str  # base64 of the encoded output
    size: int  # bytes
    type: str
    original: ImageInfo
    original_size: int  # bytes
    converted: ImageInfo

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "buffer": self.buffer,
            "originalName": self.original_name,
            "size": self.size,
            "type": self.type,
            "metadata": {
                "original": self.original.to_dict(self.original_size),
                "converted": self.converted.to_dict(self.size),
            },
        }
