from .formats import AcceptedInputTypes, FormatRegistry
from .models import ConversionOptions, ConvertedFileResult, ImageInfo, UploadedFile
from .service import ConversionService

__all__ = [
    "AcceptedInputTypes",
    "ConversionOptions",
    "ConversionService",
    "ConvertedFileResult",
    "FormatRegistry",
    "ImageInfo",
    "UploadedFile",
]
