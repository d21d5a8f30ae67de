"""Conversion error taxonomy."""


class ConversionError(Exception):
    """Base class for conversion failures."""


class ValidationError(ConversionError):
    """The batch as a whole is malformed (no files, unknown target format)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnsupportedFileTypeError(ConversionError):
    """A single file declared a content type that is not accepted."""

    def __init__(self, filename: str, declared_type: str):
        super().__init__(f"Invalid file type: {filename}")
        self.filename = filename
        self.declared_type = declared_type


class CodecError(ConversionError):
    """The image codec could not read or write a buffer."""


class BatchConversionError(ConversionError):
    """First per-file failure of a batch; the whole batch is discarded."""

    def __init__(self, filename: str, stage: str, message: str):
        super().__init__(message)
        self.filename = filename
        self.stage = stage
        self.message = message
