"""Batch-level request checks and the per-file content type guard."""
from typing import Optional

from converter.conversion.errors import ValidationError
from converter.conversion.formats import IMAGE_PREFIX, AcceptedInputTypes, FormatRegistry

NO_FILES = "No files provided"
UNSUPPORTED_FORMAT = "Unsupported format"


def validate_upload(file_count: int, target_format: Optional[str], registry: FormatRegistry) -> None:
    """Raise ValidationError if the batch cannot be processed at all."""
    if file_count == 0:
        raise ValidationError(NO_FILES)
    if target_format not in registry:
        raise ValidationError(UNSUPPORTED_FORMAT)


def is_acceptable(declared_type: Optional[str], accepted: AcceptedInputTypes) -> bool:
    if not declared_type:
        return False
    declared_type = declared_type.lower()
    return declared_type.startswith(IMAGE_PREFIX) and declared_type in accepted
