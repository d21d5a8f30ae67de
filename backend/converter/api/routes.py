"""API routes for upload and conversion."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from converter.api import responses
from converter.config import DEFAULT_QUALITY, MAX_QUALITY, MIN_QUALITY
from converter.conversion.errors import BatchConversionError, ValidationError
from converter.conversion.models import ConversionOptions, UploadedFile
from converter.conversion.service import ConversionService, get_conversion_service
from converter.conversion.validation import validate_upload

logger = logging.getLogger("converter.api")
router = APIRouter(prefix="/api", tags=["converter"])


def parse_quality(raw: Optional[str]) -> int:
    """Numeric form value -> encoder quality. Missing, zero or non-numeric means the default."""
    try:
        value = int(float((raw or "").strip()))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_QUALITY
    if value == 0:
        return DEFAULT_QUALITY
    return max(MIN_QUALITY, min(MAX_QUALITY, value))


def parse_lossless(raw: Optional[str]) -> bool:
    return raw == "true"


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/formats")
def get_formats(svc: ConversionService = Depends(get_conversion_service)):
    """Target formats with their output MIME type, and the accepted input types."""
    return {
        "output": svc.registry.as_dict(),
        "accepted_input_types": list(svc.accepted_types),
    }


@router.post("/upload")
async def upload_files(
    files: Optional[list[UploadFile]] = File(None),
    target_format: Optional[str] = Form(None, alias="targetFormat"),
    quality: Optional[str] = Form(None),
    lossless: Optional[str] = Form(None),
    svc: ConversionService = Depends(get_conversion_service),
):
    """Convert every uploaded file to targetFormat; all files succeed or the request fails."""
    files = files or []
    options = ConversionOptions(quality=parse_quality(quality), lossless=parse_lossless(lossless))
    logger.info(
        "Upload request: %s file(s) -> %s (quality=%s, lossless=%s)",
        len(files),
        target_format,
        options.quality,
        options.lossless,
    )

    try:
        validate_upload(len(files), target_format, svc.registry)
    except ValidationError as e:
        logger.warning("Rejected upload: %s", e.reason)
        return responses.validation_error(e.reason)

    try:
        uploaded = [
            UploadedFile(
                name=f.filename or "",
                declared_type=f.content_type or "",
                raw_bytes=await f.read(),
            )
            for f in files
        ]
        results = await svc.convert_batch(uploaded, target_format, options)
    except BatchConversionError as e:
        logger.error("Batch failed at %s of %s: %s", e.stage, e.filename, e.message)
        return responses.batch_error(e.message)
    except Exception as e:
        logger.exception("Batch conversion failed: %s", e)
        return responses.batch_error(responses.INTERNAL_ERROR_DETAILS)

    logger.info("All %s file(s) converted to %s", len(results), target_format)
    return responses.success(results)
