"""Batch image conversion: per-file pipeline fanned out over one request."""
import asyncio
import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from converter.config import ACCEPTED_INPUT_TYPES, CODEC_TIMEOUT_SECONDS, MAX_WORKERS
from converter.conversion.codec import ImageCodec, PillowCodec
from converter.conversion.errors import (
    BatchConversionError,
    CodecError,
    UnsupportedFileTypeError,
)
from converter.conversion.formats import DEFAULT_REGISTRY, AcceptedInputTypes, FormatRegistry
from converter.conversion.models import ConversionOptions, ConvertedFileResult, UploadedFile
from converter.conversion.validation import is_acceptable

logger = logging.getLogger("converter.service")


def output_name(original_name: str, target_format: str) -> str:
    """photo.with.dots.png + webp -> photo.webp (text before the first dot is kept)."""
    return f"{original_name.split('.', 1)[0]}.{target_format.lower()}"


class ConversionService:
    """Runs the convert pipeline for every file of a batch, all-or-nothing."""

    def __init__(
        self,
        registry: FormatRegistry = DEFAULT_REGISTRY,
        codec: Optional[ImageCodec] = None,
        accepted_types: Optional[AcceptedInputTypes] = None,
        codec_timeout: Optional[float] = CODEC_TIMEOUT_SECONDS,
        max_workers: int = MAX_WORKERS,
    ):
        self.registry = registry
        self.codec: ImageCodec = codec or PillowCodec()
        self.accepted_types = accepted_types or AcceptedInputTypes.from_registry(registry)
        self.codec_timeout = codec_timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        logger.info(
            "ConversionService initialized with max_workers=%s, codec_timeout=%s",
            max_workers,
            codec_timeout,
        )

    async def _run_codec(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        call = loop.run_in_executor(self._executor, func, *args)
        if self.codec_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.codec_timeout)
        except asyncio.TimeoutError as e:
            raise CodecError(f"Codec call timed out after {self.codec_timeout}s") from e

    async def convert_file(
        self,
        file: UploadedFile,
        target_format: str,
        options: ConversionOptions,
    ) -> ConvertedFileResult:
        """Convert one file. Raises BatchConversionError tagged with the file and stage."""
        stage = "type-check"
        try:
            if not is_acceptable(file.declared_type, self.accepted_types):
                raise UnsupportedFileTypeError(file.name, file.declared_type)
            stage = "inspect-original"
            original_info = await self._run_codec(self.codec.inspect, file.raw_bytes)
            stage = "encode"
            output = await self._run_codec(self.codec.encode, file.raw_bytes, target_format, options)
            stage = "inspect-converted"
            converted_info = await self._run_codec(self.codec.inspect, output)
        except UnsupportedFileTypeError as e:
            logger.warning("Rejected %s: declared type %r is not accepted", file.name, e.declared_type)
            raise BatchConversionError(file.name, stage, str(e)) from e
        except CodecError as e:
            logger.error("Error converting %s at %s: %s", file.name, stage, e)
            raise BatchConversionError(file.name, stage, f"Failed to convert {file.name}: {e}") from e

        logger.info("Converted %s -> %s (%s -> %s bytes)", file.name, target_format, file.size, len(output))
        return ConvertedFileResult(
            name=output_name(file.name, target_format),
            original_name=file.name,
            buffer=base64.b64encode(output).decode("ascii"),
            size=len(output),
            type=self.registry.mime_type_for(target_format),
            original=original_info,
            original_size=file.size,
            converted=converted_info,
        )

    async def convert_batch(
        self,
        files: list[UploadedFile],
        target_format: str,
        options: ConversionOptions,
    ) -> list[ConvertedFileResult]:
        """Convert all files concurrently. The first failure cancels the rest and is raised."""
        if target_format not in self.registry:
            # Upload validation rejects this before we get here
            raise ValueError(f"Unsupported format: {target_format}")
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self.convert_file(f, target_format, options))
                    for f in files
                ]
        except ExceptionGroup as eg:
            for exc in eg.exceptions:
                if isinstance(exc, BatchConversionError):
                    raise exc from None
            raise
        return [t.result() for t in tasks]

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


# Singleton
_conversion_service: Optional[ConversionService] = None


def get_conversion_service() -> ConversionService:
    global _conversion_service
    if _conversion_service is None:
        accepted = AcceptedInputTypes(ACCEPTED_INPUT_TYPES) if ACCEPTED_INPUT_TYPES else None
        _conversion_service = ConversionService(accepted_types=accepted)
    return _conversion_service


def shutdown_conversion_service() -> None:
    global _conversion_service
    if _conversion_service is not None:
        _conversion_service.shutdown()
        _conversion_service = None
