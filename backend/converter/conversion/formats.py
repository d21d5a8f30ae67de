"""Supported output formats and accepted input types."""
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

IMAGE_PREFIX = "image/"

SUPPORTED_FORMATS: Mapping[str, str] = MappingProxyType({
    "webp": "image/webp",
    "avif": "image/avif",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
})


class FormatRegistry:
    """Read-only map of target format name -> canonical output MIME type."""

    def __init__(self, formats: Mapping[str, str] = SUPPORTED_FORMATS):
        self._formats: Mapping[str, str] = MappingProxyType(dict(formats))

    def mime_type_for(self, fmt: Optional[str]) -> Optional[str]:
        if fmt is None:
            return None
        return self._formats.get(fmt)

    def __contains__(self, fmt: object) -> bool:
        return fmt in self._formats

    @property
    def formats(self) -> list[str]:
        return list(self._formats)

    @property
    def mime_types(self) -> frozenset[str]:
        return frozenset(self._formats.values())

    def as_dict(self) -> dict[str, str]:
        return dict(self._formats)


class AcceptedInputTypes:
    """MIME types an uploaded file may declare.

    Defaults to the registry's output MIME types, so an input is only accepted
    when the service could also produce that format (image/gif is rejected).
    """

    def __init__(self, mime_types: Iterable[str]):
        self._types = frozenset(t.lower() for t in mime_types)

    @classmethod
    def from_registry(cls, registry: FormatRegistry) -> "AcceptedInputTypes":
        return cls(registry.mime_types)

    def __contains__(self, mime_type: object) -> bool:
        return mime_type in self._types

    def __iter__(self):
        return iter(sorted(self._types))


# Built once at import; shared read-only by every request
DEFAULT_REGISTRY = FormatRegistry()
