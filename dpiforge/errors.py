"""Job-local conversion failures."""
from __future__ import annotations

from typing import Optional

from .job import FailureKind


class ConversionError(Exception):
    """Base class for failures that end a single job in ERROR."""

    kind: FailureKind

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.kind.value)


class DecodeFailure(ConversionError):
    """The source is unreadable or not a valid raster."""

    kind = FailureKind.DECODE


class Wrong9Patch(ConversionError):
    """A 9-patch border strip holds something other than black or transparent."""

    kind = FailureKind.WRONG_9PATCH


class EncodeFailure(ConversionError):
    """An output file or directory could not be written."""

    kind = FailureKind.ENCODE
