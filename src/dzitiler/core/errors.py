"""Exception types raised by the tiling pipeline.

Every failure surfaced by dzitiler derives from :class:`TilingError`, so
callers can catch one type. The first error aborts a run; nothing is retried.
"""

from __future__ import annotations


class TilingError(Exception):
    """Base class for all dzitiler errors."""


class UnsupportedSourceImage(TilingError):
    """The source path has no usable parent/stem, or the file is not an image."""


class DimensionMismatch(TilingError):
    """A raw RGB buffer does not hold exactly ``width * height * 3`` bytes."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Input dimensions do not match RGB data length: "
            f"expected {expected} bytes, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class InvalidLevel(TilingError):
    """A pyramid level (or a tile within it) outside the valid range was requested.

    Not reachable through the public pipeline; seeing it means a caller
    computed a bad index.
    """


class TilingIOError(TilingError):
    """Creating a directory or writing a tile/descriptor failed."""


class CodecError(TilingError):
    """The image codec failed to decode the source or encode a tile."""
