"""Error types raised by the tensor generation pipeline.

Each class also derives from the closest builtin so callers that already
handle ``ValueError``/``OSError`` keep working.
"""

from __future__ import annotations

from pathlib import Path


class TensorGenError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(TensorGenError, ValueError):
    """An unknown enumerated value or malformed configuration record."""


class ImageLoadError(TensorGenError, OSError):
    """The source image could not be decoded."""

    def __init__(self, path: str | Path, cause: object) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to load image file {self.path}: {cause}")


class TensorWriteError(TensorGenError, OSError):
    """The output tensor file could not be created or written."""

    def __init__(self, path: str | Path, cause: object) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to write output file {self.path}: {cause}")
