"""Resizing and normalization stages of the tensor pipeline."""

from __future__ import annotations

from .normalize import FINALIZERS, apply_normalization, normalize_image, to_layout
from .resize import resize_image, resolve_size

__all__ = [
    "FINALIZERS",
    "apply_normalization",
    "normalize_image",
    "resize_image",
    "resolve_size",
    "to_layout",
]
