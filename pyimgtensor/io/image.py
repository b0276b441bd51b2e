from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from pyimgtensor.errors import ImageLoadError

PixelBuffer = NDArray[np.uint8]


def _to_rgb_u8(img: Image.Image) -> PixelBuffer:
    # Pillow's RGB conversion clips 16-bit samples; keep the high byte instead.
    if img.mode == "I" or img.mode.startswith("I;16"):
        wide = np.clip(np.asarray(img).astype(np.int64), 0, 0xFFFF)
        gray = (wide >> 8).astype(np.uint8)
        return np.stack([gray, gray, gray], axis=-1)
    return np.asarray(img.convert("RGB"), dtype=np.uint8)


def load_image(path: str | Path) -> PixelBuffer:
    """Decode an image file into a ``uint8`` RGB pixel buffer of shape (H,W,3).

    Grayscale, palette and alpha images are converted to 3-channel RGB.
    16-bit grayscale samples are reduced to their high byte.

    Raises
    ------
    ImageLoadError
        When the file cannot be opened or decoded, or exceeds Pillow's
        decompression-bomb limit. The original exception is chained as
        ``__cause__``.
    """

    path_str = str(path)
    try:
        with Image.open(path_str) as img:
            arr = _to_rgb_u8(img)
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(path_str, exc) from exc

    return as_pixel_buffer(arr, source=path_str)


def as_pixel_buffer(image: Any, *, source: str = "<array>") -> PixelBuffer:
    """Validate an in-memory image as an RGB ``uint8`` (H,W,3) pixel buffer."""

    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected np.ndarray, got {type(image)}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype=uint8 for {source}, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected RGB image shape (H,W,3) for {source}, got {image.shape}")
    if image.shape[0] <= 0 or image.shape[1] <= 0:
        raise ValueError(f"Image {source} has an empty dimension: {image.shape}")
    return np.ascontiguousarray(image)
