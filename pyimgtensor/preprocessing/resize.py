from __future__ import annotations

import logging

import numpy as np

from pyimgtensor.io.image import PixelBuffer, as_pixel_buffer

logger = logging.getLogger(__name__)


def resolve_size(source_hw: tuple[int, int], width: int = 0, height: int = 0) -> tuple[int, int]:
    """Resolve a requested (width, height) against the source, returning (H,W).

    A zero dimension keeps the corresponding source dimension.
    """

    w, h = int(width), int(height)
    if w < 0 or h < 0:
        raise ValueError(f"Resize dimensions must be >= 0, got width={w}, height={h}")
    src_h, src_w = int(source_hw[0]), int(source_hw[1])
    return (h or src_h, w or src_w)


def resize_image(pixels: PixelBuffer, width: int = 0, height: int = 0) -> PixelBuffer:
    """Resize an RGB pixel buffer with bilinear interpolation.

    Notes
    -----
    Width and height are applied independently, so the aspect ratio is not
    preserved. The input buffer is never modified; an unchanged size returns
    a copy.
    """

    import cv2

    src = as_pixel_buffer(pixels)
    h, w = resolve_size(src.shape[:2], width=width, height=height)
    if (h, w) == src.shape[:2]:
        return src.copy()

    logger.debug("Resizing %dx%d -> %dx%d", src.shape[1], src.shape[0], w, h)
    # OpenCV takes dsize as (W,H).
    out = cv2.resize(src, (w, h), interpolation=cv2.INTER_LINEAR)
    return np.ascontiguousarray(out, dtype=np.uint8)
