"""Pixel normalization and layout conversion.

Samples are transformed as ``(raw - offset[c]) * scale[c]`` in float32 and
then finalized for the requested element type:

- ``float``: kept as computed
- ``int``: rounded to nearest (ties to even), not clamped
- ``qasymm8``: rounded to nearest and clamped to [0, 255]
"""

from __future__ import annotations

from typing import Callable, Mapping

import numpy as np
from numpy.typing import NDArray

from pyimgtensor.io.image import PixelBuffer, as_pixel_buffer
from pyimgtensor.normalization.profiles import NormalizationParameters
from pyimgtensor.types import (
    DataLayout,
    OutputElementType,
    parse_element_type,
    parse_layout,
)

Finalizer = Callable[[NDArray[np.float32]], NDArray]


def _as_float(values: NDArray[np.float32]) -> NDArray[np.float32]:
    return values.astype(np.float32, copy=False)


def _as_int32(values: NDArray[np.float32]) -> NDArray[np.int32]:
    return np.rint(values).astype(np.int32)


def _as_qasymm8(values: NDArray[np.float32]) -> NDArray[np.uint8]:
    return np.clip(np.rint(values), 0.0, 255.0).astype(np.uint8)


FINALIZERS: Mapping[OutputElementType, Finalizer] = {
    OutputElementType.FLOAT32: _as_float,
    OutputElementType.SIGNED32: _as_int32,
    OutputElementType.QASYMM8: _as_qasymm8,
}


def to_layout(hwc: NDArray, layout: str | DataLayout) -> NDArray:
    """Reorder an (H,W,C) array into ``layout`` axis order (without batch)."""

    fmt = parse_layout(layout)
    arr = np.asarray(hwc)
    if arr.ndim != 3:
        raise ValueError(f"Expected an (H,W,C) array, got shape {arr.shape}")
    if fmt is DataLayout.NCHW:
        return np.ascontiguousarray(np.transpose(arr, (2, 0, 1)))
    return np.ascontiguousarray(arr)


def apply_normalization(pixels: PixelBuffer, params: NormalizationParameters) -> NDArray[np.float32]:
    """Return the float32 (H,W,3) array of ``(raw - offset) * scale`` values."""

    src = as_pixel_buffer(pixels)
    low, high = params.input_range
    if src.size and (int(src.min()) < low or int(src.max()) > high):
        raise ValueError(
            f"Pixel values [{int(src.min())}, {int(src.max())}] outside input range {params.input_range}"
        )

    if params.swap_channels:
        src = src[..., ::-1]

    offset = np.asarray(params.offset, dtype=np.float32)
    scale = np.asarray(params.scale, dtype=np.float32)
    return (src.astype(np.float32) - offset) * scale


def normalize_image(
    pixels: PixelBuffer,
    params: NormalizationParameters,
    *,
    layout: str | DataLayout = DataLayout.NHWC,
    element_type: str | OutputElementType = OutputElementType.FLOAT32,
) -> NDArray:
    """Normalize a pixel buffer into a flat tensor buffer.

    The result is 1-D with ``H*W*3`` elements of ``element_type.dtype``,
    ordered by ``layout``. Element values do not depend on the layout.
    """

    finalize = FINALIZERS[parse_element_type(element_type)]
    values = finalize(apply_normalization(pixels, params))
    return to_layout(values, layout).reshape(-1)
