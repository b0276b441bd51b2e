"""Raw tensor file I/O.

Tensor files are a flat dump of fixed-width native-endian elements with no
header, so readers must know the shape and element type out of band.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
from numpy.typing import NDArray

from pyimgtensor.errors import TensorWriteError
from pyimgtensor.types import (
    DataLayout,
    OutputElementType,
    parse_element_type,
    parse_layout,
)

logger = logging.getLogger(__name__)

_CHUNK_BYTES = 1 << 20


def tensor_shape(
    height: int,
    width: int,
    *,
    layout: str | DataLayout = DataLayout.NHWC,
    channels: int = 3,
) -> tuple[int, int, int, int]:
    """Return the 4-D shape (batch of 1) of a tensor in ``layout`` order."""

    fmt = parse_layout(layout)
    if fmt is DataLayout.NCHW:
        return (1, int(channels), int(height), int(width))
    return (1, int(height), int(width), int(channels))


def _write_elements(fh: BinaryIO, data: bytes | memoryview) -> int:
    view = memoryview(data)
    written = 0
    while written < len(view):
        n = fh.write(view[written : written + _CHUNK_BYTES])
        if not n:
            raise OSError("short write")
        written += n
    return written


def write_tensor(tensor: NDArray, path: str | Path) -> int:
    """Write ``tensor`` to a new file at ``path`` and return the byte count.

    The file is created exclusively: an existing path is never overwritten.
    If writing fails after the file was created, the partial file is removed.
    """

    out_path = Path(path)
    arr = np.asarray(tensor)
    if arr.dtype.byteorder not in ("=", "|"):
        arr = arr.astype(arr.dtype.newbyteorder("="))
    data = np.ascontiguousarray(arr).reshape(-1).view(np.uint8).data

    try:
        fh = out_path.open("xb")
    except FileExistsError as exc:
        raise TensorWriteError(out_path, "file already exists") from exc
    except OSError as exc:
        raise TensorWriteError(out_path, exc) from exc

    try:
        with fh:
            written = _write_elements(fh, data)
    except BaseException as exc:
        logger.error("Write to %s failed, removing partial output", out_path)
        out_path.unlink(missing_ok=True)
        if isinstance(exc, OSError):
            raise TensorWriteError(out_path, exc) from exc
        raise

    logger.debug("Wrote %d bytes (%d elements) to %s", written, arr.size, out_path)
    return written


def read_tensor(
    path: str | Path,
    element_type: str | OutputElementType,
    *,
    height: int | None = None,
    width: int | None = None,
    layout: str | DataLayout = DataLayout.NHWC,
) -> NDArray:
    """Read a raw tensor file.

    Returns a flat array when ``height``/``width`` are omitted, otherwise a
    4-D array shaped by :func:`tensor_shape`.
    """

    dtype = parse_element_type(element_type).dtype
    raw = Path(path).read_bytes()
    if len(raw) % dtype.itemsize != 0:
        raise ValueError(
            f"File size {len(raw)} of {path} is not a multiple of {dtype} itemsize {dtype.itemsize}"
        )
    flat = np.frombuffer(raw, dtype=dtype)

    if height is None and width is None:
        return flat.copy()
    if height is None or width is None:
        raise ValueError("height and width must be given together")

    shape = tensor_shape(int(height), int(width), layout=layout)
    expected = int(np.prod(shape))
    if flat.size != expected:
        raise ValueError(
            f"Tensor {path} holds {flat.size} elements, expected {expected} for shape {shape}"
        )
    return flat.reshape(shape).copy()
