from __future__ import annotations

from .image import as_pixel_buffer, load_image
from .tensor import read_tensor, tensor_shape, write_tensor

__all__ = [
    "as_pixel_buffer",
    "load_image",
    "read_tensor",
    "tensor_shape",
    "write_tensor",
]
