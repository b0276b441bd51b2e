"""Single-image tensor generation pipeline.

Stages run strictly in order::

    CONFIGURED -> LOADED -> RESIZED -> NORMALIZED -> SERIALIZED -> DONE

Any exception moves the run to FAILED and is re-raised unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pyimgtensor.config.schema import TensorGenConfig
from pyimgtensor.errors import TensorWriteError
from pyimgtensor.io.image import PixelBuffer, as_pixel_buffer, load_image
from pyimgtensor.io.tensor import tensor_shape, write_tensor
from pyimgtensor.normalization.profiles import (
    NormalizationParameters,
    get_normalization_parameters,
)
from pyimgtensor.preprocessing.normalize import normalize_image
from pyimgtensor.preprocessing.resize import resize_image
from pyimgtensor.types import DataLayout, OutputElementType

logger = logging.getLogger(__name__)

ImageLoader = Callable[[Path], Any]
StageCallback = Callable[["PipelineStage"], None]


class PipelineStage(str, Enum):
    CONFIGURED = "configured"
    LOADED = "loaded"
    RESIZED = "resized"
    NORMALIZED = "normalized"
    SERIALIZED = "serialized"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TensorGenResult:
    """Summary of a completed conversion."""

    output_path: Path
    shape: tuple[int, int, int, int]
    element_type: OutputElementType
    layout: DataLayout
    num_bytes: int
    params: NormalizationParameters

    @property
    def num_elements(self) -> int:
        n = 1
        for dim in self.shape:
            n *= int(dim)
        return n

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_path": str(self.output_path),
            "shape": list(self.shape),
            "layout": self.layout.value,
            "element_type": self.element_type.value,
            "dtype": str(self.element_type.dtype),
            "num_elements": self.num_elements,
            "num_bytes": int(self.num_bytes),
            "normalization": self.params.to_dict(),
        }


def generate_tensor(
    config: TensorGenConfig,
    *,
    loader: ImageLoader = load_image,
    on_stage: StageCallback | None = None,
) -> TensorGenResult:
    """Convert ``config.input_path`` into a raw tensor at ``config.output_path``.

    Parameters
    ----------
    config:
        Validated conversion settings.
    loader:
        Callable decoding a path into an RGB ``uint8`` (H,W,3) array. Defaults
        to :func:`pyimgtensor.io.image.load_image`.
    on_stage:
        Optional callback invoked with each stage as it is reached, including
        ``FAILED``.

    Raises
    ------
    TensorWriteError
        If the output already exists (checked before loading) or cannot be
        written.
    ImageLoadError
        If the image cannot be decoded.
    """

    stage = PipelineStage.CONFIGURED

    def _advance(nxt: PipelineStage) -> None:
        nonlocal stage
        stage = nxt
        if on_stage is not None:
            on_stage(nxt)

    _advance(PipelineStage.CONFIGURED)
    logger.info(
        "Generating %s/%s tensor (%s) from %s",
        config.front_end.value,
        config.element_type.value,
        config.layout.value,
        config.input_path,
    )

    try:
        if config.output_path.exists():
            raise TensorWriteError(config.output_path, "file already exists")
        params = get_normalization_parameters(config.front_end, config.element_type)

        pixels: PixelBuffer = as_pixel_buffer(loader(config.input_path), source=str(config.input_path))
        _advance(PipelineStage.LOADED)
        logger.debug("Loaded %s with shape %s", config.input_path, pixels.shape)

        pixels = resize_image(pixels, width=config.width, height=config.height)
        height, width = int(pixels.shape[0]), int(pixels.shape[1])
        _advance(PipelineStage.RESIZED)

        tensor = normalize_image(
            pixels,
            params,
            layout=config.layout,
            element_type=config.element_type,
        )
        del pixels
        _advance(PipelineStage.NORMALIZED)

        num_bytes = write_tensor(tensor, config.output_path)
        del tensor
        _advance(PipelineStage.SERIALIZED)
    except Exception:
        logger.error("Tensor generation failed after stage %r", stage.value)
        _advance(PipelineStage.FAILED)
        raise

    result = TensorGenResult(
        output_path=config.output_path,
        shape=tensor_shape(height, width, layout=config.layout),
        element_type=config.element_type,
        layout=config.layout,
        num_bytes=num_bytes,
        params=params,
    )
    _advance(PipelineStage.DONE)
    logger.info("Wrote %d bytes to %s (shape=%s)", num_bytes, config.output_path, result.shape)
    return result
