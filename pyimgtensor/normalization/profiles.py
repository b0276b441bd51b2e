"""Per front-end normalization constants.

Every profile is expressed as ``scaled = (raw - offset[c]) * scale[c]`` on raw
8-bit RGB samples. The table is closed over ``ModelFrontEnd x OutputElementType``
and checked for completeness at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from pyimgtensor.errors import ConfigurationError
from pyimgtensor.types import (
    ModelFrontEnd,
    OutputElementType,
    parse_element_type,
    parse_front_end,
)

NUM_CHANNELS = 3


@dataclass(frozen=True)
class NormalizationParameters:
    """Per-channel affine transform applied to raw pixel samples.

    Parameters
    ----------
    scale / offset:
        One entry per output channel (R, G, B).
    swap_channels:
        When true, the RGB source is read as BGR before scaling.
    input_range:
        Inclusive range of raw sample values accepted by the normalizer.
    """

    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    swap_channels: bool = False
    input_range: tuple[int, int] = (0, 255)

    def __post_init__(self) -> None:
        scale = tuple(float(v) for v in self.scale)
        offset = tuple(float(v) for v in self.offset)
        if len(scale) != NUM_CHANNELS or len(offset) != NUM_CHANNELS:
            raise ConfigurationError(
                f"scale/offset must have exactly {NUM_CHANNELS} entries, "
                f"got {len(scale)}/{len(offset)}"
            )
        if any(v == 0.0 for v in scale):
            raise ConfigurationError(f"scale entries must be non-zero, got {scale}")
        low, high = (int(self.input_range[0]), int(self.input_range[1]))
        if low > high:
            raise ConfigurationError(f"Invalid input_range: {(low, high)}")

        # Frozen dataclass: normalize field types in place.
        object.__setattr__(self, "scale", scale)
        object.__setattr__(self, "offset", offset)
        object.__setattr__(self, "swap_channels", bool(self.swap_channels))
        object.__setattr__(self, "input_range", (low, high))

    @classmethod
    def from_mean_std(
        cls,
        mean: tuple[float, float, float],
        std: tuple[float, float, float],
        *,
        divisor: float = 1.0,
        swap_channels: bool = False,
    ) -> "NormalizationParameters":
        """Build parameters from the ``((raw / divisor) - mean) / std`` convention."""

        if float(divisor) == 0.0:
            raise ConfigurationError("divisor must be non-zero")
        d = float(divisor)
        return cls(
            scale=tuple(1.0 / (d * float(s)) for s in std),
            offset=tuple(float(m) * d for m in mean),
            swap_channels=swap_channels,
        )

    def to_dict(self) -> dict:
        return {
            "scale": list(self.scale),
            "offset": list(self.offset),
            "swap_channels": self.swap_channels,
            "input_range": list(self.input_range),
        }


_IDENTITY = NormalizationParameters()
# Maps [0, 255] onto [-1, 1].
_SYMMETRIC_FLOAT = NormalizationParameters.from_mean_std(
    (1.0, 1.0, 1.0), (1.0, 1.0, 1.0), divisor=127.5
)
_CENTERED_INT = NormalizationParameters(offset=(128.0, 128.0, 128.0))

_TF_STYLE: Mapping[OutputElementType, NormalizationParameters] = {
    OutputElementType.FLOAT32: _SYMMETRIC_FLOAT,
    OutputElementType.SIGNED32: _CENTERED_INT,
    OutputElementType.QASYMM8: _IDENTITY,
}

PROFILES: Mapping[tuple[ModelFrontEnd, OutputElementType], NormalizationParameters] = {
    **{(ModelFrontEnd.CAFFE, t): _IDENTITY for t in OutputElementType},
    **{(ModelFrontEnd.TENSORFLOW, t): p for t, p in _TF_STYLE.items()},
    **{(ModelFrontEnd.TFLITE, t): p for t, p in _TF_STYLE.items()},
}


def _check_table_is_total() -> None:
    missing = [
        (fe.value, et.value)
        for fe in ModelFrontEnd
        for et in OutputElementType
        if (fe, et) not in PROFILES
    ]
    if missing:
        raise RuntimeError(f"Normalization profile table is missing entries: {missing}")


_check_table_is_total()


def get_normalization_parameters(
    front_end: str | ModelFrontEnd,
    element_type: str | OutputElementType,
) -> NormalizationParameters:
    """Look up the fixed normalization profile for a front-end/element-type pair."""

    key = (parse_front_end(front_end), parse_element_type(element_type))
    try:
        return PROFILES[key]
    except KeyError as exc:  # pragma: no cover - guarded by _check_table_is_total
        raise ConfigurationError(f"No normalization profile for {key}") from exc
