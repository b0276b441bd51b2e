from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from pyimgtensor.errors import ConfigurationError
from pyimgtensor.types import (
    DataLayout,
    ModelFrontEnd,
    OutputElementType,
    parse_element_type,
    parse_front_end,
    parse_layout,
)


def _require_path(value: Any, *, name: str) -> Path:
    if value is None or not str(value).strip():
        raise ConfigurationError(f"{name} must be a non-empty path")
    return Path(str(value))


def _dimension(value: Any, *, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigurationError(f"{name} must be an int >= 0, got {value!r}")
    try:
        dim = int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ConfigurationError(f"{name} must be an int >= 0, got {value!r}") from exc
    if dim < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {dim}")
    return dim


@dataclass(frozen=True)
class TensorGenConfig:
    """Validated inputs for a single image-to-tensor conversion.

    ``width``/``height`` of 0 keep the source image dimension.
    """

    input_path: Path
    output_path: Path
    front_end: ModelFrontEnd
    element_type: OutputElementType = OutputElementType.FLOAT32
    width: int = 0
    height: int = 0
    layout: DataLayout = DataLayout.NHWC

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_path", _require_path(self.input_path, name="input_path"))
        object.__setattr__(self, "output_path", _require_path(self.output_path, name="output_path"))
        object.__setattr__(self, "front_end", parse_front_end(self.front_end))
        object.__setattr__(self, "element_type", parse_element_type(self.element_type))
        object.__setattr__(self, "width", _dimension(self.width, name="width"))
        object.__setattr__(self, "height", _dimension(self.height, name="height"))
        object.__setattr__(self, "layout", parse_layout(self.layout))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TensorGenConfig":
        if not isinstance(payload, Mapping):
            raise ConfigurationError(
                f"config must be a dict/object, got {type(payload).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in payload if k not in known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys: {unknown}. Allowed keys: {', '.join(sorted(known))}"
            )

        for key in ("input_path", "output_path", "front_end"):
            if payload.get(key, None) is None:
                raise ConfigurationError(f"config is missing required key {key!r}")

        kwargs = {k: v for k, v in payload.items() if v is not None}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_path": str(self.input_path),
            "output_path": str(self.output_path),
            "front_end": self.front_end.value,
            "element_type": self.element_type.value,
            "width": int(self.width),
            "height": int(self.height),
            "layout": self.layout.value,
        }
