from __future__ import annotations

from enum import Enum

import numpy as np

from pyimgtensor.errors import ConfigurationError


class ModelFrontEnd(str, Enum):
    """Training/export ecosystem whose preprocessing convention is targeted."""

    CAFFE = "caffe"
    TENSORFLOW = "tensorflow"
    TFLITE = "tflite"


class OutputElementType(str, Enum):
    """Element type of the serialized tensor."""

    FLOAT32 = "float"
    SIGNED32 = "int"
    QASYMM8 = "qasymm8"

    @property
    def dtype(self) -> np.dtype:
        return _DTYPES[self]


class DataLayout(str, Enum):
    """Axis order of the flattened tensor (batch is always 1)."""

    NHWC = "NHWC"
    NCHW = "NCHW"


_DTYPES: dict[OutputElementType, np.dtype] = {
    OutputElementType.FLOAT32: np.dtype(np.float32),
    OutputElementType.SIGNED32: np.dtype(np.int32),
    OutputElementType.QASYMM8: np.dtype(np.uint8),
}


def _choices(enum_cls: type[Enum]) -> str:
    return ", ".join(str(m.value) for m in enum_cls)


def parse_front_end(raw: str | ModelFrontEnd) -> ModelFrontEnd:
    if isinstance(raw, ModelFrontEnd):
        return raw
    try:
        return ModelFrontEnd(str(raw).strip().lower())
    except ValueError as exc:
        raise ConfigurationError(
            f"Unsupported model format: {raw!r}. Choose from: {_choices(ModelFrontEnd)}."
        ) from exc


def parse_element_type(raw: str | OutputElementType) -> OutputElementType:
    if isinstance(raw, OutputElementType):
        return raw
    try:
        return OutputElementType(str(raw).strip().lower())
    except ValueError as exc:
        raise ConfigurationError(
            f"Unsupported output type: {raw!r}. Choose from: {_choices(OutputElementType)}."
        ) from exc


def parse_layout(raw: str | DataLayout) -> DataLayout:
    if isinstance(raw, DataLayout):
        return raw
    try:
        return DataLayout(str(raw).strip().upper())
    except ValueError as exc:
        raise ConfigurationError(
            f"Unsupported data layout: {raw!r}. Choose from: {_choices(DataLayout)}."
        ) from exc
