from pathlib import Path

import pytest

from pyimgtensor.config.schema import TensorGenConfig
from pyimgtensor.errors import ConfigurationError
from pyimgtensor.types import DataLayout, ModelFrontEnd, OutputElementType


def _payload(**overrides):
    payload = {"input_path": "in.png", "output_path": "out.bin", "front_end": "tensorflow"}
    payload.update(overrides)
    return payload


def test_defaults():
    cfg = TensorGenConfig.from_mapping(_payload())
    assert cfg.input_path == Path("in.png")
    assert cfg.front_end is ModelFrontEnd.TENSORFLOW
    assert cfg.element_type is OutputElementType.FLOAT32
    assert cfg.layout is DataLayout.NHWC
    assert (cfg.width, cfg.height) == (0, 0)


def test_explicit_values_are_parsed():
    cfg = TensorGenConfig.from_mapping(
        _payload(element_type="qasymm8", layout="nchw", width="224", height=112)
    )
    assert cfg.element_type is OutputElementType.QASYMM8
    assert cfg.layout is DataLayout.NCHW
    assert (cfg.width, cfg.height) == (224, 112)


def test_none_values_fall_back_to_defaults():
    cfg = TensorGenConfig.from_mapping(_payload(layout=None, width=None))
    assert cfg.layout is DataLayout.NHWC
    assert cfg.width == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": -1},
        {"height": "tall"},
        {"width": True},
        {"layout": "HWC"},
        {"element_type": "double"},
        {"front_end": "onnx"},
        {"input_path": "  "},
        {"colour": "rgb"},
    ],
)
def test_invalid_payloads_raise(overrides):
    with pytest.raises(ConfigurationError):
        TensorGenConfig.from_mapping(_payload(**overrides))


@pytest.mark.parametrize("missing", ["input_path", "output_path", "front_end"])
def test_missing_required_keys_raise(missing):
    payload = _payload()
    del payload[missing]
    with pytest.raises(ConfigurationError) as exc:
        TensorGenConfig.from_mapping(payload)
    assert missing in str(exc.value)


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(ConfigurationError):
        TensorGenConfig.from_mapping(["in.png"])  # type: ignore[arg-type]


def test_to_dict_round_trips():
    cfg = TensorGenConfig.from_mapping(_payload(element_type="int", width=3))
    assert TensorGenConfig.from_mapping(cfg.to_dict()) == cfg


def test_fractional_dimension_is_rejected():
    with pytest.raises(ConfigurationError):
        TensorGenConfig.from_mapping(_payload(width=2.7))


def test_integral_float_dimension_is_accepted():
    cfg = TensorGenConfig.from_mapping(_payload(width=224.0))
    assert cfg.width == 224
