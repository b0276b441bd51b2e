import itertools

import numpy as np
import pytest

from pyimgtensor.errors import ConfigurationError
from pyimgtensor.normalization import PROFILES, NormalizationParameters, get_normalization_parameters
from pyimgtensor.types import ModelFrontEnd, OutputElementType


@pytest.mark.parametrize(
    "front_end,element_type",
    list(itertools.product(list(ModelFrontEnd), list(OutputElementType))),
)
def test_every_combination_resolves_with_three_channels(front_end, element_type):
    params = get_normalization_parameters(front_end, element_type)
    assert isinstance(params, NormalizationParameters)
    assert len(params.scale) == 3
    assert len(params.offset) == 3
    assert params.input_range == (0, 255)


def test_table_covers_declared_domain_exactly():
    assert len(PROFILES) == len(ModelFrontEnd) * len(OutputElementType)


def test_lookup_accepts_strings():
    by_str = get_normalization_parameters("tensorflow", "float")
    by_enum = get_normalization_parameters(ModelFrontEnd.TENSORFLOW, OutputElementType.FLOAT32)
    assert by_str == by_enum


def test_tensorflow_float_maps_to_symmetric_range():
    params = get_normalization_parameters("tensorflow", "float")
    lo = (0.0 - params.offset[0]) * params.scale[0]
    hi = (255.0 - params.offset[0]) * params.scale[0]
    assert np.isclose(lo, -1.0)
    assert np.isclose(hi, 1.0)


def test_tflite_matches_tensorflow():
    for element_type in OutputElementType:
        assert get_normalization_parameters("tflite", element_type) == get_normalization_parameters(
            "tensorflow", element_type
        )


def test_tensorflow_int_is_centered():
    params = get_normalization_parameters("tensorflow", "int")
    assert params.offset == (128.0, 128.0, 128.0)
    assert params.scale == (1.0, 1.0, 1.0)


@pytest.mark.parametrize("element_type", list(OutputElementType))
def test_caffe_is_identity(element_type):
    params = get_normalization_parameters("caffe", element_type)
    assert params.offset == (0.0, 0.0, 0.0)
    assert params.scale == (1.0, 1.0, 1.0)
    assert params.swap_channels is False


def test_lookup_rejects_unknown_front_end():
    with pytest.raises(ConfigurationError):
        get_normalization_parameters("pytorch", "float")


def test_parameters_require_one_entry_per_channel():
    with pytest.raises(ConfigurationError):
        NormalizationParameters(scale=(1.0, 1.0))
    with pytest.raises(ConfigurationError):
        NormalizationParameters(offset=(0.0, 0.0, 0.0, 0.0))


def test_parameters_reject_zero_scale_and_inverted_range():
    with pytest.raises(ConfigurationError):
        NormalizationParameters(scale=(1.0, 0.0, 1.0))
    with pytest.raises(ConfigurationError):
        NormalizationParameters(input_range=(255, 0))


def test_from_mean_std():
    params = NormalizationParameters.from_mean_std((0.5, 0.5, 0.5), (0.25, 0.25, 0.25), divisor=255.0)
    assert np.isclose(params.offset[0], 127.5)
    assert np.isclose(params.scale[0], 1.0 / (255.0 * 0.25))


def test_parameters_are_immutable():
    params = get_normalization_parameters("caffe", "float")
    with pytest.raises(AttributeError):
        params.scale = (2.0, 2.0, 2.0)  # type: ignore[misc]
