from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from pyimgtensor.errors import ImageLoadError
from pyimgtensor.io.image import as_pixel_buffer, load_image


def test_load_image_returns_rgb_u8_hwc(tmp_path) -> None:
    rgb = np.zeros((2, 3, 3), dtype=np.uint8)
    rgb[0, 0] = np.asarray([10, 20, 30], dtype=np.uint8)

    path = tmp_path / "x.png"
    Image.fromarray(rgb).save(path)

    loaded = load_image(path)
    assert loaded.dtype == np.uint8
    assert loaded.shape == (2, 3, 3)
    assert loaded[0, 0].tolist() == [10, 20, 30]
    assert loaded.flags["C_CONTIGUOUS"]


def test_load_image_converts_grayscale_to_rgb(tmp_path) -> None:
    gray = np.full((4, 5), 77, dtype=np.uint8)
    path = tmp_path / "gray.png"
    Image.fromarray(gray).save(path)

    loaded = load_image(path)
    assert loaded.shape == (4, 5, 3)
    assert np.all(loaded == 77)


def test_load_image_missing_path_raises(tmp_path) -> None:
    missing = tmp_path / "missing.png"
    with pytest.raises(ImageLoadError) as exc:
        load_image(missing)
    assert str(missing) in str(exc.value)
    assert exc.value.path == str(missing)
    assert exc.value.__cause__ is not None


def test_load_image_undecodable_file_raises(tmp_path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"this is not an image")
    with pytest.raises(ImageLoadError):
        load_image(path)


@pytest.mark.parametrize("shape", [(3, 3), (3, 3, 1), (3, 3, 4), (0, 3, 3)])
def test_as_pixel_buffer_rejects_bad_shapes(shape):
    with pytest.raises(ValueError):
        as_pixel_buffer(np.zeros(shape, dtype=np.uint8))


def test_as_pixel_buffer_rejects_non_uint8():
    with pytest.raises(ValueError):
        as_pixel_buffer(np.zeros((2, 2, 3), dtype=np.float32))
    with pytest.raises(TypeError):
        as_pixel_buffer([[0, 0, 0]])


def test_load_image_reduces_16bit_grayscale_to_high_byte(tmp_path) -> None:
    wide = np.asarray([[0, 256], [32768, 65535]], dtype=np.uint16)
    path = tmp_path / "wide.png"
    Image.fromarray(wide).save(path)

    loaded = load_image(path)
    assert loaded.dtype == np.uint8
    assert loaded.shape == (2, 2, 3)
    assert loaded[..., 0].tolist() == [[0, 1], [128, 255]]
    assert np.array_equal(loaded[..., 0], loaded[..., 2])


def test_load_image_oversized_image_raises_load_error(tmp_path, monkeypatch) -> None:
    path = tmp_path / "big.png"
    Image.fromarray(np.zeros((64, 64, 3), dtype=np.uint8)).save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(ImageLoadError) as exc:
        load_image(path)
    assert exc.value.path == str(path)
    assert isinstance(exc.value.__cause__, Image.DecompressionBombError)
