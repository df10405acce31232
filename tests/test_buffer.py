import numpy as np
import pytest
from PIL import Image

from pyimgfx.buffer import PixelBuffer
from pyimgfx.pixel import Rgb


def _random_buffer(width=5, height=4, seed=0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    return PixelBuffer(width, height, rng.random((height, width, 3), dtype=np.float32))


def test_new_buffer_is_black_and_sized():
    buf = PixelBuffer(3, 2)
    assert buf.dimensions == (3, 2)
    assert len(buf) == 6
    assert all(p == Rgb.black() for p in buf)


def test_zero_sized_buffer():
    buf = PixelBuffer(0, 7)
    assert len(buf) == 0
    assert list(buf) == []


@pytest.mark.parametrize("width,height", [(-1, 2), (2, -1), (2**32, 1)])
def test_rejects_dimensions_outside_u32(width, height):
    with pytest.raises(ValueError):
        PixelBuffer(width, height)


def test_rejects_data_of_wrong_length():
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, np.zeros((3, 3), dtype=np.float32))


def test_get_and_set_pixel_use_row_major_offset():
    pixels = [Rgb(i / 10, 0.0, 0.0) for i in range(6)]
    buf = PixelBuffer.from_pixels(3, 2, pixels)

    assert buf.get_pixel(0, 0).r == pytest.approx(0.0)
    assert buf.get_pixel(2, 0).r == pytest.approx(0.2)
    assert buf.get_pixel(0, 1).r == pytest.approx(0.3)
    assert buf.get_pixel(2, 1).r == pytest.approx(0.5)

    buf.set_pixel(1, 1, Rgb.blue())
    assert buf.get_pixel(1, 1) == Rgb.blue()
    assert list(buf)[4] == Rgb.blue()


@pytest.mark.parametrize("x,y", [(3, 0), (0, 2), (-1, 0), (0, -1)])
def test_out_of_range_access_raises_index_error(x, y):
    buf = PixelBuffer(3, 2)
    with pytest.raises(IndexError):
        buf.get_pixel(x, y)
    with pytest.raises(IndexError):
        buf.set_pixel(x, y, Rgb.white())


def test_from_array_uint8_and_float():
    u8 = np.zeros((2, 3, 3), dtype=np.uint8)
    u8[1, 2] = [255, 0, 51]
    buf = PixelBuffer.from_array(u8)
    assert buf.dimensions == (3, 2)
    assert buf.get_pixel(2, 1).as_tuple() == pytest.approx((1.0, 0.0, 0.2))

    f = np.full((1, 2, 3), 0.25, dtype=np.float64)
    assert PixelBuffer.from_array(f).get_pixel(1, 0) == Rgb(0.25, 0.25, 0.25)


@pytest.mark.parametrize(
    "array",
    [np.zeros((2, 2), dtype=np.uint8), np.zeros((2, 2, 4), dtype=np.uint8), np.zeros((2, 2, 3), dtype=np.int32)],
)
def test_from_array_rejects_bad_inputs(array):
    with pytest.raises(ValueError):
        PixelBuffer.from_array(array)


def test_pil_round_trip():
    rgb = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3) * 10
    buf = PixelBuffer.from_pil(Image.fromarray(rgb))
    out = buf.to_pil()
    assert out.mode == "RGB"
    assert out.size == (3, 2)
    np.testing.assert_array_equal(np.asarray(out), rgb)


def test_to_u8_clamps_out_of_range_samples():
    buf = PixelBuffer.from_pixels(2, 1, [Rgb(-0.5, 0.5, 1.5), Rgb(2.0, -3.0, 0.0)])
    assert buf.to_u8().tolist() == [[[0, 128, 255], [255, 0, 0]]]


def test_as_array_returns_a_copy():
    buf = PixelBuffer.filled(2, 2, Rgb.red())
    arr = buf.as_array()
    arr[...] = 0.0
    assert buf.get_pixel(0, 0) == Rgb.red()


def test_transforms_are_pure_and_keep_dimensions():
    buf = _random_buffer()
    before = buf.as_array()
    for out in (buf.redden(), buf.mean(), buf.quantize(), buf.invert(), buf.copy()):
        assert out is not buf
        assert out.dimensions == buf.dimensions
        assert len(out) == len(buf)
    np.testing.assert_array_equal(buf.as_array(), before)


def test_invert_is_an_involution():
    buf = _random_buffer(seed=1)
    np.testing.assert_allclose(buf.invert().invert().as_array(), buf.as_array(), atol=1e-6)


def test_redden_zeroes_green_and_blue():
    buf = _random_buffer(seed=2)
    out = buf.redden().as_array()
    assert np.all(out[..., 1] == 0.0)
    assert np.all(out[..., 2] == 0.0)
    np.testing.assert_array_equal(out[..., 0], buf.as_array()[..., 0])


def test_mean_produces_neutral_gray():
    buf = _random_buffer(seed=3)
    out = buf.mean().as_array()
    expected = buf.as_array().astype(np.float64).mean(axis=2)
    for c in range(3):
        np.testing.assert_allclose(out[..., c], expected, atol=1e-6)
    assert np.all(out[..., 0] == out[..., 1])
    assert np.all(out[..., 1] == out[..., 2])


def test_quantize_collapses_to_black_or_white():
    buf = PixelBuffer.from_pixels(2, 1, [Rgb(0.49, 0.5, 0.51), Rgb(0.0, 1.0, 0.2)])
    out = buf.quantize()
    assert out.get_pixel(0, 0) == Rgb(0.0, 1.0, 1.0)
    assert out.get_pixel(1, 0) == Rgb(0.0, 1.0, 0.0)


def test_vectorized_transforms_match_pixel_methods():
    buf = _random_buffer(width=3, height=3, seed=4)
    pairs = [
        (buf.redden(), Rgb.as_red),
        (buf.mean(), Rgb.mean),
        (buf.quantize(), Rgb.quantize),
        (buf.invert(), Rgb.invert),
    ]
    for vectorized, method in pairs:
        np.testing.assert_allclose(
            vectorized.as_array(), buf.map_pixels(method).as_array(), atol=1e-6
        )


def test_transforms_on_empty_buffer():
    buf = PixelBuffer(0, 0)
    assert len(buf.invert()) == 0
    assert len(buf.mean()) == 0
