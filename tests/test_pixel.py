import pytest

from pyimgfx.pixel import Rgb, channel_to_byte, round_half_away_from_zero


def test_from_bytes_scales_to_unit_range():
    px = Rgb.from_bytes(bytes([255, 0, 51]))
    assert px.r == pytest.approx(1.0)
    assert px.g == pytest.approx(0.0)
    assert px.b == pytest.approx(0.2)


def test_from_bytes_rejects_short_input():
    with pytest.raises(ValueError):
        Rgb.from_bytes(b"\x01\x02")


def test_to_bytes_rounds_half_away_from_zero_and_clamps():
    assert Rgb(0.5, 0.0, 1.0).to_bytes() == bytes([128, 0, 255])
    assert Rgb(-0.25, 1.5, 2.0).to_bytes() == bytes([0, 255, 255])


@pytest.mark.parametrize(
    "value,expected",
    [(0.5, 1.0), (1.5, 2.0), (2.5, 3.0), (-0.5, -1.0), (0.49, 0.0), (0.0, 0.0)],
)
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


def test_channel_to_byte_matches_round():
    assert channel_to_byte(10 / 255) == 10
    assert channel_to_byte(1.2) == 255
    assert channel_to_byte(-0.1) == 0


def test_pointwise_transforms():
    px = Rgb(0.2, 0.4, 0.9)
    assert px.as_red() == Rgb(0.2, 0.0, 0.0)
    assert px.invert().as_tuple() == pytest.approx((0.8, 0.6, 0.1))
    assert px.quantize() == Rgb(0.0, 0.0, 1.0)

    mean = px.mean()
    assert mean.r == mean.g == mean.b
    assert mean.r == pytest.approx(0.5)


def test_quantize_maps_half_to_one():
    assert Rgb(0.5, 0.5, 0.5).quantize() == Rgb.white()


def test_named_colors():
    assert Rgb.red().invert() == Rgb.cyan()
    assert Rgb.green().invert() == Rgb.magenta()
    assert Rgb.blue().invert() == Rgb.yellow()
    assert Rgb.black().invert() == Rgb.white()
    assert Rgb.gray().to_bytes() == bytes([128, 128, 128])
