"""Tests for HSV conversion and color band labels."""

import pytest

from dualsense_lightbar.color import Color, color_band_name, hsv_to_rgb, wrap_hue


class TestColor:
    def test_equality_is_channel_wise(self) -> None:
        assert Color(10, 20, 30) == Color(10, 20, 30)
        assert Color(10, 20, 30) != Color(10, 20, 31)

    @pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 300)])
    def test_out_of_range_channel_raises(self, channels: tuple[int, int, int]) -> None:
        with pytest.raises(ValueError, match="must be 0-255"):
            Color(*channels)

    def test_str(self) -> None:
        assert str(Color(255, 0, 7)) == "(255,  0,  7)"


class TestHsvToRgb:
    @pytest.mark.parametrize("hue, expected", [
        (0.0, Color(255, 0, 0)),
        (60.0, Color(255, 255, 0)),
        (120.0, Color(0, 255, 0)),
        (180.0, Color(0, 255, 255)),
        (240.0, Color(0, 0, 255)),
        (300.0, Color(255, 0, 255)),
    ])
    def test_primary_and_secondary_hues(self, hue: float, expected: Color) -> None:
        assert hsv_to_rgb(hue, 1.0, 1.0) == expected

    def test_truncates_instead_of_rounding(self) -> None:
        # x = 0.5 -> 127.5 -> 127
        assert hsv_to_rgb(30.0, 1.0, 1.0) == Color(255, 127, 0)

    def test_last_sector(self) -> None:
        # x = 1/60 -> 4.25 -> 4
        assert hsv_to_rgb(359.0, 1.0, 1.0) == Color(255, 0, 4)

    @pytest.mark.parametrize("hue, expected", [
        (24.0, Color(255, 101, 0)),
        (72.0, Color(203, 255, 0)),
        (108.0, Color(51, 255, 0)),
        (252.0, Color(50, 0, 255)),
    ])
    def test_single_precision_truncation(self, hue: float, expected: Color) -> None:
        # 0.4, 1.2, 1.8 and 4.2 are inexact in binary32; double math lands on the other side
        assert hsv_to_rgb(hue, 1.0, 1.0) == expected

    def test_rainbow_walk_matches_single_precision(self) -> None:
        colors = {hue: hsv_to_rgb(hue, 1.0, 1.0) for hue in (i * 1.5 for i in range(240))}
        assert colors[24.0] == Color(255, 101, 0)
        assert colors[108.0] == Color(51, 255, 0)
        assert all(max(c.r, c.g, c.b) == 255 for c in colors.values())

    def test_zero_saturation_is_grey(self) -> None:
        assert hsv_to_rgb(200.0, 0.0, 1.0) == Color(255, 255, 255)

    def test_zero_value_is_black(self) -> None:
        assert hsv_to_rgb(90.0, 1.0, 0.0) == Color(0, 0, 0)


class TestWrapHue:
    def test_within_range_unchanged(self) -> None:
        assert wrap_hue(359.5) == 359.5

    def test_exactly_360_wraps_to_zero(self) -> None:
        assert wrap_hue(360.0) == 0.0

    def test_overflow_wraps(self) -> None:
        assert wrap_hue(361.0) == pytest.approx(1.0)

    def test_hue_held_in_single_precision(self) -> None:
        assert wrap_hue(0.1) == 0.10000000149011612


class TestColorBandName:
    @pytest.mark.parametrize("hue, label", [
        (0.0, "Red"),
        (30.0, "Red"),
        (30.9, "Red"),
        (31.0, "Yellow"),
        (90.0, "Yellow"),
        (91.0, "Green"),
        (150.0, "Green"),
        (151.0, "Cyan"),
        (210.0, "Cyan"),
        (211.0, "Blue"),
        (270.0, "Blue"),
        (271.0, "Magenta"),
        (330.0, "Magenta"),
        (331.0, "Red"),
        (359.9, "Red"),
    ])
    def test_band_boundaries(self, hue: float, label: str) -> None:
        assert color_band_name(hue)[0] == label

    def test_tag_is_ansi_sequence(self) -> None:
        assert color_band_name(120.0)[1] == "\x1b[32m"
        assert color_band_name(345.0)[1] == color_band_name(0.0)[1]
