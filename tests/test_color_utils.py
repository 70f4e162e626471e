import pytest

from ledmesh.color_utils import RGB, complementary_color, hsl_to_rgb


@pytest.mark.parametrize("hue", range(0, 256, 17))
def test_zero_lightness_is_black(hue):
    assert hsl_to_rgb(hue, 255, 0) == RGB(0, 0, 0)


@pytest.mark.parametrize("hue", range(0, 256, 17))
def test_full_lightness_is_white(hue):
    assert hsl_to_rgb(hue, 255, 255) == RGB(255, 255, 255)


@pytest.mark.parametrize("light", [0, 40, 127, 200, 255])
def test_zero_saturation_is_grey(light):
    colour = hsl_to_rgb(90, 0, light)
    assert colour.r == colour.g == colour.b


@pytest.mark.parametrize("hue", range(0, 256, 5))
def test_components_stay_in_byte_range(hue):
    colour = hsl_to_rgb(hue, 255, 127)
    assert all(0 <= c <= 255 for c in colour)


def test_hue_zero_is_red_dominant():
    colour = hsl_to_rgb(0, 255, 127)
    assert colour.r > colour.g
    assert colour.g == colour.b


def test_third_of_wheel_is_green_dominant():
    colour = hsl_to_rgb(85, 255, 127)
    assert colour.g == max(colour)
    assert colour.g > colour.r


def test_two_thirds_of_wheel_is_blue_dominant():
    colour = hsl_to_rgb(170, 255, 127)
    assert colour.b == max(colour)
    assert colour.b > colour.g


@pytest.mark.parametrize("hue", [0, 10, 127, 128, 200, 255])
def test_complementary_is_half_turn(hue):
    assert complementary_color(hue, 255, 127) == hsl_to_rgb((hue + 128) % 256, 255, 127)


def test_complementary_of_red_is_blue_green():
    colour = complementary_color(0, 255, 127)
    assert colour.r < colour.g
    assert colour.r < colour.b


def test_rgb_fields():
    colour = RGB(1, 2, 3)
    assert (colour.r, colour.g, colour.b) == (1, 2, 3)