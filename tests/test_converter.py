"""End-to-end tests for the conversion pipeline."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image, ImageDraw

from asciigrid.config import ConversionConfig
from asciigrid.constants import CharacterSet, ColorMode, OutputFormat
from asciigrid.converter import AsciiArtGenerator, convert, image_to_ascii
from asciigrid.errors import DegenerateImage
from asciigrid.image import SourceImage


# ---------------------------------------------------------------------------
# Synthetic image helpers
# ---------------------------------------------------------------------------


def _uniform(value: int = 128, size: int = 100) -> SourceImage:
    return SourceImage.from_array(np.full((size, size, 3), value, dtype=np.uint8))


def _horizontal_gradient(width: int = 256, height: int = 64) -> SourceImage:
    row = np.arange(width, dtype=np.uint8)
    gray = np.tile(row, (height, 1))
    return SourceImage.from_array(gray)


def _square_image(size: int = 120) -> Image.Image:
    image = Image.new("RGB", (size, size), color="black")
    draw = ImageDraw.Draw(image)
    draw.rectangle([size // 4, size // 4, 3 * size // 4, 3 * size // 4], fill="white")
    return image


def _plain(**kwargs) -> ConversionConfig:
    kwargs.setdefault("output_format", OutputFormat.PLAIN)
    kwargs.setdefault("color_mode", ColorMode.NONE)
    return ConversionConfig(**kwargs)


# ---------------------------------------------------------------------------
# Density mode
# ---------------------------------------------------------------------------


def test_uniform_gray_maps_to_single_character():
    result = AsciiArtGenerator().generate(_uniform(128))
    ramp = CharacterSet.FLAT
    expected = ramp[int(128 / 256 * len(ramp))]

    assert result.width == 80
    assert result.height == round(80 * 0.43)
    assert {cell.char for cell in result.grid.cells} == {expected}
    assert {cell.color for cell in result.grid.cells} == {(128, 128, 128)}


def test_single_pixel_image():
    image = SourceImage.from_array(np.array([[[10, 20, 30]]], dtype=np.uint8))

    result = AsciiArtGenerator(_plain()).generate(image)
    assert (result.width, result.height) == (1, 1)
    assert result.grid.cell(0, 0).color == (10, 20, 30)

    bordered = AsciiArtGenerator(_plain(border=True)).generate(image)
    assert (bordered.width, bordered.height) == (3, 3)


def test_size_below_range_matches_minimum():
    image = _horizontal_gradient()
    assert convert(image, _plain(size=5)) == convert(image, _plain(size=20))


def test_size_above_range_matches_maximum():
    image = SourceImage.from_array(np.random.RandomState(3).randint(0, 256, (300, 400, 3), dtype=np.uint8))
    assert convert(image, _plain(size=500)) == convert(image, _plain(size=230))


def test_border_preserves_requested_size():
    image = _horizontal_gradient()
    plain = AsciiArtGenerator(_plain(size=40)).generate(image)
    bordered = AsciiArtGenerator(_plain(size=40, border=True)).generate(image)

    assert plain.width == 40
    assert bordered.width == 40
    assert bordered.lines[0].startswith("╔") and bordered.lines[-1].endswith("╝")


def test_gradient_darkest_left():
    result = AsciiArtGenerator(_plain(size=32, characters="#k. ")).generate(_horizontal_gradient())
    for line in result.lines:
        assert line[0] == "#"
        assert line[-1] == " "


def test_invert_swaps_ends():
    result = AsciiArtGenerator(_plain(size=32, characters="#k. ", invert=True)).generate(_horizontal_gradient())
    for line in result.lines:
        assert line[0] == " "
        assert line[-1] == "#"


def test_flip_x_mirrors_lines():
    image = _horizontal_gradient()
    normal = AsciiArtGenerator(_plain(size=32)).generate(image)
    flipped = AsciiArtGenerator(_plain(size=32, flip_x=True)).generate(image)
    assert flipped.lines == [line[::-1] for line in normal.lines]


def test_flip_y_reverses_lines():
    image = SourceImage.from_array(np.tile(np.arange(64, dtype=np.uint8)[:, None] * 4, (1, 64)))
    normal = AsciiArtGenerator(_plain(size=32, ratio=1.0)).generate(image)
    flipped = AsciiArtGenerator(_plain(size=32, ratio=1.0, flip_y=True)).generate(image)
    assert flipped.lines == normal.lines[::-1]


def test_thread_count_does_not_change_output():
    image = SourceImage.from_array(np.random.RandomState(11).randint(0, 256, (90, 120, 3), dtype=np.uint8))
    single = convert(image, _plain(size=60, threads=1))
    pooled = convert(image, _plain(size=60, threads=8))
    assert single == pooled


def test_every_row_has_same_width():
    image = SourceImage.from_array(np.random.RandomState(5).randint(0, 256, (77, 131, 3), dtype=np.uint8))
    result = AsciiArtGenerator(_plain(size=47, border=True)).generate(image)
    assert {len(line) for line in result.lines} == {result.width}


# ---------------------------------------------------------------------------
# Outline mode
# ---------------------------------------------------------------------------


def test_outline_uniform_image_is_blank():
    result = AsciiArtGenerator(_plain(size=20, outline=True)).generate(_uniform(200, 40))
    assert set("".join(result.lines)) == {" "}


@pytest.mark.parametrize("hysteresis", [False, True])
def test_outline_square_draws_edges(hysteresis):
    result = AsciiArtGenerator(_plain(size=30, outline=True, hysteresis=hysteresis)).generate(_square_image())
    chars = set("".join(result.lines))

    assert chars <= set(CharacterSet.OUTLINE)
    assert "|" in chars
    assert "_" in chars


def test_outline_colors_are_gray():
    config = ConversionConfig(size=30, outline=True, output_format=OutputFormat.PLAIN)
    result = AsciiArtGenerator(config).generate(_square_image())
    for cell in result.grid.cells:
        r, g, b = cell.color
        assert r == g == b


# ---------------------------------------------------------------------------
# Output formats and inputs
# ---------------------------------------------------------------------------


def test_ansi_output_has_escape_codes():
    text = convert(_uniform(), ConversionConfig(size=20, color_mode=ColorMode.TRUECOLOR))
    assert "\x1b[38;2;128;128;128m" in text


def test_html_output():
    config = ConversionConfig(size=20, output_format=OutputFormat.HTML,
                              color_mode=ColorMode.TRUECOLOR, background=True)
    text = convert(_square_image(), config)
    assert text.startswith("<!DOCTYPE html>")
    assert "background-color: #FFFFFF" in text
    assert "\x1b" not in text


def test_image_to_ascii_accepts_pil_image():
    result = image_to_ascii(_square_image(), size=24, output_format=OutputFormat.PLAIN,
                            color_mode=ColorMode.NONE)
    assert result.original_size == (120, 120)
    assert result.width == 24
    assert result.text == "\n".join(result.lines)


def test_grayscale_pil_image():
    image = Image.new("L", (50, 50), color=0)
    result = image_to_ascii(image, size=20, characters="#k. ", output_format=OutputFormat.PLAIN,
                            color_mode=ColorMode.NONE)
    assert set(result.text.replace("\n", "")) == {"#"}


def test_degenerate_image_rejected():
    with pytest.raises(DegenerateImage):
        convert(np.zeros((0, 10, 3), dtype=np.uint8))
