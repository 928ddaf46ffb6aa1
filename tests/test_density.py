"""Tests for brightness computation and ramp mapping."""

from __future__ import annotations

import math

import numpy as np
import pytest

from asciigrid.constants import CharacterSet
from asciigrid.density import density_char, density_index, grayscale, luminosity


def test_luminosity_extremes():
    assert luminosity(0, 0, 0) == 0
    assert luminosity(255, 255, 255) == pytest.approx(255)


def test_luminosity_weights_green_most():
    assert luminosity(0, 255, 0) > luminosity(255, 0, 0) > luminosity(0, 0, 255)


def test_grayscale_matches_scalar():
    rgb = np.array([[[154, 85, 54], [10, 200, 30]]], dtype=np.uint8)
    gray = grayscale(rgb)
    assert gray.shape == (1, 2)
    assert gray[0, 0] == pytest.approx(luminosity(154, 85, 54))


@pytest.mark.parametrize("ramp", [CharacterSet.SHORT, CharacterSet.FLAT, CharacterSet.LONG, "#", "#k. "])
def test_mapping_is_monotonic_and_covers_ramp(ramp):
    n = len(ramp)
    indices = [density_index(b, n) for b in range(256)]

    assert indices[0] == 0
    assert indices[-1] == n - 1
    assert all(a <= b for a, b in zip(indices, indices[1:]))
    # No gaps: every step moves by at most one character
    assert all(b - a <= 1 for a, b in zip(indices, indices[1:]))


@pytest.mark.parametrize("ramp", [CharacterSet.FLAT, "#k. "])
def test_invert_mirrors_index(ramp):
    n = len(ramp)
    for b in range(256):
        assert density_index(b, n, invert=True) == n - 1 - density_index(b, n)


def test_index_formula():
    # floor(128 / 256 * 4) == 2
    assert density_char(128, "#k. ") == "."
    assert density_char(0, "#k. ") == "#"
    assert density_char(255, "#k. ") == " "


def test_out_of_range_is_clamped():
    assert density_index(-20, 4) == 0
    assert density_index(300, 4) == 3


def test_non_finite_falls_back_to_lightest():
    assert density_index(math.nan, 4) == 3
    assert density_index(math.nan, 4, invert=True) == 3


def test_empty_ramp_rejected():
    with pytest.raises(ValueError):
        density_index(10, 0)
