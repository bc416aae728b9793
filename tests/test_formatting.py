import math

import numpy as np
import pytest

from oifits_model import beautify
from oifits_model.formatting import to_text


@pytest.mark.parametrize("value, expected", [
    (0.0, "0"),
    (-0.0, "0"),
    (float("nan"), "NaN"),
    (float("inf"), "Inf"),
    (float("-inf"), "-Inf"),
    (1234.5678, "1234.568"),
    (1.5e-3, "1.5E-3"),
    (-2.5, "-2.5"),
    (9999600.0, "9999600"),
    (1e7, "1E7"),
    (0.01, "1E-2"),
    (2.0e-6, "2E-6"),
    (9.9996e-5, "1E-4"),
    (np.float32(2.1e-6), "2.1E-6"),
])
def test_beautify(value, expected):
    assert beautify(value) == expected


@pytest.mark.parametrize("value", [0.0123456, 0.0999, 3.14159265, 42.0, 123456.789, -987.654321])
def test_beautify_fixed_notation_keeps_three_decimals(value):
    assert abs(float(beautify(value)) - value) <= 5e-4


@pytest.mark.parametrize("value", [1.23456, 3.14159265, 42.0, 123456.789, -987.654321, 9876543.21])
def test_beautify_keeps_four_significant_digits_above_one(value):
    assert math.isclose(float(beautify(value)), value, rel_tol=5e-4)


@pytest.mark.parametrize("value", [1.23456e-9, -4.5678e12, 0.00987654])
def test_beautify_scientific_keeps_four_significant_digits(value):
    assert math.isclose(float(beautify(value)), value, rel_tol=5e-4)


def test_to_text():
    assert to_text(True) == "true"
    assert to_text(np.bool_(False), format=True) == "F"
    assert to_text(np.float64(0.5)) == "0.5"
    assert to_text(np.float64(1.0e-9), format=True) == "1E-9"
    assert to_text(np.int16(3), format=True) == "3"
    assert to_text("GRAVITY") == "GRAVITY"


def test_to_text_non_finite_tokens():
    assert to_text(float("nan")) == "NaN"
    assert to_text(np.float32("inf")) == "Inf"
    assert to_text(-np.inf) == "-Inf"
