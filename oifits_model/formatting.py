"""Number rendering shared by the XML and CSV outputs.

``beautify`` mimics the decimal patterns ``#0.###`` (for magnitudes within
(1e-2, 1e7)) and ``0.###E0`` (otherwise) with half-even rounding and a US
decimal point. It is a pure function: no shared formatter state.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any

import numpy as np

_THOUSANDTH = Decimal("0.001")


def _strip(digits: str) -> str:
    if "." in digits:
        digits = digits.rstrip("0").rstrip(".")
    return digits


def beautify(value: float) -> str:
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    magnitude = abs(value)
    if magnitude == 0.0:
        return "0"

    exact = Decimal(value)
    if 1e-2 < magnitude < 1e7:
        text = _strip(format(exact.quantize(_THOUSANDTH, rounding=ROUND_HALF_EVEN), "f"))
        return "0" if text in ("-0", "") else text

    exponent = exact.adjusted()
    mantissa = exact.scaleb(-exponent).quantize(_THOUSANDTH, rounding=ROUND_HALF_EVEN)
    if abs(mantissa) >= 10:
        exponent += 1
        mantissa = exact.scaleb(-exponent).quantize(_THOUSANDTH, rounding=ROUND_HALF_EVEN)
    return f"{_strip(format(mantissa, 'f'))}E{exponent}"


def to_text(value: Any, format: bool = False) -> str:
    """Render one scalar cell; numbers go through ``beautify`` when asked.

    Non-finite values always use the ``NaN`` / ``Inf`` / ``-Inf`` tokens.
    """
    if isinstance(value, (bool, np.bool_)):
        if format:
            return "T" if value else "F"
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)):
        if format or not math.isfinite(value):
            return beautify(value)
        return str(value)
    return str(value)
