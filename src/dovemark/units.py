# units.py
from __future__ import annotations

import math
from fractions import Fraction

# Workshop approximation: a 1/4" step is 6.25 mm, so 1" = 25 mm.
MM_PER_INCH = 25.0
METRIC_STEP_MM = 5.0
IMPERIAL_STEP_MM = 6.25


def round_half_up(value: float) -> int:
    """Round .5 away from -inf, the way a tape measure reading is rounded."""
    return math.floor(value + 0.5)


def format_mm(value_mm: float) -> str:
    return f"{round_half_up(value_mm)} mm"


def format_inches(value_mm: float) -> str:
    """
    Nearest sixteenth of an inch as a mixed fraction, e.g. 11 13/16″.
    """
    sixteenths = Fraction(round_half_up(16 * value_mm / MM_PER_INCH), 16)
    whole = math.trunc(sixteenths)
    remainder = abs(sixteenths - whole)
    if remainder == 0:
        text = f"{whole}"
    elif whole == 0:
        sign = "-" if sixteenths < 0 else ""
        text = f"{sign}{remainder.numerator}/{remainder.denominator}"
    else:
        text = f"{whole} {remainder.numerator}/{remainder.denominator}"
    return f"{text}″"


def format_length(value_mm: float, imperial: bool) -> str:
    return format_inches(value_mm) if imperial else format_mm(value_mm)


def format_angle(angle_deg: float) -> str:
    """Angle plus the woodworker's slope ratio, e.g. 10˚ (≈1:6)."""
    if angle_deg == 0:
        return f"{angle_deg:g}˚ (box joint)"
    slope = round_half_up(1.0 / math.tan(math.radians(angle_deg)))
    return f"{angle_deg:g}˚ (≈1:{slope})"


def format_percent(ratio: float) -> str:
    return f"{round_half_up(ratio * 100)}%"


def unit_step_mm(imperial: bool) -> float:
    return IMPERIAL_STEP_MM if imperial else METRIC_STEP_MM
