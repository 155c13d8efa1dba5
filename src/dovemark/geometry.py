# geometry.py
from __future__ import annotations

import math
from typing import List

from .model import Geometry, JointConfig, PointQuad

# Narrowest pin (at its cut face) that can still be sawn and pared.
MIN_PIN_WIDTH_MM = 3.0


def pin_narrowing_for(thickness_mm: float, angle_deg: float) -> float:
    """
    Offset of each marking line from the centre of an angled cut.

    An angled face crossing the full thickness moves sideways by
    thickness * tan(angle); each face sees half of that.
    """
    return thickness_mm * math.tan(math.radians(angle_deg)) / 2.0


def approximate_pin_width(config: JointConfig, pin_narrowing: float) -> float:
    """
    Continuous estimate of the pin width, floored so pins stay markable.

    One pin plus one tail should hold thickness / density of edge:

        pin * (1 + tail_to_pin) = thickness / density
    """
    return max(
        config.thickness_mm / config.density / (1.0 + config.tail_to_pin),
        MIN_PIN_WIDTH_MM + pin_narrowing * 2.0,
        (MIN_PIN_WIDTH_MM + pin_narrowing) / config.half_pin_size,
    )


def pin_count(config: JointConfig, approx_pin_width: float) -> int:
    """
    Largest number of full pins that fits with pins of approx_pin_width.

        n * pin * (1 + tail_to_pin) + 2 * half_pin + pin * tail_to_pin <= W
    """
    end_units = 2.0 * config.half_pin_size + config.tail_to_pin
    n = math.floor(
        (config.width_mm - approx_pin_width * end_units)
        / approx_pin_width
        / (1.0 + config.tail_to_pin)
    )
    return max(n, 0)


def exact_pin_width(config: JointConfig, num_pins: int) -> float:
    """Pin width for which the layout fills width_mm exactly."""
    return config.width_mm / (
        2.0 * config.half_pin_size
        + num_pins * (1.0 + config.tail_to_pin)
        + config.tail_to_pin
    )


def tapered_tail_widths(
    num_pins: int, average_tail_width: float, tail_variation: float
) -> List[float]:
    """
    Widths of the num_pins + 1 tails, in board order.

    Widths form an arithmetic progression in the distance from the nearest
    end (min(i, n - i)), spanning base .. base * tail_variation, with the
    mean held at average_tail_width. The base is solved from:

        sum(widths) = average_tail_width * (n + 1)
        max(widths) = base * tail_variation

    which has a different closed form for odd and even tail counts.
    """
    num_tails = num_pins + 1
    levels = math.ceil(num_tails / 2)
    if levels < 2:
        return [average_tail_width] * num_tails

    if num_tails % 2:
        base_width = (
            average_tail_width
            * (2 * levels - 1)
            / ((tail_variation + 1.0) * (levels - 1) + 1.0)
        )
    else:
        base_width = average_tail_width * 2.0 / (tail_variation + 1.0)
    delta = base_width * (tail_variation - 1.0) / (levels - 1)

    return [base_width + delta * min(i, num_pins - i) for i in range(num_tails)]


def compute_joint_layout(config: JointConfig) -> Geometry:
    """
    Lay out pins and tails along [0, W] for the given joint.

    Pattern:   half-pin, (tail, pin)*, tail, half-pin

    The pin count is found from a floored, continuous estimate of the pin
    width; the pin width is then re-solved exactly for that count so the
    pattern fills W. Every boundary is emitted as a pair of marking
    coordinates, one per board face, split by the angle narrowing.

    Inputs are expected to be in range (see validation); out-of-range or
    too-narrow boards give overlapping or inverted tuples rather than an
    error.
    """
    width_mm = config.width_mm
    pin_narrowing = pin_narrowing_for(config.thickness_mm, config.angle_deg)

    approx_width = approximate_pin_width(config, pin_narrowing)
    num_pins = pin_count(config, approx_width)

    pin_width = exact_pin_width(config, num_pins)
    half_pin_width = pin_width * config.half_pin_size
    tail_widths = tapered_tail_widths(
        num_pins, pin_width * config.tail_to_pin, config.tail_variation
    )

    pin_points: List[PointQuad] = [
        (0.0, 0.0, half_pin_width - pin_narrowing, half_pin_width + pin_narrowing)
    ]
    offset = half_pin_width
    # Last tail is implied: the right half-pin is anchored at W.
    for tail_width in tail_widths[:-1]:
        left = offset + tail_width
        right = left + pin_width
        pin_points.append(
            (
                left - pin_narrowing,
                left + pin_narrowing,
                right - pin_narrowing,
                right + pin_narrowing,
            )
        )
        offset = right
    pin_points.append(
        (
            width_mm - half_pin_width - pin_narrowing,
            width_mm - half_pin_width + pin_narrowing,
            width_mm,
            width_mm,
        )
    )

    tail_points: List[PointQuad] = [
        (left_pin[2], left_pin[3], right_pin[0], right_pin[1])
        for left_pin, right_pin in zip(pin_points[:-1], pin_points[1:])
    ]

    return Geometry(
        pin_points=pin_points,
        tail_points=tail_points,
        pin_narrowing=pin_narrowing,
        pin_width=pin_width,
        half_pin_width=half_pin_width,
        tail_widths=tail_widths,
    )
