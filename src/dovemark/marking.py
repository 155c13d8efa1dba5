# marking.py
from __future__ import annotations

from typing import List, Tuple

from .model import Corner, Geometry, JointConfig, MarkingPoint, Side
from .units import format_angle

# Corners lying on the marking-gauge line (the face the rule goes on).
_MARKING_LINE_CORNERS = (Corner.LEFT_TOP, Corner.RIGHT_TOP)


def marking_points(geometry: Geometry) -> List[MarkingPoint]:
    """
    Build the marking-out table for the tail board.

    Each tail gives four points, in tuple order. Points in the first half
    of the board are measured from the left edge; the rest are measured
    from the right edge so that errors don't accumulate across the board.
    A right-edge distance is read off the mirror tail's mirror corner,
    which equals width - position for a symmetric layout.

    Args:
        geometry: Solver output.

    Returns:
        MarkingPoint list, four per tail, in board order.
    """
    tail_points = geometry.tail_points
    num_tails = len(tail_points)
    points: List[MarkingPoint] = []

    for tail_index, quad in enumerate(tail_points):
        for corner in Corner:
            position = quad[corner.value]
            if tail_index * 2 + corner.value / 2 < num_tails:
                measure_from = Side.LEFT
                distance = position
            else:
                measure_from = Side.RIGHT
                mirror = tail_points[num_tails - tail_index - 1]
                distance = mirror[3 - corner.value]
            points.append(
                MarkingPoint(
                    tail_index=tail_index,
                    corner=corner,
                    position_mm=position,
                    measure_from=measure_from,
                    distance_mm=distance,
                    on_marking_line=corner in _MARKING_LINE_CORNERS,
                )
            )

    return points


def tail_board_outline(config: JointConfig, geometry: Geometry) -> List[Tuple[float, float]]:
    """
    End profile of the tail board as (x, y) vertices.

    x runs through the thickness (0 = marking face), y along the width.
    The waste between tails is left out so the polyline traces the tails.
    """
    thickness_mm = config.thickness_mm
    outline: List[Tuple[float, float]] = [(0.0, 0.0)]
    for left_bottom, left_top, right_top, right_bottom in geometry.tail_points:
        outline.append((0.0, left_top))
        outline.append((thickness_mm, left_bottom))
        outline.append((thickness_mm, right_bottom))
        outline.append((0.0, right_top))
    outline.append((0.0, config.width_mm))
    return outline


def marking_steps(config: JointConfig) -> List[str]:
    return [
        "Mark the highlighted points on the marking line, measuring from both "
        "edges of the board (↑ from the left, ↓ from the right) for symmetry.",
        "Mark the remaining points with a bevel gauge or dovetail marker set to "
        f"{format_angle(config.angle_deg)} to get a consistent angle.",
        "Use the remaining numbers to check your layout. "
        "(There might be slight differences due to rounding.)",
    ]
