# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple

# (left_bottom, left_top, right_top, right_bottom) along the board width.
PointQuad = Tuple[float, float, float, float]


class Side(Enum):
    LEFT = auto()
    RIGHT = auto()


class Corner(Enum):
    """Index into a PointQuad."""

    LEFT_BOTTOM = 0
    LEFT_TOP = 1
    RIGHT_TOP = 2
    RIGHT_BOTTOM = 3


@dataclass
class JointConfig:
    """Board + style parameters for one hand-cut dovetail joint."""

    width_mm: float  # W; edge length being joined
    thickness_mm: float  # t; only drives angle narrowing and pin sizing
    angle_deg: float  # half-angle; 0 = box joint
    half_pin_size: float  # half-pin width / pin width
    tail_to_pin: float  # tail width / pin width
    density: float  # pin material / board width; lower = fewer, wider pins
    tail_variation: float  # widest tail / narrowest tail


@dataclass
class Geometry:
    """Pin and tail boundaries along the board edge, in the units of width_mm."""

    pin_points: List[PointQuad]  # n + 2, half-pins first and last
    tail_points: List[PointQuad]  # n + 1
    pin_narrowing: float = 0.0
    pin_width: float = 0.0
    half_pin_width: float = 0.0
    tail_widths: List[float] = field(default_factory=list)

    @property
    def num_pins(self) -> int:
        """Full pins, not counting the two half-pins."""
        return len(self.pin_points) - 2

    @property
    def num_tails(self) -> int:
        return len(self.tail_points)


@dataclass
class MarkingPoint:
    """One number in the marking-out table."""

    tail_index: int
    corner: Corner
    position_mm: float  # measured from the left edge
    measure_from: Side
    distance_mm: float  # what to measure from measure_from
    on_marking_line: bool  # top face; marked first, with a rule
