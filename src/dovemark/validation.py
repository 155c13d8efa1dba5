# validation.py
from __future__ import annotations

from typing import List

from .model import Geometry, JointConfig

_TOLERANCE_MM = 1e-6


def validate_joint_config(config: JointConfig) -> List[str]:
    errors: List[str] = []

    if config.width_mm <= 0:
        errors.append("width_mm must be > 0")

    if config.thickness_mm < 0:
        errors.append("thickness_mm must be >= 0")

    if config.angle_deg < 0 or config.angle_deg >= 90:
        errors.append("angle_deg should be in [0, 90) degrees")

    if not (0 < config.half_pin_size <= 1):
        errors.append("half_pin_size must be in (0, 1]")

    if config.tail_to_pin <= 0:
        errors.append("tail_to_pin must be > 0")

    if not (0 < config.density <= 1):
        errors.append("density must be in (0, 1]")

    if config.tail_variation < 1:
        errors.append("tail_variation must be >= 1")

    return errors


def validate_geometry(config: JointConfig, geometry: Geometry) -> List[str]:
    """
    Report degenerate layouts. The solver never rejects these; a caller
    decides whether a board too narrow for its half-pins is worth a warning.
    """
    errors: List[str] = []

    if len(geometry.pin_points) != len(geometry.tail_points) + 1:
        errors.append(
            f"pin/tail count mismatch: {len(geometry.pin_points)} pins, "
            f"{len(geometry.tail_points)} tails"
        )

    boundaries = [0.0]
    for _, left_top, right_top, _ in geometry.tail_points:
        boundaries.extend((left_top, right_top))
    boundaries.append(config.width_mm)
    for previous, current in zip(boundaries, boundaries[1:]):
        if current < previous - _TOLERANCE_MM:
            errors.append(
                f"Marking lines overlap at {current:.3f} < {previous:.3f}; "
                f"width_mm {config.width_mm:.3f} too small for this joint"
            )
            break

    if geometry.tail_points:
        y_min = geometry.tail_points[0][0]
        y_max = geometry.tail_points[-1][3]
        if y_min < -_TOLERANCE_MM or y_max > config.width_mm + _TOLERANCE_MM:
            errors.append(
                f"Tails extend outside edge [0, W]: y_min={y_min:.3f}, "
                f"y_max={y_max:.3f}, W={config.width_mm:.3f}"
            )

    return errors


def validate_all(config: JointConfig, geometry: Geometry) -> List[str]:
    errors: List[str] = []
    errors += validate_joint_config(config)
    errors += validate_geometry(config, geometry)
    return errors
