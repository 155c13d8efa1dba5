# cli entrypoint
from __future__ import annotations

import json
import logging
from typing import List

from .config import RunConfig, build_arg_parser, load_config_and_args
from .geometry import compute_joint_layout
from .logging_utils import setup_logging
from .marking import marking_points, marking_steps, tail_board_outline
from .model import Geometry, Side
from .units import format_angle, format_length, format_percent
from .validation import validate_geometry, validate_joint_config

log = logging.getLogger(__name__)

_ARROWS = {Side.LEFT: "↑", Side.RIGHT: "↓"}


def _render_table(run_config: RunConfig, geometry: Geometry) -> List[str]:
    """Plain-text marking-out sheet."""
    joint = run_config.joint_config

    def length(value: float) -> str:
        return format_length(value, run_config.imperial)

    lines = [
        f"Board width: {length(joint.width_mm)}",
        f"Board thickness: {length(joint.thickness_mm)}",
        f"Angle: {format_angle(joint.angle_deg)}",
        f"Half-pin to pin ratio: {format_percent(joint.half_pin_size)}",
        f"Tail to pin ratio: {format_percent(joint.tail_to_pin)}",
        f"Pins: {geometry.num_pins} + 2 half-pins, tails: {geometry.num_tails}",
        "",
    ]
    for step_number, step in enumerate(marking_steps(joint), start=1):
        lines.append(f"Step {step_number}: {step}")
    lines.append("")

    for point in marking_points(geometry):
        mark = "*" if point.on_marking_line else " "
        text = f"{_ARROWS[point.measure_from]} {length(point.distance_mm)}"
        if point.measure_from is Side.RIGHT:
            text += f" (↑ {length(point.position_mm)})"
        lines.append(
            f"{mark} tail {point.tail_index + 1} {point.corner.name.lower():<12} {text}"
        )
    return lines


def _render_json(run_config: RunConfig, geometry: Geometry) -> str:
    joint = run_config.joint_config
    payload = {
        "pin_points": [list(quad) for quad in geometry.pin_points],
        "tail_points": [list(quad) for quad in geometry.tail_points],
        "pin_width": geometry.pin_width,
        "half_pin_width": geometry.half_pin_width,
        "pin_narrowing": geometry.pin_narrowing,
        "tail_widths": geometry.tail_widths,
        "tail_board_outline": [list(vertex) for vertex in tail_board_outline(joint, geometry)],
    }
    return json.dumps(payload, indent=2)


def main() -> None:
    """Entry point for the command-line layout calculator."""
    parser = build_arg_parser()
    args = parser.parse_args()

    setup_logging(args.log_level)

    run_config = load_config_and_args(args)

    validation_errors = validate_joint_config(run_config.joint_config)
    if validation_errors:
        for error in validation_errors:
            print(f"ERROR: {error}")
        raise SystemExit("Validation failed; fix configuration before running.")

    geometry = compute_joint_layout(run_config.joint_config)
    log.debug(
        "Layout: %d pins, pin width %.3f, half-pin %.3f, narrowing %.3f",
        geometry.num_pins,
        geometry.pin_width,
        geometry.half_pin_width,
        geometry.pin_narrowing,
    )
    for warning in validate_geometry(run_config.joint_config, geometry):
        log.warning("%s", warning)

    if run_config.output_format == "json":
        print(_render_json(run_config, geometry))
        return

    for line in _render_table(run_config, geometry):
        print(line)


if __name__ == "__main__":
    main()
