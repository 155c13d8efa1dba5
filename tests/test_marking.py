import pytest

from dovemark.geometry import compute_joint_layout
from dovemark.marking import marking_points, marking_steps, tail_board_outline
from dovemark.model import Corner, JointConfig, Side


def make_config(**overrides) -> JointConfig:
    params = dict(
        width_mm=300.0,
        thickness_mm=25.0,
        angle_deg=10.0,
        half_pin_size=0.7,
        tail_to_pin=1.8,
        density=0.5,
        tail_variation=1.3,
    )
    params.update(overrides)
    return JointConfig(**params)


def test_marking_points_cover_every_tail_corner():
    geometry = compute_joint_layout(make_config())
    points = marking_points(geometry)

    assert len(points) == 4 * len(geometry.tail_points)
    assert [p.corner for p in points[:4]] == list(Corner)
    assert sum(p.on_marking_line for p in points) == 2 * len(geometry.tail_points)
    for point in points:
        quad = geometry.tail_points[point.tail_index]
        assert point.position_mm == quad[point.corner.value]


def test_first_half_measured_from_left_rest_from_right():
    config = make_config()
    geometry = compute_joint_layout(config)
    points = marking_points(geometry)

    left = [p for p in points if p.measure_from is Side.LEFT]
    right = [p for p in points if p.measure_from is Side.RIGHT]
    # Five tails: tails 1-2 and the left half of tail 3 from the left edge.
    assert len(left) == 10
    assert len(right) == 10
    assert (points[9].tail_index, points[9].corner) == (2, Corner.LEFT_TOP)
    assert points[9].measure_from is Side.LEFT
    assert points[10].measure_from is Side.RIGHT

    for point in left:
        assert point.distance_mm == point.position_mm
    for point in right:
        assert point.distance_mm == pytest.approx(config.width_mm - point.position_mm)


def test_single_tail_marks_split_across_edges():
    geometry = compute_joint_layout(make_config(width_mm=50.0))
    points = marking_points(geometry)
    assert len(geometry.tail_points) == 1
    assert [p.measure_from for p in points] == [Side.LEFT, Side.LEFT, Side.RIGHT, Side.RIGHT]


def test_tail_board_outline_traces_tails():
    config = make_config()
    geometry = compute_joint_layout(config)
    outline = tail_board_outline(config, geometry)

    assert len(outline) == 2 + 4 * len(geometry.tail_points)
    assert outline[0] == (0.0, 0.0)
    assert outline[-1] == (0.0, config.width_mm)

    left_bottom, left_top, right_top, right_bottom = geometry.tail_points[0]
    assert outline[1:5] == [
        (0.0, left_top),
        (config.thickness_mm, left_bottom),
        (config.thickness_mm, right_bottom),
        (0.0, right_top),
    ]
    # Dovetails flare toward the end grain.
    assert right_bottom - left_bottom > right_top - left_top


def test_marking_steps_name_the_angle():
    steps = marking_steps(make_config())
    assert len(steps) == 3
    assert "10˚ (≈1:6)" in steps[1]

    box_steps = marking_steps(make_config(angle_deg=0.0))
    assert "box joint" in box_steps[1]
