"""図形ライブラリ（`pocketdraw.core.shapes`）のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from pocketdraw.core import shapes
from pocketdraw.core.recording import RecordingContext
from pocketdraw.core.shape_registry import shape_registry

_RED = (255, 0, 0)


def _prepared_context() -> RecordingContext:
    """既に変換が掛かった状態の ctx を返す。"""
    ctx = RecordingContext()
    ctx.translate(5.0, 7.0)
    ctx.rotate(0.3)
    return ctx


def _size(bounds: tuple[float, float, float, float]) -> tuple[float, float]:
    x0, y0, x1, y1 = bounds
    return x1 - x0, y1 - y0


@pytest.mark.parametrize(
    "draw",
    [
        lambda ctx: shapes.stadium(ctx, _RED, 130, 490, 40, 15, 337.5),
        lambda ctx: shapes.stadium(ctx, _RED, -3.5, 12.0, 50, 5, 67.5),
        lambda ctx: shapes.rectellipse(ctx, _RED, 75, 400, 90, 30, 6, 90),
        lambda ctx: shapes.rectellipse(ctx, _RED, 0, 0, 10, 10, 2, -725.0),
        lambda ctx: shapes.triangle(ctx, _RED, 25, 400, 7, 270),
        lambda ctx: shapes.triangle(ctx, _RED, 1e4, -1e4, 3, 45),
    ],
)
def test_rotated_shapes_restore_transform(draw) -> None:
    ctx = _prepared_context()
    before = ctx.transform
    draw(ctx)
    np.testing.assert_array_equal(ctx.transform, before)
    assert ctx.depth == 0


def test_console_rect_bounds_match_rect() -> None:
    ctx = RecordingContext()
    shapes.console_rect(ctx, _RED, 10, 20, 100, 60, 5, 30)
    assert len(ctx.paths) == 1
    np.testing.assert_allclose(ctx.paths[0].bounds(), (10.0, 20.0, 110.0, 80.0), atol=1e-9)


@pytest.mark.parametrize("sc,bc", [(0.0, 0.0), (5.0, 59.0), (29.0, 1.0)])
def test_console_rect_bounds_for_any_corner_sizes(sc: float, bc: float) -> None:
    ctx = RecordingContext()
    shapes.console_rect(ctx, _RED, -50, 0, 120, 60, sc, bc)
    np.testing.assert_allclose(ctx.paths[0].bounds(), (-50.0, 0.0, 70.0, 60.0), atol=1e-9)


def test_console_rect_large_corner_is_bottom_right_only() -> None:
    ctx = RecordingContext()
    shapes.console_rect(ctx, _RED, 0, 0, 360, 592, 10, 70)
    quads = [c for c in ctx.commands if c[0] == "quadratic_curve_to"]
    assert quads == [
        ("quadratic_curve_to", 0.0, 0.0, 10.0, 0.0),
        ("quadratic_curve_to", 360.0, 0.0, 360.0, 10.0),
        ("quadratic_curve_to", 360.0, 592.0, 290.0, 592.0),
        ("quadratic_curve_to", 0.0, 592.0, 0.0, 582.0),
    ]
    assert ctx.names()[-1] == "fill"
    assert "stroke" not in ctx.names()


def test_rectellipse_without_corners_is_plain_rectangle() -> None:
    ctx = RecordingContext()
    shapes.rectellipse(ctx, _RED, 50, 40, 20, 10, 0, 0)
    pts = ctx.paths[0].path.sample()
    corners = {tuple(p) for p in np.round(pts, 9).tolist()}
    assert corners == {(40.0, 35.0), (60.0, 35.0), (60.0, 45.0), (40.0, 45.0)}


def test_rectellipse_uses_uniform_corner_size() -> None:
    ctx = RecordingContext()
    shapes.rectellipse(ctx, _RED, 75, 400, 90, 30, 6, 0)
    quads = [c[1:] for c in ctx.commands if c[0] == "quadratic_curve_to"]
    assert quads == [
        (30.0, 385.0, 36.0, 385.0),
        (120.0, 385.0, 120.0, 391.0),
        (120.0, 415.0, 114.0, 415.0),
        (30.0, 415.0, 30.0, 409.0),
    ]


def test_stadium_quarter_turn_swaps_extents() -> None:
    flat = RecordingContext()
    shapes.stadium(flat, _RED, 100, 100, 40, 10, 0)
    upright = RecordingContext()
    shapes.stadium(upright, _RED, 100, 100, 40, 10, 90)

    flat_w, flat_h = _size(flat.paths[0].bounds())
    up_w, up_h = _size(upright.paths[0].bounds())

    # 端の膨らみは h * 3/4（制御点を h だけ外へ延ばした 3 次ベジェ）。
    np.testing.assert_allclose((flat_w, flat_h), (45.0, 10.0), atol=1e-9)
    np.testing.assert_allclose((up_w, up_h), (flat_h, flat_w), atol=1e-9)


def test_stadium_cap_control_points_extend_by_height() -> None:
    ctx = RecordingContext()
    shapes.stadium(ctx, _RED, 100, 100, 40, 10, 0)
    beziers = [c[1:] for c in ctx.commands if c[0] == "bezier_curve_to"]
    assert beziers == [
        (130.0, 95.0, 130.0, 105.0, 120.0, 105.0),
        (80.0, 105.0, 80.0, 95.0, 90.0, 95.0),
    ]


def test_stadium_rotation_is_given_in_degrees() -> None:
    ctx = RecordingContext()
    shapes.stadium(ctx, _RED, 130, 490, 40, 15, 337.5)
    rotates = [c for c in ctx.commands if c[0] == "rotate"]
    assert rotates == [("rotate", math.radians(337.5))]


def test_circle_draws_full_arc_and_fills() -> None:
    ctx = RecordingContext()
    shapes.circle(ctx, _RED, 250, 400, 20)
    assert ctx.commands == [
        ("begin_path",),
        ("arc", 250.0, 400.0, 20.0, 0.0, 2.0 * math.pi, False),
        ("close_path",),
        ("fill", _RED),
    ]
    np.testing.assert_allclose(ctx.paths[0].bounds(), (230.0, 380.0, 270.0, 420.0), atol=1e-9)


def test_line_strokes_without_fill() -> None:
    ctx = RecordingContext()
    shapes.line(ctx, _RED, 165, 575, 165, 592, 3)
    assert ctx.commands == [
        ("begin_path",),
        ("move_to", 165.0, 575.0),
        ("line_to", 165.0, 592.0),
        ("close_path",),
        ("stroke", _RED, 3.0),
    ]
    assert ctx.paths[0].kind == "stroke"
    assert ctx.paths[0].width == 3.0


def test_triangle_apex_points_up_before_rotation() -> None:
    ctx = RecordingContext()
    shapes.triangle(ctx, _RED, 75, 350, 7, 0)
    pts = [c[1:] for c in ctx.commands if c[0] in ("move_to", "line_to")]
    assert pts == [(71.5, 353.5), (78.5, 353.5), (75.0, 346.5), (71.5, 353.5)]


def test_triangle_half_turn_points_down() -> None:
    ctx = RecordingContext()
    shapes.triangle(ctx, _RED, 75, 450, 7, 180)
    _, y0, _, y1 = ctx.paths[0].bounds()
    # 回転後は底辺が上（y=446.5）、頂点が下（y=453.5）に来る。
    np.testing.assert_allclose((y0, y1), (446.5, 453.5), atol=1e-9)


def test_rect_uses_fill_rect_and_keeps_current_path() -> None:
    ctx = RecordingContext()
    shapes.rect(ctx, _RED, 85, 80, 190, 170)
    assert ctx.commands == [("fill_rect", 85.0, 80.0, 190.0, 170.0, _RED)]
    np.testing.assert_allclose(ctx.paths[0].bounds(), (85.0, 80.0, 275.0, 250.0))


def test_all_shapes_are_registered() -> None:
    for name in ("console_rect", "stadium", "rectellipse", "circle", "line", "triangle", "rect"):
        assert name in shape_registry


def test_registry_records_parameter_order_and_defaults() -> None:
    assert shape_registry.get_param_order("stadium") == ("cx", "cy", "w", "h", "a")
    assert shape_registry.get_defaults("stadium") == {"a": 0.0}
    assert shape_registry.get_defaults("line") == {"width": 1.0}


def test_registry_wrapper_draws_from_normalized_args() -> None:
    ctx = RecordingContext()
    func = shape_registry.get("circle")
    func(ctx, _RED, (("x", 1.0), ("y", 2.0), ("r", 3.0)))
    assert ctx.commands[1] == ("arc", 1.0, 2.0, 3.0, 0.0, 2.0 * math.pi, False)


def test_registry_raises_on_unknown_shape() -> None:
    with pytest.raises(KeyError):
        shape_registry.get("hexagon")
