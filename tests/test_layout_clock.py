import pytest

from poynting_canvas import SimClock, layout


def test_layout_800x500():
    g = layout(800, 500)
    assert (g.left, g.right, g.top, g.bottom) == (120.0, 680.0, 125.0, 375.0)
    assert g.source_point == (120.0, 250.0)
    assert g.load_point == (680.0, 250.0)


def test_layout_is_pure():
    assert layout(1024, 640) == layout(1024, 640)


@pytest.mark.parametrize("w,h", [(0, 500), (800, 0), (-10, 300), (0, 0)])
def test_degenerate_target_gives_empty_rect(w, h):
    g = layout(w, h)
    assert g.is_degenerate
    assert g.width == 0 and g.height == 0


def test_perimeter_walk_order():
    g = layout(800, 500)   # 560 x 250, perimeter 1620
    assert g.perimeter == 1620
    assert g.point_at(0.0) == (120.0, 125.0)
    assert g.point_at(280 / 1620) == pytest.approx((400.0, 125.0))      # top edge
    assert g.point_at(685 / 1620) == pytest.approx((680.0, 250.0))      # right edge
    assert g.point_at(1090 / 1620) == pytest.approx((400.0, 375.0))     # bottom edge, moving left
    assert g.point_at(1495 / 1620) == pytest.approx((120.0, 250.0))     # left edge, moving up
    assert g.point_at(1.0) == g.point_at(0.0)


def test_clock_fixed_step():
    c = SimClock(0.02)
    assert c.time == 0
    assert c.tick() == pytest.approx(0.02)
    assert c.tick() == pytest.approx(0.04)


def test_clock_does_not_drift():
    c = SimClock(0.02)
    for _ in range(100_000):
        t = c.tick()
    assert t == 100_000 * 0.02


def test_clock_reset_reproduces_sequence():
    c = SimClock(0.05)
    first = [c.tick() for _ in range(10)]
    c.reset()
    assert [c.tick() for _ in range(10)] == first


def test_clock_rejects_bad_step():
    with pytest.raises(ValueError):
        SimClock(0)
