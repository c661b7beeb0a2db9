import math

import numpy as np
import pytest

from poynting_canvas import CircuitConfiguration, RecordingSurface, Settings, evaluate, layout
from poynting_canvas.fields import (CROSS, DOT, draw_electric, draw_magnetic, draw_poynting, electric_arrows,
                                    electric_direction, electric_length, endpoint_alpha, endpoint_arrows,
                                    magnetic_radius, magnetic_symbols, particle_seeds, poynting_flow,
                                    poynting_particles)

G = layout(800, 500)


# ───────── E ─────────
def test_electric_direction_tracks_polarity(ac_config):
    up = electric_arrows(G, evaluate(ac_config, 0.25), ac_config)
    down = electric_arrows(G, evaluate(ac_config, 0.75), ac_config)
    assert up and down
    # top-wire arrows: positive phase points away (up), negative points back at the wire
    top_up = [a for a in up if a[0][1] == G.top]
    assert all(head[1] < tail[1] for tail, head in top_up)
    top_down = [a for a in down if a[1][1] == G.top]
    assert all(head[1] > tail[1] for tail, head in top_down)
    assert electric_direction(0.3) == 1 and electric_direction(-0.3) == -1


def test_electric_length_scales_and_caps(ac_config):
    assert electric_length(evaluate(ac_config, 0.25), ac_config) == pytest.approx(80)
    assert electric_length(evaluate(ac_config, 0.0), ac_config) == 0
    big = CircuitConfiguration(source_voltage=100.0)
    assert electric_length(evaluate(big, 0.0), big) == 90


def test_electric_arrows_vanish_at_zero_phase(ac_config):
    s = RecordingSurface()
    draw_electric(s, G, evaluate(ac_config, 0.5), ac_config, 0.5)
    assert s.calls == []


def test_electric_colour_encodes_sign(ac_config):
    a, b = RecordingSurface(), RecordingSurface()
    draw_electric(a, G, evaluate(ac_config, 0.25), ac_config, 0.25)
    draw_electric(b, G, evaluate(ac_config, 0.75), ac_config, 0.75)
    assert {c.color for c in a.calls} != {c.color for c in b.calls}


# ───────── B ─────────
def test_magnetic_symbols_swap_with_current(ac_config):
    syms = {t: magnetic_symbols(evaluate(ac_config, t).instantaneous_current) for t in (0.1, 0.25, 0.6, 0.75, 1.25)}
    assert syms[0.1] == syms[0.25] == syms[1.25] == (DOT, CROSS)
    assert syms[0.6] == syms[0.75] == (CROSS, DOT)


def test_magnetic_glyphs_in_drawn_output(ac_config):
    def glyph_at(t):
        s = RecordingSurface()
        draw_magnetic(s, G, evaluate(ac_config, t), ac_config, t)
        above_top = [c.text for c in s.calls if c.kind == "text" and c.points[0][1] < G.top]
        return set(above_top)
    assert glyph_at(0.25) == {DOT}
    assert glyph_at(0.75) == {CROSS}


def test_magnetic_radius_scales_with_current():
    assert magnetic_radius(0) == 15
    assert magnetic_radius(2) == magnetic_radius(-2) == 19
    assert magnetic_radius(1000) == 35


# ───────── S ─────────
def test_poynting_direction_never_reverses(ac_config):
    b, c = evaluate(ac_config, 0.25), evaluate(ac_config, 0.75)
    assert b.instantaneous_current * c.instantaneous_current < 0
    assert poynting_flow(b).direction == poynting_flow(c).direction == (1.0, 0.0)
    for k in range(100):
        s = evaluate(ac_config, k * 0.013)
        f = poynting_flow(s)
        assert f.direction == (1.0, 0.0)
        assert f.magnitude == pytest.approx(s.instantaneous_power)


def test_particle_seeds_depend_on_index_only():
    off, lat, speed = particle_seeds(4)
    assert off.tolist() == [0.0, 0.13, 0.26, 0.39]
    assert lat.tolist() == pytest.approx([math.sin(i * 13.0) for i in range(4)])
    assert speed.tolist() == [1.0, 1.5, 2.0, 1.0]


def test_particles_stream_source_to_load(dc_config):
    s = evaluate(dc_config, 0.0)
    a, b = poynting_particles(G, s, 2.0), poynting_particles(G, s, 2.01)
    xa = dict(zip(a.index.tolist(), a.x.tolist()))
    xb = dict(zip(b.index.tolist(), b.x.tolist()))
    ya = dict(zip(a.index.tolist(), a.y.tolist()))
    yb = dict(zip(b.index.tolist(), b.y.tolist()))
    common = set(xa) & set(xb)
    assert common
    for i in common:
        assert xb[i] > xa[i]
        assert yb[i] == ya[i]
    assert np.all((a.x >= G.left) & (a.x <= G.right))


def test_particle_count_follows_power(ac_config):
    peak = poynting_particles(G, evaluate(ac_config, 0.25), 0.25)
    zero = poynting_particles(G, evaluate(ac_config, 0.5), 0.5)
    assert len(zero.x) == 0
    assert len(peak.x) > 0
    assert peak.size == pytest.approx(2 + 20 / 50)


def test_endpoint_arrows_point_towards_load():
    emit, absorb = endpoint_arrows(G)
    assert len(emit) == len(absorb) == 4
    for tail, head in emit + absorb:
        assert head[0] > tail[0]
    sx, sy = G.source_point
    lx, ly = G.load_point
    assert all(math.dist(h, (sx, sy)) > math.dist(t, (sx, sy)) for t, h in emit)
    assert all(math.dist(h, (lx, ly)) < math.dist(t, (lx, ly)) for t, h in absorb)


def test_endpoint_alpha_gated_by_threshold():
    st = Settings(poynting_threshold=0.5, glow_power=50.0)
    assert endpoint_alpha(0.0, st) == 0
    assert endpoint_alpha(0.49, st) == 0
    assert endpoint_alpha(25.0, st) == pytest.approx(0.45)
    assert endpoint_alpha(1e6, st) == pytest.approx(0.9)


def test_poynting_drawing_identical_direction_b_vs_c(ac_config):
    def arrows(t):
        s = RecordingSurface()
        draw_poynting(s, G, evaluate(ac_config, t), ac_config, t)
        return [(np.sign(c.points[-1][0] - c.points[0][0]), np.sign(c.points[-1][1] - c.points[0][1]))
                for c in s.calls if c.kind == "stroke"]
    assert arrows(0.25) == arrows(0.75)
