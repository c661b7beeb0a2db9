# =======================================================================
# fields.py  –  E, B and Poynting (S = E x B) overlays
# =======================================================================
#
# The geometry helpers (electric_arrows, magnetic_symbols, poynting_flow,
# poynting_particles, endpoint_arrows) are pure so they can be checked
# without a surface; the draw_* functions only turn them into primitives.
#
# E and B both reverse with the AC source, their cross product does not:
# the Poynting overlay always points source -> load and only its size /
# density / opacity follows |P(t)|.
# -----------------------------------------------------------------------
from __future__ import annotations
import math
from typing import NamedTuple

import numpy as np

from .circuit import CircuitConfiguration, DerivedElectricalState
from .config import Settings
from .layout import CircuitGeometry
from .surface import RenderTarget, arc_points, arrow_head, hsl

DEFAULTS = Settings()

E_POS_C = hsl(200, 100, 60)
E_NEG_C = hsl(200, 100, 40)
B_C     = hsl(340, 85, 60)
S_C     = hsl(45, 100, 60)

E_BASE_LEN, E_REF_V, E_MAX_LEN = 40.0, 5.0, 90.0
E_HEAD = 6.0
B_R0, B_R_GAIN, B_R_CAP = 15.0, 2.0, 20.0
DOT, CROSS = "•", "×"


# ───────── ELECTRIC ─────────
def electric_direction(ac_phase:float) -> int:
    """+1 = pointing away from the wires, -1 = pointing back at them."""
    return 1 if ac_phase >= 0 else -1


def electric_length(state:DerivedElectricalState, config:CircuitConfiguration) -> float:
    return min(E_BASE_LEN * abs(state.ac_phase) * abs(config.source_voltage) / E_REF_V, E_MAX_LEN)


def electric_arrows(geometry:CircuitGeometry, state:DerivedElectricalState,
                    config:CircuitConfiguration, settings:Settings = DEFAULTS) -> list[tuple[tuple, tuple]]:
    """(tail, head) pairs, one above the top wire and one below the bottom wire per column."""
    length = electric_length(state, config)
    if length < 1: return []
    d = electric_direction(state.ac_phase)
    arrows = []
    for x in np.arange(geometry.left + settings.e_spacing, geometry.right - settings.e_spacing, settings.e_spacing):
        x = float(x)
        for wire_y, out in ((geometry.top, -1), (geometry.bottom, 1)):
            inner, outer = (x, wire_y), (x, wire_y + out*length)
            arrows.append((inner, outer) if d > 0 else (outer, inner))
    return arrows


def draw_electric(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                  config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    strength = abs(config.source_voltage) * abs(state.ac_phase)
    color = E_POS_C if electric_direction(state.ac_phase) > 0 else E_NEG_C
    width = 1 + min(abs(config.source_voltage)/10, 2.0)
    alpha = 0.3 + min(strength*0.01, 0.4)
    for tail, head in electric_arrows(geometry, state, config, settings):
        surface.stroke_path((tail, head), color, width, alpha=alpha)
        surface.fill_path(arrow_head(*tail, *head, E_HEAD), color, alpha=alpha)


# ───────── MAGNETIC ─────────
def magnetic_symbols(instantaneous_current:float) -> tuple[str, str]:
    """(outside-the-loop glyph, inside-the-loop glyph) by the right-hand rule; swaps when current reverses."""
    return (DOT, CROSS) if instantaneous_current > 0 else (CROSS, DOT)


def magnetic_radius(instantaneous_current:float) -> float:
    return B_R0 + min(abs(instantaneous_current)*B_R_GAIN, B_R_CAP)


def magnetic_columns(geometry:CircuitGeometry, settings:Settings = DEFAULTS) -> list[float]:
    return [float(x) for x in np.arange(geometry.left + settings.b_spacing, geometry.right - settings.b_spacing, settings.b_spacing)]


def draw_magnetic(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                  config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    outside, inside = magnetic_symbols(state.instantaneous_current)
    r = magnetic_radius(state.instantaneous_current)
    pi = math.pi
    for x in magnetic_columns(geometry, settings):
        # top wire: arc bulges upward (outside), bottom wire: downward
        surface.stroke_path(arc_points(x, geometry.top, r, pi, 2*pi, 16), B_C, 1.5)
        surface.text((x, geometry.top - r - 8), outside, B_C, 16, bold=True)
        surface.text((x, geometry.top + 14), inside, B_C, 16, bold=True)

        surface.stroke_path(arc_points(x, geometry.bottom, r, 0, pi, 16), B_C, 1.5)
        surface.text((x, geometry.bottom + r + 8), outside, B_C, 16, bold=True)
        surface.text((x, geometry.bottom - 14), inside, B_C, 16, bold=True)


# ───────── POYNTING ─────────
class FlowVector(NamedTuple):
    direction: tuple[float, float]   # unit vector, screen coordinates
    magnitude: float


def poynting_flow(state:DerivedElectricalState) -> FlowVector:
    """Energy always travels source (left) -> load (right); only |S| follows the instantaneous power."""
    return FlowVector((1.0, 0.0), abs(state.instantaneous_power))


class ParticleFrame(NamedTuple):
    index: np.ndarray
    x: np.ndarray
    y: np.ndarray
    alpha: np.ndarray
    size: float


CYCLE_LENGTH = 1.5    # progress units per cycle; only [0, 1] is on screen


def particle_seeds(n:int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Per-index (seed offset, lateral factor in [-1, 1], speed). Depends on the index only, never on time."""
    i = np.arange(n)
    seed = i * 13.0
    return seed / 100.0, np.sin(seed), 1.0 + (i % 3)*0.5


def active_particles(power:float, pool:int) -> int:
    return min(int(math.floor(abs(power)*3)), pool)


def poynting_particles(geometry:CircuitGeometry, state:DerivedElectricalState, t:float,
                       settings:Settings = DEFAULTS) -> ParticleFrame:
    """Visible stream particles at time *t*."""
    p = abs(state.instantaneous_power)
    n = active_particles(p, settings.particle_pool)
    offset, lateral, speed = particle_seeds(n)
    progress = np.mod(t*speed + offset, CYCLE_LENGTH)
    visible = progress <= 1.0

    _, cy = geometry.center
    h = geometry.height
    y_off = lateral * h * 0.3
    alpha = 1.0 - np.abs(y_off) / (h*0.4) if h > 0 else np.ones(n)
    return ParticleFrame(
        index=np.arange(n)[visible],
        x=(geometry.left + progress*geometry.width)[visible],
        y=(cy + y_off)[visible],
        alpha=np.clip(alpha, 0.0, 1.0)[visible],
        size=2 + p/50,
    )


def endpoint_arrows(geometry:CircuitGeometry) -> tuple[list, list]:
    """(emitting arrows fanning out of the source, absorbing arrows converging on the load), as (tail, head)."""
    sx, sy = geometry.source_point
    lx, ly = geometry.load_point
    emit, absorb = [], []
    for deg in (-45, -15, 15, 45):
        a = math.radians(deg)
        emit.append(((sx + 40*math.cos(a), sy + 40*math.sin(a)), (sx + 70*math.cos(a), sy + 70*math.sin(a))))
        b = math.radians(180 + deg)
        absorb.append(((lx + 70*math.cos(b), ly + 70*math.sin(b)), (lx + 45*math.cos(b), ly + 45*math.sin(b))))
    return emit, absorb


def endpoint_alpha(power:float, settings:Settings = DEFAULTS) -> float:
    """Opacity of the emit/absorb arrows; exactly 0 below the power threshold so they do not flicker near zero."""
    p = abs(power)
    if p < settings.poynting_threshold: return 0.0
    return 0.9 * min(p / settings.glow_power, 1.0)


def draw_poynting(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                  config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    flow = poynting_flow(state)
    m = min(flow.magnitude / settings.glow_power, 1.0)

    parts = poynting_particles(geometry, state, t, settings)
    for x, y, a in zip(parts.x.tolist(), parts.y.tolist(), parts.alpha.tolist()):
        surface.fill_circle((x, y), parts.size + 2, S_C, alpha=a*0.25)
        surface.fill_circle((x, y), parts.size, S_C, alpha=a)

    # centre-line direction arrows, length and opacity follow |S|
    cx, cy = geometry.center
    half = 8 + 7*m
    ux, uy = flow.direction
    for pos in (0.25, 0.5, 0.75):
        ax = geometry.left + pos*geometry.width
        tail, head = (ax - half*ux, cy - half*uy), (ax + half*ux, cy + half*uy)
        surface.stroke_path((tail, head), S_C, 3, alpha=0.3 + 0.5*m)
        surface.fill_path(arrow_head(*tail, *head, 10), S_C, alpha=0.3 + 0.5*m)
    surface.text((cx, cy - 25), "S", S_C, 20, alpha=0.8, bold=True)

    ea = endpoint_alpha(flow.magnitude, settings)
    if ea <= 0: return
    emit, absorb = endpoint_arrows(geometry)
    for tail, head in emit + absorb:
        surface.stroke_path((tail, head), S_C, 2, alpha=ea)
        surface.fill_path(arrow_head(*tail, *head, 7), S_C, alpha=ea)
