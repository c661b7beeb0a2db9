# =======================================================================
# components.py  –  Circuit artwork: wires, source, lamp, electron drift
# =======================================================================
#
# Every renderer has the shape
#     draw_x(surface, geometry, state, config, t, settings=DEFAULTS)
# and only emits primitives; none of them returns anything or keeps state.
# -----------------------------------------------------------------------
from __future__ import annotations
import math

import numpy as np

from .circuit import CircuitConfiguration, DerivedElectricalState
from .config import Settings
from .layout import CircuitGeometry
from .surface import RenderTarget, arc_points, hsl

DEFAULTS = Settings()

# ───────── COLOURS ─────────
WIRE_C      = hsl(220, 10, 40)
GLYPH_C     = hsl(220, 10, 80)
AMBER_C     = hsl(45, 100, 60)
LABEL_R_C   = hsl(340, 85, 60)
ELECTRON_C  = hsl(190, 100, 70)
ELECTRON_GLOW_C = hsl(190, 100, 50)
SOURCE_BG_C = hsl(220, 20, 10)
BASE_C      = (85, 85, 85)
THREAD_C    = (136, 136, 136)
SUPPORT_C   = (170, 170, 170)
PHASE_BOX_C = hsl(220, 20, 30)
PHASE_TXT_C = hsl(210, 20, 70)

WIRE_W = 8
SOURCE_SIZE, LOAD_SIZE = 60, 80


def fmt(v:float, unit:str) -> str:
    return f"{v:.3g}{unit}"


# ───────── WIRES ─────────
def draw_wires(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
               config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    """Straight runs inset by the corner radius, then the four quarter-arc corners."""
    l, r, tp, b = geometry.left, geometry.right, geometry.top, geometry.bottom
    cr = min(settings.corner_radius, geometry.width/2, geometry.height/2)
    for seg in (((l+cr, tp), (r-cr, tp)), ((l+cr, b), (r-cr, b)),
                ((l, tp+cr), (l, b-cr)), ((r, tp+cr), (r, b-cr))):
        surface.stroke_path(seg, WIRE_C, WIRE_W)

    pi = math.pi
    for cx, cy, a0, a1 in ((l+cr, tp+cr, pi, 1.5*pi), (r-cr, tp+cr, 1.5*pi, 2*pi),
                           (l+cr, b-cr, 0.5*pi, pi),  (r-cr, b-cr, 0, 0.5*pi)):
        surface.stroke_path(arc_points(cx, cy, cr, a0, a1, 8), WIRE_C, WIRE_W)


# ───────── SOURCE ─────────
def draw_source(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    if config.is_ac:
        _draw_ac_source(surface, geometry, config, t)
    else:
        _draw_battery(surface, geometry, config)


def _draw_battery(surface, geometry, config):
    x, y = geometry.source_point
    s = SOURCE_SIZE
    # leads
    surface.stroke_path(((x, y - s/2), (x, y - s/3)), GLYPH_C, 3)
    surface.stroke_path(((x, y + s/2), (x, y + s/3)), GLYPH_C, 3)
    # long (+) plate, short (-) plate
    surface.stroke_path(((x - 20, y - s/3), (x + 20, y - s/3)), GLYPH_C, 3)
    surface.stroke_path(((x - 10, y + s/3), (x + 10, y + s/3)), GLYPH_C, 6)
    surface.text((x - 25, y), fmt(config.source_voltage, "V"), AMBER_C, 16, anchor="midright", bold=True)


def source_wave(x:float, y:float, size:float, phase:float, samples:int = 20) -> list[tuple[float, float]]:
    """The oscillator's sine trace, one full period across 60% of the glyph, shifted by *phase*."""
    ww, wh = size*0.6, size*0.25
    u = np.linspace(0.0, 1.0, samples + 1)
    px = x - ww/2 + u*ww
    py = y + np.sin(u*2*np.pi + phase)*wh
    return list(zip(px.tolist(), py.tolist()))


def _draw_ac_source(surface, geometry, config, t):
    x, y = geometry.source_point
    s = SOURCE_SIZE
    surface.stroke_path(((x, y - s/2 - 10), (x, y + s/2 + 10)), GLYPH_C, 2)
    surface.fill_circle((x, y), s/2, SOURCE_BG_C)
    surface.stroke_path(arc_points(x, y, s/2, 0, 2*math.pi, 32), GLYPH_C, 2, closed=True)

    phase = 2*math.pi*config.frequency*t
    surface.stroke_path(source_wave(x, y, s, phase), AMBER_C, 3)
    surface.text((x, y + s/2 + 20), fmt(config.source_voltage, "V"), AMBER_C, 14, bold=True)


# ───────── LOAD (LAMP) ─────────
def lamp_intensity(power:float, k:float) -> float:
    """Glow intensity in [0, 1]: linear in |P| up to K watts, then saturated."""
    return min(abs(power) / k, 1.0)


def draw_load(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
              config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    x, y = geometry.load_point
    glow = lamp_intensity(state.instantaneous_power, settings.glow_power)
    brightness = 20 + glow*80

    # halo, grows with intensity
    if glow > 0:
        for k in range(3, 0, -1):
            surface.fill_circle((x, y - 5), 30 + glow*20*k, hsl(50, 100, 60), alpha=glow*0.12)

    # glass
    surface.fill_circle((x, y - 5), 30, hsl(50, 100, brightness), alpha=0.1)
    surface.stroke_path(arc_points(x, y - 5, 30, 0, 2*math.pi, 32), hsl(50, 100, brightness), 1, alpha=0.5, closed=True)

    # screw base and threads
    surface.fill_path(((x - 12, y + 20), (x + 12, y + 20), (x + 12, y + 45), (x - 12, y + 45)), BASE_C)
    for ty in (25, 32, 39):
        surface.stroke_path(((x - 12, y + ty), (x + 12, y + ty)), THREAD_C, 2)

    # filament supports
    surface.stroke_path(((x - 8, y + 20), (x - 5, y)), SUPPORT_C, 1.5)
    surface.stroke_path(((x + 8, y + 20), (x + 5, y)), SUPPORT_C, 1.5)

    # filament: hotter colour and thicker trace with intensity
    filament = ((x - 5, y), (x - 8, y - 10), (x - 4, y - 5), (x, y - 12), (x + 4, y - 5), (x + 8, y - 10), (x + 5, y))
    if glow > 0:
        surface.stroke_path(filament, hsl(40, 100, 50), 6 + glow*6, alpha=glow*0.35)
    surface.stroke_path(filament, hsl(40, 100, 50 + glow*50), 2 + glow*2)

    # leads into the loop
    surface.stroke_path(((x, y - LOAD_SIZE/2), (x, y - 35)), GLYPH_C, 4)
    surface.stroke_path(((x, y + 45), (x, y + LOAD_SIZE/2)), GLYPH_C, 4)

    surface.text((x, y + 65), fmt(config.load_resistance, "Ω"), LABEL_R_C, 14, bold=True)


# ───────── ELECTRON DRIFT ─────────
def drift_velocity(state:DerivedElectricalState, settings:Settings = DEFAULTS) -> float:
    """Perimeter fraction per unit time. Electrons move against conventional current, hence the minus."""
    return -state.instantaneous_current * settings.electron_drift * settings.electron_step


def electron_fractions(state:DerivedElectricalState, t:float, settings:Settings = DEFAULTS) -> np.ndarray:
    """Perimeter fraction in [0, 1) of every drift marker at time *t*."""
    n = settings.electron_count
    return np.mod(np.arange(n)/n + t*drift_velocity(state, settings), 1.0)


def draw_electrons(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                   config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    for pos in electron_fractions(state, t, settings):
        p = geometry.point_at(float(pos))
        surface.fill_circle(p, 5, ELECTRON_GLOW_C, alpha=0.3)
        surface.fill_circle(p, 3, ELECTRON_C)


# ───────── PHASE INDICATOR ─────────
def draw_phase_indicator(surface:RenderTarget, geometry:CircuitGeometry, state:DerivedElectricalState,
                         config:CircuitConfiguration, t:float, settings:Settings = DEFAULTS):
    """AC only: a bar filled left or right of centre in proportion to the phase."""
    if not config.is_ac: return
    # geometry is centred, so left+right is the target width
    ix, iy = geometry.left + geometry.right - 80, 60
    surface.text((ix, iy - 20), "Phase", PHASE_TXT_C, 12)
    box = ((ix - 30, iy - 10), (ix + 30, iy - 10), (ix + 30, iy + 10), (ix - 30, iy + 10))
    surface.stroke_path(box, PHASE_BOX_C, 1, closed=True)
    w = state.ac_phase * 30
    if abs(w) >= 0.5:
        surface.fill_path(((ix, iy - 10), (ix + w, iy - 10), (ix + w, iy + 10), (ix, iy + 10)), AMBER_C)
