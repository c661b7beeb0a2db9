# =======================================================================
# engine.py  –  Per-frame pipeline and the start/stop animation driver
# =======================================================================
#
#   tick -> evaluate -> layout -> clear -> components -> enabled fields
#
# The model is evaluated before anything touches the surface, so a bad
# configuration raises DomainError without emitting a single primitive.
# -----------------------------------------------------------------------
from __future__ import annotations
from typing import NamedTuple

from .circuit import CircuitConfiguration, DerivedElectricalState, Field, evaluate
from .clock import SimClock
from .components import draw_electrons, draw_load, draw_phase_indicator, draw_source, draw_wires
from .config import Settings
from .errors import AnimatorStoppedError
from .fields import draw_electric, draw_magnetic, draw_poynting
from .layout import CircuitGeometry, layout
from .surface import RenderTarget

BG_C = (2, 6, 23)

COMPONENT_RENDERERS = (
    ("wires", draw_wires),
    ("electrons", draw_electrons),
    ("source", draw_source),
    ("load", draw_load),
    ("phase", draw_phase_indicator),
)
FIELD_RENDERERS = (
    (Field.ELECTRIC, "electric", draw_electric),
    (Field.MAGNETIC, "magnetic", draw_magnetic),
    (Field.POYNTING, "poynting", draw_poynting),
)


class Frame(NamedTuple):
    t: float
    state: DerivedElectricalState
    geometry: CircuitGeometry
    drawn: bool


def render_frame(surface:RenderTarget, config:CircuitConfiguration, t:float, settings:Settings = Settings()) -> Frame:
    """Draws one complete frame at time *t*. Target size is read once; one geometry is used throughout."""
    state = evaluate(config, t)
    w, h = surface.size
    geometry = layout(w, h, settings.width_fraction, settings.height_fraction)
    if geometry.is_degenerate:
        return Frame(t, state, geometry, False)

    surface.clear(BG_C)
    for tag, draw in COMPONENT_RENDERERS:
        with surface.labelled(tag):
            draw(surface, geometry, state, config, t, settings)
    for f, tag, draw in FIELD_RENDERERS:
        if config.shows(f):
            with surface.labelled(tag):
                draw(surface, geometry, state, config, t, settings)
    return Frame(t, state, geometry, True)


class Animator:
    """Owns the clock and the registered render target.

    start() registers a surface and starts a fresh clock at zero; stop() drops the
    surface so nothing keeps a torn-down target alive and further frames are refused.
    """

    def __init__(self, settings:Settings = Settings()):
        self.settings = settings
        self.clock = SimClock(settings.time_step)
        self.surface: RenderTarget | None = None

    @property
    def running(self) -> bool: return self.surface is not None

    def start(self, surface:RenderTarget):
        self.clock = SimClock(self.settings.time_step)
        self.surface = surface

    def stop(self):
        self.surface = None

    def restart(self):
        if self.surface is None:
            raise AnimatorStoppedError("restart() needs a registered surface, call start() instead")
        self.start(self.surface)

    def frame(self, config:CircuitConfiguration, advance:bool = True) -> Frame:
        """Advances the clock (unless paused) and renders. Errors from the model propagate to the caller."""
        if self.surface is None:
            raise AnimatorStoppedError("animator is stopped")
        t = self.clock.tick() if advance else self.clock.time
        return render_frame(self.surface, config, t, self.settings)
