"""Poynting canvas: animated E / B / energy-flow sketch of a source + resistive load."""
from .circuit import ALL_FIELDS, CircuitConfiguration, DerivedElectricalState, Field, Mode, evaluate
from .clock import SimClock
from .config import Settings, load_config
from .engine import Animator, Frame, render_frame
from .errors import AnimatorStoppedError, DomainError
from .layout import CircuitGeometry, layout
from .surface import DrawCall, PygameSurface, RecordingSurface, RenderTarget

__version__ = "1.0.0"
