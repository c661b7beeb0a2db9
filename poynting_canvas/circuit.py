# =======================================================================
# circuit.py  –  Source + resistive load model (Ohm's law, AC phase)
# =======================================================================
from __future__ import annotations
import math
from dataclasses import dataclass, field, replace

from .errors import DomainError

# ───────── MODES / FIELDS ─────────
class Mode: DC, AC = range(2)
class Field: ELECTRIC, MAGNETIC, POYNTING = range(3)
MODE_LBL  = {Mode.DC:"DC", Mode.AC:"AC"}
FIELD_LBL = {Field.ELECTRIC:"E", Field.MAGNETIC:"B", Field.POYNTING:"S"}
ALL_FIELDS = frozenset((Field.ELECTRIC, Field.MAGNETIC, Field.POYNTING))


@dataclass(frozen=True)
class CircuitConfiguration:
    mode: int = Mode.DC
    source_voltage: float = 10.0
    load_resistance: float = 5.0
    frequency: float = 1.0
    visible_fields: frozenset = field(default_factory=lambda: ALL_FIELDS)

    @property
    def is_ac(self) -> bool: return self.mode == Mode.AC

    def shows(self, f:int) -> bool: return f in self.visible_fields

    def toggled(self, f:int) -> 'CircuitConfiguration':
        """Copy with field *f* flipped on/off."""
        return replace(self, visible_fields=self.visible_fields ^ {f})

    def with_mode(self, mode:int) -> 'CircuitConfiguration':
        return replace(self, mode=mode)


@dataclass(frozen=True)
class DerivedElectricalState:
    current: float
    power: float
    ac_phase: float
    instantaneous_current: float
    instantaneous_power: float


def _check_positive(name:str, value:float):
    if not math.isfinite(value) or value <= 0:
        raise DomainError(f"{name} must be a finite value > 0, got {value!r}")


def evaluate(config:CircuitConfiguration, t:float) -> DerivedElectricalState:
    """Instantaneous electrical quantities at simulation time *t*.

    DC:  I = V/R, P = V*I, constant in time.
    AC:  phase = sin(2*pi*f*t); I(t) = I*phase; P(t) = P*phase**2 (never negative,
         pulses at twice the line frequency).
    """
    if config.mode not in MODE_LBL:
        raise DomainError(f"mode must be Mode.DC or Mode.AC, got {config.mode!r}")
    _check_positive("load_resistance", config.load_resistance)
    _check_positive("source_voltage", config.source_voltage)
    if config.is_ac:
        _check_positive("frequency", config.frequency)
    if not math.isfinite(t):
        raise DomainError(f"simulation time must be finite, got {t!r}")

    current = config.source_voltage / config.load_resistance
    power = config.source_voltage * current
    if not (math.isfinite(current) and math.isfinite(power)):
        raise DomainError(f"V={config.source_voltage!r}, R={config.load_resistance!r} overflow the current or power")

    if config.is_ac:
        phase = math.sin(2 * math.pi * config.frequency * t)
        inst_p = power * phase * phase
    else:
        phase = 1.0
        inst_p = power

    return DerivedElectricalState(
        current=current,
        power=power,
        ac_phase=phase,
        instantaneous_current=current * phase,
        instantaneous_power=inst_p,
    )


def clamp(value:float, lo:float, hi:float) -> float:
    return max(lo, min(hi, value))
