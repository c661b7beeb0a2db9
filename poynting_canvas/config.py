# =======================================================================
# config.py  –  Settings loader for the Poynting canvas (config.cfg)
# =======================================================================
from __future__ import annotations
import configparser
import os
from dataclasses import dataclass

CONFIG_FILE = "config.cfg"

# Default values (fallback if config file is missing or invalid)
DEFAULT_BASE_WIN_W = 960
DEFAULT_BASE_WIN_H = 600
DEFAULT_INFO_H = 90
DEFAULT_SIZE_SCALE = 1.0
DEFAULT_FONT_SCALE = 1.0
DEFAULT_FPS = 60

DEFAULT_TIME_STEP = 0.02
DEFAULT_WIDTH_FRACTION = 0.7
DEFAULT_HEIGHT_FRACTION = 0.5
DEFAULT_CORNER_RADIUS = 30.0
DEFAULT_ELECTRON_COUNT = 40
DEFAULT_ELECTRON_DRIFT = 0.5      # speed = I_inst * drift
DEFAULT_ELECTRON_STEP = 0.1       # perimeter fraction per unit time at unit speed
DEFAULT_GLOW_POWER = 50.0         # K in intensity = min(|P| / K, 1)
DEFAULT_PARTICLE_POOL = 100
DEFAULT_E_SPACING = 40.0
DEFAULT_B_SPACING = 60.0
DEFAULT_POYNTING_THRESHOLD = 0.5  # watts; endpoint arrows fade out below this

DEFAULT_VOLTAGE = 10.0
DEFAULT_RESISTANCE = 5.0
DEFAULT_FREQUENCY = 1.0
DEFAULT_V_RANGE = (1.0, 24.0)
DEFAULT_R_RANGE = (1.0, 50.0)
DEFAULT_F_RANGE = (0.1, 5.0)


@dataclass(frozen=True)
class Settings:
    """Everything read from config.cfg. Immutable once loaded."""
    # [GUI]
    win_w: int = DEFAULT_BASE_WIN_W
    win_h: int = DEFAULT_BASE_WIN_H
    info_h: int = DEFAULT_INFO_H
    size_scale: float = DEFAULT_SIZE_SCALE
    font_scale: float = DEFAULT_FONT_SCALE
    fps: int = DEFAULT_FPS
    # [SIMULATION]
    time_step: float = DEFAULT_TIME_STEP
    width_fraction: float = DEFAULT_WIDTH_FRACTION
    height_fraction: float = DEFAULT_HEIGHT_FRACTION
    corner_radius: float = DEFAULT_CORNER_RADIUS
    electron_count: int = DEFAULT_ELECTRON_COUNT
    electron_drift: float = DEFAULT_ELECTRON_DRIFT
    electron_step: float = DEFAULT_ELECTRON_STEP
    glow_power: float = DEFAULT_GLOW_POWER
    particle_pool: int = DEFAULT_PARTICLE_POOL
    e_spacing: float = DEFAULT_E_SPACING
    b_spacing: float = DEFAULT_B_SPACING
    poynting_threshold: float = DEFAULT_POYNTING_THRESHOLD
    # [CIRCUIT]
    voltage: float = DEFAULT_VOLTAGE
    resistance: float = DEFAULT_RESISTANCE
    frequency: float = DEFAULT_FREQUENCY
    v_range: tuple[float, float] = DEFAULT_V_RANGE
    r_range: tuple[float, float] = DEFAULT_R_RANGE
    f_range: tuple[float, float] = DEFAULT_F_RANGE

    @property
    def window_size(self) -> tuple[int, int]:
        return int(self.win_w*self.size_scale), int(self.win_h*self.size_scale)


def _range(section, key:str, default:tuple[float, float]) -> tuple[float, float]:
    """Reads a 'lo, hi' pair. Raises ValueError on anything that is not a positive ascending pair."""
    raw = section.get(key)
    if raw is None: return default
    parts = [float(p) for p in raw.split(",")]
    if len(parts) != 2 or not (0 < parts[0] < parts[1]):
        raise ValueError(f"{key} must be 'lo, hi' with 0 < lo < hi, got {raw!r}")
    return parts[0], parts[1]


def load_config(path:str = CONFIG_FILE) -> Settings:
    """Reads configuration from *path*. Missing file, missing sections or bad values fall back to defaults."""
    if not os.path.exists(path):
        return Settings()

    config = configparser.ConfigParser()
    try:
        config.read(path, encoding="utf-8")
        values = {}

        # --- GUI Settings ---
        if 'GUI' in config:
            gui = config['GUI']
            values.update(
                win_w=gui.getint('base_win_w', DEFAULT_BASE_WIN_W),
                win_h=gui.getint('base_win_h', DEFAULT_BASE_WIN_H),
                info_h=gui.getint('info_h', DEFAULT_INFO_H),
                size_scale=gui.getfloat('size_scale', DEFAULT_SIZE_SCALE),
                font_scale=gui.getfloat('font_scale', DEFAULT_FONT_SCALE),
                fps=gui.getint('fps', DEFAULT_FPS),
            )
        else:
            print(f"Warning: '{path}' has no '[GUI]' section. Using default GUI settings.")

        # --- Simulation Settings ---
        if 'SIMULATION' in config:
            sim = config['SIMULATION']
            values.update(
                time_step=sim.getfloat('time_step', DEFAULT_TIME_STEP),
                width_fraction=sim.getfloat('width_fraction', DEFAULT_WIDTH_FRACTION),
                height_fraction=sim.getfloat('height_fraction', DEFAULT_HEIGHT_FRACTION),
                corner_radius=sim.getfloat('corner_radius', DEFAULT_CORNER_RADIUS),
                electron_count=sim.getint('electron_count', DEFAULT_ELECTRON_COUNT),
                electron_drift=sim.getfloat('electron_drift', DEFAULT_ELECTRON_DRIFT),
                electron_step=sim.getfloat('electron_step', DEFAULT_ELECTRON_STEP),
                glow_power=sim.getfloat('glow_power', DEFAULT_GLOW_POWER),
                particle_pool=sim.getint('particle_pool', DEFAULT_PARTICLE_POOL),
                e_spacing=sim.getfloat('e_spacing', DEFAULT_E_SPACING),
                b_spacing=sim.getfloat('b_spacing', DEFAULT_B_SPACING),
                poynting_threshold=sim.getfloat('poynting_threshold', DEFAULT_POYNTING_THRESHOLD),
            )

        # --- Circuit defaults and host-side clamp ranges ---
        if 'CIRCUIT' in config:
            circ = config['CIRCUIT']
            values.update(
                voltage=circ.getfloat('voltage', DEFAULT_VOLTAGE),
                resistance=circ.getfloat('resistance', DEFAULT_RESISTANCE),
                frequency=circ.getfloat('frequency', DEFAULT_FREQUENCY),
                v_range=_range(circ, 'voltage_range', DEFAULT_V_RANGE),
                r_range=_range(circ, 'resistance_range', DEFAULT_R_RANGE),
                f_range=_range(circ, 'frequency_range', DEFAULT_F_RANGE),
            )

        settings = Settings(**values)
        if settings.time_step <= 0 or settings.glow_power <= 0 or settings.e_spacing <= 0 or settings.b_spacing <= 0:
            raise ValueError("time_step, glow_power and field spacings must be positive")
        return settings

    except (configparser.Error, ValueError) as e:
        print(f"Error reading or parsing '{path}': {e}. Using default settings.")
        return Settings()
