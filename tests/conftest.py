import os
import sys
from pathlib import Path

# headless pygame for the surface tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from poynting_canvas import CircuitConfiguration, Mode, RecordingSurface


@pytest.fixture
def dc_config():
    return CircuitConfiguration(mode=Mode.DC, source_voltage=10.0, load_resistance=5.0)


@pytest.fixture
def ac_config():
    return CircuitConfiguration(mode=Mode.AC, source_voltage=10.0, load_resistance=5.0, frequency=1.0)


@pytest.fixture
def surface():
    return RecordingSurface(800, 500)
