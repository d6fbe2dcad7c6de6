import sys
from pathlib import Path

# Add src to path for imports
SRC_DIR = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_DIR))

import pytest
import yaml

from managers.color_manager import ColorManager
from managers.config_manager import ConfigManager
from services.color_transformer import ColorTransformer
from services.event_bus import EventBus


class ManualClock:
    """Deterministic time source shared by animator and frame clock"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture(scope="session")
def colors_data():
    with open(SRC_DIR / "config" / "colors.yaml", "r", encoding="utf-8") as f:
        return yaml.safe_load(f)["colors"]


@pytest.fixture
def color_manager(colors_data):
    return ColorManager(colors_data)


@pytest.fixture
def transformer(color_manager):
    return ColorTransformer(color_manager)


@pytest.fixture
def config_manager():
    config = ConfigManager()
    config.load()
    return config
