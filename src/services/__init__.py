"""Services layer

ServiceContainer: import from services.service_container
"""

from .event_bus import EventBus
from .color_transformer import ColorTransformer
from .theme_service import ThemeService

__all__ = [
    "EventBus",
    "ColorTransformer",
    "ThemeService",
]
