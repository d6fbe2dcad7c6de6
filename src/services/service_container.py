"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from typing import Callable, Optional
import time

from engine.frame_clock import FrameClock
from engine.stagger_animator import StaggerAnimator
from engine.visibility_trigger import VisibilityTrigger
from managers.color_manager import ColorManager
from managers.config_manager import ConfigManager
from services.color_transformer import ColorTransformer
from services.event_bus import EventBus
from services.theme_service import ThemeService
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container for all core services and managers.

    Controllers receive the container instead of wiring services themselves.

    Services included:
    - event_bus: Pub-sub event routing for decoupling components
    - color_transformer: Color spec -> RGBA conversion
    - theme_service: Live theme pair and derived selection colors
    - visibility_trigger: Region visibility observation
    - animator: Staggered letter reveal
    - frame_clock: Tick source driving the animator

    Managers included:
    - config_manager: Loaded and validated configuration
    - color_manager: Named color table

    Usage:
        config = ConfigManager()
        config.load()
        services = build_service_container(config)

        controller = RevealSectionController(services)
        controller.mount()
    """

    config_manager: ConfigManager
    color_manager: ColorManager
    color_transformer: ColorTransformer
    theme_service: ThemeService
    event_bus: EventBus
    visibility_trigger: VisibilityTrigger
    animator: StaggerAnimator
    frame_clock: FrameClock


def build_service_container(
    config_manager: ConfigManager,
    event_bus: Optional[EventBus] = None,
    clock: Callable[[], float] = time.monotonic,
) -> ServiceContainer:
    """
    Wire every service from a loaded ConfigManager

    Args:
        config_manager: ConfigManager after load()
        event_bus: Shared bus (new one if omitted)
        clock: Time source shared by animator and frame clock
    """
    event_bus = event_bus or EventBus()
    settings = config_manager.settings

    transformer = ColorTransformer(config_manager.color_manager)
    theme_service = ThemeService(
        transformer,
        event_bus,
        palette=config_manager.theme_palette,
        background_opacity=settings.selection.background_opacity,
        foreground_opacity=settings.selection.foreground_opacity,
        class_name=settings.selection.class_name,
    )

    services = ServiceContainer(
        config_manager=config_manager,
        color_manager=config_manager.color_manager,
        color_transformer=transformer,
        theme_service=theme_service,
        event_bus=event_bus,
        visibility_trigger=VisibilityTrigger(event_bus, fire_once=config_manager.fire_once),
        animator=StaggerAnimator(config_manager.stagger_options, clock=clock, event_bus=event_bus),
        frame_clock=FrameClock(fps=config_manager.fps, clock=clock),
    )
    services.frame_clock.add_tick_listener(services.animator.tick)
    log.info("Service container ready")
    return services
