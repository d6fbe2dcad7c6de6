"""
main_asyncio.py — Demo entry point for the About-me reveal
-----------------------------------------------------------

Responsible for:
- loading configuration and wiring services (Dependency Injection)
- mounting the section controller and starting the frame clock
- replaying a short scroll script against the section
- clean shutdown on Ctrl +C or fatal errors
"""

import sys

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import List, Tuple

from controllers import RevealSectionController
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from services.middleware import log_middleware
from services.service_container import build_service_container
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)
configure_logger(LogLevel.INFO)

# (visible ratio, seconds to wait afterwards)
SCROLL_SCRIPT: List[Tuple[float, float]] = [
    (0.3, 0.3),   # partly visible, below threshold
    (0.6, 1.0),   # crosses 0.5: reveal starts
    (0.2, 0.3),   # scrolled away, run keeps going
    (0.55, 2.5),  # back in view: second reveal
]


def format_letters(controller: RevealSectionController) -> str:
    parts = []
    for index, letter in enumerate(controller.letters):
        state = controller.letter_states[index]
        parts.append(f"{letter!r}:{state.opacity:.2f}/{state.offset_y:+.1f}")
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main():
    """Main async entry point (dependency injection and scroll replay)."""

    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config_manager.load()

    services = build_service_container(config_manager)
    services.event_bus.add_middleware(log_middleware)

    controller = RevealSectionController(services)

    try:
        with controller.mounted():
            await services.frame_clock.start()

            for ratio, pause in SCROLL_SCRIPT:
                controller.update_ratio(ratio)
                await asyncio.sleep(pause)
                log.info(f"ratio={ratio:.2f} | {format_letters(controller)}")

            log.info("Selection stylesheet:\n" + controller.selection_css)
            services.theme_service.set_palette("rebeccapurple", "#fafafa")
            log.info("Selection stylesheet after theme change:\n" + controller.selection_css)
            log.info("Revealed", done=controller.is_revealed(), runs=len(controller.runs))

    finally:
        await services.frame_clock.stop()
        await services.event_bus.drain()
        log.info("Shutdown complete", **services.frame_clock.get_metrics())


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Interrupted")
