"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, drop them (return None), or log them.
"""

from models.events import Event
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def _compact(value) -> str:
    run_id = getattr(value, "run_id", None)
    if run_id is not None:
        return f"run#{run_id}"
    to_css = getattr(value, "to_css", None)
    if callable(to_css):
        return to_css()
    return str(value)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source else "-"
    data_str = ", ".join(f"{k}={_compact(v)}" for k, v in event.to_data().items())

    log.info(f"Event: {event.type.name} from {source_str} | {data_str}")
    return event

