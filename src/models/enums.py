"""
Enums for the reveal section core
"""

from enum import Enum, auto


class TargetPhase(Enum):
    """
    Per-target animation phases

    IDLE: Never scheduled (or cancelled), state is frozen
    SCHEDULED: Run accepted, start delay still pending
    ANIMATING: Delay elapsed, eased interpolation active
    SETTLED: Progress reached 1, final state applied
    """
    IDLE = auto()
    SCHEDULED = auto()
    ANIMATING = auto()
    SETTLED = auto()


class RunStatus(Enum):
    """Lifecycle of one AnimationRun"""
    RUNNING = auto()
    COMPLETED = auto()     # Last target settled
    SUPERSEDED = auto()    # Every target taken over by a newer run
    CANCELLED = auto()     # Host cancelled the run explicitly


class RestartMode(Enum):
    """Where a re-run target starts its tween from"""
    INITIAL = auto()   # Jump to from_state (from-to tween)
    CURRENT = auto()   # Continue from the present visual state


class EaseDirection(Enum):
    """Easing direction"""
    IN = "in"
    OUT = "out"
    IN_OUT = "inOut"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    COLOR = auto()       # Color parsing and transformation
    ANIMATION = auto()   # Animation runs and target transitions
    VISIBILITY = auto()  # Region observation and crossings
    THEME = auto()       # Theme palette changes
    EVENT = auto()       # Event bus events and handling
    CLOCK = auto()       # Frame clock loop
    SECTION = auto()     # Section mount/unmount
    SYSTEM = auto()      # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
