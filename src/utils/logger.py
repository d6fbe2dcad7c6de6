from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
from models.enums import LogLevel, LogCategory


# === TERMINAL STYLES ===
class Colors:
    """ANSI SGR sequences used by the console renderer"""
    RESET = '\033[0m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.COLOR: Colors.BRIGHT_MAGENTA,
    LogCategory.ANIMATION: Colors.BRIGHT_YELLOW,
    LogCategory.VISIBILITY: Colors.BRIGHT_GREEN,
    LogCategory.THEME: Colors.MAGENTA,
    LogCategory.EVENT: Colors.BRIGHT_CYAN,
    LogCategory.CLOCK: Colors.BRIGHT_BLUE,
    LogCategory.SECTION: Colors.BLUE,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

# level -> (rank, marker, style)
LEVEL_STYLES: Dict[LogLevel, Tuple[int, str, str]] = {
    LogLevel.DEBUG: (0, '·', Colors.DIM),
    LogLevel.INFO: (1, '✓', Colors.GREEN),
    LogLevel.WARN: (2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: (3, '✗', Colors.RED),
}

CATEGORY_WIDTH = max(len(c.name) for c in LogCategory)
DETAIL_INDENT = " " * len("[00:00:00] ")


class Logger:
    """
    Console logger that prints one headline per call plus a small tree of
    key/value details underneath it.

        [14:23:45] ANIMATION  ✓ Run started
                   ├─ run_id: 3
                   └─ targets: 9

    Lines are handed to a writer callable (print by default), so tests and
    the demo can capture them.
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors
        self._writer: Callable[[str], None] = print

    def set_writer(self, writer: Callable[[str], None]) -> None:
        """Send rendered lines to `writer` instead of stdout."""
        self._writer = writer

    def enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level][0] >= LEVEL_STYLES[self.min_level][0]

    def _paint(self, text: str, style: str) -> str:
        return f"{style}{text}{Colors.RESET}" if self.use_colors else text

    def _headline(self, category: LogCategory, level: LogLevel, message: str) -> str:
        _, marker, style = LEVEL_STYLES[level]
        stamp = datetime.now().strftime('[%H:%M:%S]')
        label = self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE))
        return f"{stamp} {label} {self._paint(marker, style)} {self._paint(message, style)}"

    def _tree(self, details: Iterable[str]) -> Iterator[str]:
        items = list(details)
        for position, text in enumerate(items, start=1):
            branch = "└─" if position == len(items) else "├─"
            yield f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {text}"

    def render(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[List[str]] = None,
        **fields
    ) -> List[str]:
        """
        Build the output lines for one record without writing them.

        Free-form `details` come first, followed by `fields` rendered as
        `key: value` in call order.
        """
        extra = list(details or []) + [f"{key}: {value}" for key, value in fields.items()]
        return [self._headline(category, level, message), *self._tree(extra)]

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[List[str]] = None,
        **fields
    ) -> None:
        if not self.enabled_for(level):
            return
        for line in self.render(category, message, level, details, **fields):
            self._writer(line)

    def debug(self, category: LogCategory, message: str, **fields): self.log(category, message, LogLevel.DEBUG, **fields)
    def info(self, category: LogCategory, message: str, **fields): self.log(category, message, LogLevel.INFO, **fields)
    def warn(self, category: LogCategory, message: str, **fields): self.log(category, message, LogLevel.WARN, **fields)
    def error(self, category: LogCategory, message: str, **fields): self.log(category, message, LogLevel.ERROR, **fields)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Shorthand over Logger with the category filled in; each module keeps one at import time."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    @property
    def category(self) -> LogCategory:
        return self._category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **fields):
        self._base.log(category or self._category, message, level, **fields)

    def debug(self, message: str, **fields): self.log(message, LogLevel.DEBUG, **fields)
    def info(self, message: str, **fields): self.log(message, LogLevel.INFO, **fields)
    def warn(self, message: str, **fields): self.log(message, LogLevel.WARN, **fields)
    def error(self, message: str, **fields): self.log(message, LogLevel.ERROR, **fields)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Change level and colors on the shared instance in place.

    Module-level BoundLoggers hold a reference to it, so they see the change.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
