"""
Color Manager - Processes the named color table

Processes color data from ConfigManager (does NOT load files).
Single responsibility: Parse and provide access to named colors.
"""

from typing import Dict, List, Tuple

from models.errors import ConfigError


class ColorManager:
    """
    Named color table (data processor only)

    Responsibilities:
    - Parse the named color table
    - Normalize names (case-insensitive lookup)
    - Validate channel values once at load time

    Does NOT load files - receives data from ConfigManager.

    Example:
        color_mgr = ColorManager({'named': {'black': [0, 0, 0], 'white': [255, 255, 255]}})

        rgb = color_mgr.get_named_rgb("Black")   # (0, 0, 0)
        color_mgr.has_name("rebeccapurple")      # False
    """

    def __init__(self, data: dict):
        """
        Initialize ColorManager with parsed config data

        Args:
            data: Config dict with a 'named' mapping
                  Example: {'named': {'red': [255, 0, 0], 'transparent': [0, 0, 0]}}
        """
        self.data = data
        self._named_colors_cache: Dict[str, Tuple[int, int, int]] = {}
        self._process_data()

    def _process_data(self):
        """Process color data and build the lookup cache"""
        for name, rgb in (self.data.get('named') or {}).items():
            channels = tuple(rgb) if isinstance(rgb, (list, tuple)) else ()
            if len(channels) != 3 or not all(
                isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in channels
            ):
                raise ConfigError(
                    f"Named color '{name}' must be three integers in 0-255",
                    details={"name": name, "value": rgb},
                )
            self._named_colors_cache[str(name).lower()] = channels  # type: ignore[assignment]

    @property
    def named_colors(self) -> Dict[str, Tuple[int, int, int]]:
        """Get all named colors as {name: (r,g,b)} dict"""
        return self._named_colors_cache

    @property
    def names(self) -> List[str]:
        return sorted(self._named_colors_cache)

    def has_name(self, name: str) -> bool:
        return name.strip().lower() in self._named_colors_cache

    def get_named_rgb(self, name: str) -> Tuple[int, int, int]:
        """
        Get RGB for a color name (case-insensitive)

        Raises:
            KeyError: If the name is unknown
        """
        return self._named_colors_cache[name.strip().lower()]
