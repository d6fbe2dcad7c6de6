"""
Config Manager

Reads config/config.yaml, follows its `include:` list, validates the
`reveal` section with pydantic and builds the ColorManager from `colors`.
An unreadable file set is replaced by config/factory_defaults.yaml.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from managers.color_manager import ColorManager
from models.animation import StaggerOptions
from models.color import ThemePalette
from models.config import RevealSettings
from models.errors import ConfigError
from models.region import ObservedRegion
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class ConfigManager:
    """
    Loads the reveal configuration and exposes it as domain objects

    Relative paths resolve against src/, absolute ones are used as given.

    Example:
        config = ConfigManager()
        config.load()

        config.region                  # ObservedRegion("aboutme", 0.5)
        config.stagger_options         # StaggerOptions(interval=0.1, duration=1.5, ...)
        config.color_manager.get_named_rgb("black")
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}

        # set by load()
        self.settings: RevealSettings
        self.color_manager: ColorManager

    def load(self) -> Dict:
        """
        Read, merge and validate the configuration.

        Keys of the main file other than `include` override what the included
        files provide. Any read or YAML error in the main file or an include
        switches to factory defaults; schema problems are not recovered.

        Returns:
            The merged raw data

        Raises:
            ConfigError: Data does not match the schema
            InvalidThreshold / InvalidStaggerConfig: Out-of-range values
        """
        main_path = SRC_DIR / self.config_path
        try:
            self.data = self._read_main(main_path)
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults", path=str(self.factory_defaults_path))
            self.data = _read_yaml(SRC_DIR / self.factory_defaults_path)

        self._initialize_managers()
        return self.data

    def _read_main(self, main_path: Path) -> Dict:
        main_config = _read_yaml(main_path)
        includes = main_config.pop('include', None)
        if includes is None:
            log.info("Using monolithic configuration", path=str(main_path))
            return main_config

        log.info("Using include-based configuration", path=str(main_path), files=len(includes))
        merged = self._load_with_includes(includes, main_path.parent)
        merged.update(main_config)
        return merged

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """Merge the top-level keys of each included file; later files win."""
        merged: Dict = {}

        for filename in include_list:
            try:
                file_data = _read_yaml(config_dir / filename)
            except (OSError, yaml.YAMLError) as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise
            merged.update(file_data)
            log.debug(f"Loaded {filename}", keys=str(list(file_data)))

        log.info("Config merge complete", sections=", ".join(merged))
        return merged

    def _initialize_managers(self):
        """Validate the reveal section and build sub-managers"""
        try:
            self.settings = RevealSettings.model_validate(self.data.get('reveal') or {})
        except ValidationError as ex:
            log.error("Invalid reveal configuration", errors=ex.error_count())
            raise ConfigError(
                "Invalid reveal configuration",
                details={"errors": [
                    {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                    for err in ex.errors()
                ]},
            ) from ex

        self._region = self.settings.to_region()
        self._stagger_options = self.settings.stagger.to_options()

        self.color_manager = ColorManager(self.data.get('colors') or {})
        log.info(
            "Configuration ready",
            threshold=self._region.threshold,
            ease=self._stagger_options.ease_label,
            named_colors=len(self.color_manager.named_colors)
        )

    # ===== Typed access =====

    @property
    def region(self) -> ObservedRegion:
        return self._region

    @property
    def stagger_options(self) -> StaggerOptions:
        return self._stagger_options

    @property
    def fire_once(self) -> bool:
        return self.settings.visibility.fire_once

    @property
    def heading(self) -> str:
        return self.settings.section.heading

    @property
    def fps(self) -> int:
        return self.settings.clock.fps

    @property
    def theme_palette(self) -> ThemePalette:
        return ThemePalette(self.settings.theme.primary, self.settings.theme.background)
