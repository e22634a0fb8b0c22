"""
Configuration management for the lookup core.

Loads config/resolver_config.yaml over built-in defaults and checks
the values before the engine or session store sees them.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Default config path relative to project root
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / 'config' / 'resolver_config.yaml'


class InvalidConfig(ValueError):
    """Raised when a loaded configuration fails validation."""

    def __init__(self, path: Optional[Path], errors: list[str]):
        self.path = path
        self.errors = errors
        source = path or "defaults"
        super().__init__(f"Invalid configuration ({source}): " + "; ".join(errors))


class ConfigManager:
    """
    Lookup configuration backed by a YAML file.

    Each section of the file is merged over DEFAULT_CONFIG, so a
    partial file only overrides the keys it names.
    """

    DEFAULT_CONFIG = {
        'thresholds': {
            'fuzzy_accept': 0.72,
        },
        'matching': {
            'min_acronym_token_length': 2,
            'substring_autofill': False,
        },
        'session': {
            'ttl_seconds': 300,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: YAML file to load (defaults only if None or missing)
        """
        self.config_path = Path(config_path) if config_path else None

        if self.config_path and self.config_path.exists():
            self.config = self.load_config(self.config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Read a YAML file and merge it over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config {path}: {e}")
            raise

        if not loaded:
            logger.warning(f"Empty config file at {path}, using defaults")
            return copy.deepcopy(self.DEFAULT_CONFIG)

        logger.info(f"Loaded configuration from {path}")
        return self._merge_with_defaults(loaded)

    def get_threshold(self, name: str) -> float:
        """Get a value from the thresholds section."""
        return self._get('thresholds', name)

    def get_matching_param(self, name: str) -> Any:
        """Get a value from the matching section."""
        return self._get('matching', name)

    def get_session_param(self, name: str) -> Any:
        """Get a value from the session section."""
        return self._get('session', name)

    def validate_config(self) -> list[str]:
        """
        Check every known key for type and range.

        Returns:
            Error messages, empty when the configuration is usable
        """
        errors = []

        fuzzy = self.config.get('thresholds', {}).get('fuzzy_accept')
        if not _is_number(fuzzy) or not 0.0 <= fuzzy <= 1.0:
            errors.append(f"thresholds.fuzzy_accept must be a number in [0, 1], got {fuzzy!r}")

        matching = self.config.get('matching', {})
        length = matching.get('min_acronym_token_length')
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            errors.append(
                f"matching.min_acronym_token_length must be a positive integer, got {length!r}"
            )
        autofill = matching.get('substring_autofill')
        if not isinstance(autofill, bool):
            errors.append(f"matching.substring_autofill must be true or false, got {autofill!r}")

        ttl = self.config.get('session', {}).get('ttl_seconds')
        if not _is_number(ttl) or ttl <= 0:
            errors.append(f"session.ttl_seconds must be a positive number, got {ttl!r}")

        return errors

    def require_valid(self) -> None:
        """
        Raise if validate_config() reports anything.

        Raises:
            InvalidConfig: With every validation error attached
        """
        errors = self.validate_config()
        if errors:
            for message in errors:
                logger.error(message)
            raise InvalidConfig(self.config_path, errors)

    def _get(self, section: str, name: str) -> Any:
        values = self.config.get(section)
        if not isinstance(values, dict) or name not in values:
            raise KeyError(f"'{section}.{name}' not found in configuration")
        return values[name]

    def _merge_with_defaults(self, loaded: dict) -> dict:
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
