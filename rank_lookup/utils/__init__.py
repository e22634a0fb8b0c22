"""Shared utilities."""

from .config_manager import ConfigManager, DEFAULT_CONFIG_PATH, InvalidConfig

__all__ = ['ConfigManager', 'DEFAULT_CONFIG_PATH', 'InvalidConfig']
