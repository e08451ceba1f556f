"""Configuration module for walletsim."""

from walletsim.config.schema import Settings
from walletsim.config.validator import SettingsValidator

__all__ = ["Settings", "SettingsValidator"]
