"""Configuration-setting metadata: descriptors, filters and the sources they come from."""

from .filters import SettingFilter
from .model import Setting, SettingDescription
from .registry import (
    SettingsRegistry,
    SettingsSourceError,
    build_registry,
    describe_class,
    enumerate_settings,
    load_manifest,
    load_pack,
    settings_from_module,
)

__all__ = [
    "Setting",
    "SettingDescription",
    "SettingFilter",
    "SettingsRegistry",
    "SettingsSourceError",
    "build_registry",
    "describe_class",
    "enumerate_settings",
    "load_manifest",
    "load_pack",
    "settings_from_module",
]
