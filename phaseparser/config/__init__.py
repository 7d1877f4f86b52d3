"""
Configuration module for the phase segmentation tools.
"""

from .settings import (
    ApplicationSettings,
    SegmentationSettings,
    get_settings,
    reload_settings,
    settings
)

__all__ = [
    "ApplicationSettings",
    "SegmentationSettings",
    "get_settings",
    "reload_settings",
    "settings"
]
