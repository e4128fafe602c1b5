"""Configuration module for the conversion backend."""

from tts_convert.config.settings import (
    APISettings,
    AppSettings,
    ConversionSettings,
    GoogleCloudSettings,
    ServerSettings,
    Settings,
    SynthesisSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ServerSettings",
    "GoogleCloudSettings",
    "SynthesisSettings",
    "ConversionSettings",
    "APISettings",
    "Settings",
    "get_settings",
]
