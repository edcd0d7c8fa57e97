"""
Environment-to-TOML conversion.

Collects environment variables sharing a prefix, derives a section and key
from each name ("__" separates path components) and renders the result as
TOML-style text.

Usage:
    from envtoml import convert

    text = convert("APP_")                      # live process environment
    text = convert("APP_", {"APP_DB__HOST": "localhost"})
    # db section with host = "localhost"
"""

from envtoml.config.settings import ConversionSettings, load_settings
from envtoml.core.collector import Collector, collect, derive_item_path
from envtoml.core.converter import EnvTomlConverter, convert, write_config
from envtoml.core.serializer import Serializer, serialize
from envtoml.errors.errors import (
    ConfigInvariantError,
    DuplicateKeyError,
    EnvTomlError,
    KeyConflictError,
    SettingsError,
    ValueEncodingError,
)
from envtoml.types.types import Config, ConfigItem

__all__ = [
    # Entry points
    "convert",
    "write_config",
    "EnvTomlConverter",
    # Pipeline stages
    "Collector",
    "collect",
    "derive_item_path",
    "Serializer",
    "serialize",
    # Data model
    "Config",
    "ConfigItem",
    "ConversionSettings",
    "load_settings",
    # Errors
    "EnvTomlError",
    "ValueEncodingError",
    "DuplicateKeyError",
    "KeyConflictError",
    "ConfigInvariantError",
    "SettingsError",
]
