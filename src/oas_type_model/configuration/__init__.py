"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import OUTPUT_FORMATS, ConfigurationError, load_configuration
from .runtime_settings import ApiSourceConfig, Configuration, OutputConfig, ResolutionConfig

__all__ = [
    "ApiSourceConfig",
    "Configuration",
    "OutputConfig",
    "ResolutionConfig",
    "ConfigurationError",
    "OUTPUT_FORMATS",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
