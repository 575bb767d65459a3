"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from oas_type_model.property_resolution.resolution_settings import RESOLUTION_PROFILES

from .runtime_settings import ApiSourceConfig, Configuration, OutputConfig, ResolutionConfig

OUTPUT_FORMATS = ("yaml", "json")
_SETTING_OVERRIDES = ("exclude_write_only", "treat_read_write_only_as_optional")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        api=_parse_api_section(parsed.get("api"), path.parent),
        resolution=_parse_resolution_section(parsed.get("resolution")),
        output=_parse_output_section(parsed.get("output")),
    )


def _parse_api_section(value: Any, base_path: Path) -> ApiSourceConfig:
    if isinstance(value, str):
        return _non_empty_api_text(value, None)
    section = _require_mapping(value, "api")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("api must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("api.inline must be a string.")
        return _non_empty_api_text(inline, None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("api.path must be a string.")
        api_path = _resolve_path(base_path, path_value)
        if not api_path.exists():
            raise ConfigurationError(f"API specification file not found: {api_path}")
        return _non_empty_api_text(api_path.read_text(encoding="utf-8"), api_path)
    raise ConfigurationError("api requires either inline or path.")


def _non_empty_api_text(text: str, source_path: Path | None) -> ApiSourceConfig:
    if not text.strip():
        raise ConfigurationError("API specification text cannot be empty.")
    return ApiSourceConfig(text=text, source_path=source_path)


def _parse_resolution_section(value: Any) -> ResolutionConfig:
    section = _optional_mapping(value, "resolution")
    profile = _require_non_empty_string(
        section.get("profile", "document"), "resolution.profile"
    ).lower()
    if profile not in RESOLUTION_PROFILES:
        allowed = ", ".join(RESOLUTION_PROFILES)
        raise ConfigurationError(f"resolution.profile must be one of: {allowed}.")

    settings = RESOLUTION_PROFILES[profile]
    overrides = {
        name: _require_bool(section[name], f"resolution.{name}")
        for name in _SETTING_OVERRIDES
        if section.get(name) is not None
    }
    return ResolutionConfig(profile=profile, settings=replace(settings, **overrides))


def _parse_output_section(value: Any) -> OutputConfig:
    section = _optional_mapping(value, "output")
    output_format = _require_non_empty_string(
        section.get("format", "yaml"), "output.format"
    ).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError("output.format must be either yaml or json.")
    return OutputConfig(format=output_format)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
