"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from oas_type_model.property_resolution.resolution_settings import ResolutionSettings


@dataclass(frozen=True)
class ApiSourceConfig:
    """Normalized specification source."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class ResolutionConfig:
    """Resolution profile with any per-flag overrides applied."""

    profile: str
    settings: ResolutionSettings


@dataclass(frozen=True)
class OutputConfig:
    """Model summary rendering options."""

    format: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    api: ApiSourceConfig
    resolution: ResolutionConfig
    output: OutputConfig
