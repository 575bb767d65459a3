"""Property resolution settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolutionSettings:
    """Flags threaded by value through property resolution.

    Copy with ``dataclasses.replace`` for each composition branch; never mutate.
    """

    mark_inherited: bool = False
    treat_read_write_only_as_optional: bool = True
    mark_all_optional: bool = False
    exclude_write_only: bool = False


DOCUMENT_SETTINGS = ResolutionSettings()
HTTP_SETTINGS = ResolutionSettings(exclude_write_only=True)

RESOLUTION_PROFILES = {
    "document": DOCUMENT_SETTINGS,
    "http": HTTP_SETTINGS,
}
