"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "oas-type-model.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for oas-type-model.
# Replace every <REQUIRED> placeholder before running validate or describe.
# Remove <OPTIONAL> entries you do not need; defaults apply when they are absent.

api:
  # Provide either an API specification path (relative to this file) or inline YAML/JSON text.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

resolution:
  # document (default) keeps write-only properties; http drops them.
  profile: "document"
  # exclude_write_only: <OPTIONAL>
  # treat_read_write_only_as_optional: <OPTIONAL>

output:
  # yaml (default) or json.
  format: "yaml"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
