"""Identifier normalization helpers for generated type, property and enum names."""

from __future__ import annotations

import re

_WORD_SEPARATOR = re.compile(r"[^0-9A-Za-z]+")
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _words(value: str) -> list[str]:
    return [word for word in _WORD_SEPARATOR.split(value) if word]


def to_model_class_name(value: str) -> str:
    """Return an UpperCamelCase class name, keeping inner capitals as written."""
    name = "".join(word[0].upper() + word[1:] for word in _words(value))
    if name and name[0].isdigit():
        return f"_{name}"
    return name


def to_camel_case(value: str) -> str:
    """Return a lowerCamelCase member name."""
    words = _words(value)
    if not words:
        return ""
    first = words[0].lower() if words[0].isupper() else words[0][0].lower() + words[0][1:]
    name = first + "".join(word[0].upper() + word[1:] for word in words[1:])
    if name[0].isdigit():
        return f"_{name}"
    return name


def to_enum_constant(value: str) -> str:
    """Return an UPPER_SNAKE_CASE constant name for an enum value."""
    split = _CASE_BOUNDARY.sub("_", str(value))
    name = "_".join(word.upper() for word in _words(split))
    if not name or name[0].isdigit():
        return f"_{name}"
    return name
