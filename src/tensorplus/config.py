"""
Display configuration for tensors.

Every tensor owns its own NumberFormat. Copies of a tensor receive a
copy of the format, never a shared reference, so changing how one tensor
prints can never change another.

Formats can be loaded from YAML:

    number_format:
      width: 10
      significant_digits: 4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

import yaml


class ConfigError(Exception):
    """Raised when a display configuration is invalid."""
    pass


@dataclass
class NumberFormat:
    """
    How tensor elements are rendered in grid output.

    Properties:
        width: Cell width in characters
        significant_digits: Maximum significant digits for numbers
        padding: Character used to pad cells on the right
        overflow_char: Repeated to fill cells whose value does not fit
    """

    width: int = 8
    significant_digits: int = 6
    padding: str = " "
    overflow_char: str = "#"

    def __post_init__(self):
        if self.width <= 0:
            raise ConfigError(f"width must be positive, got {self.width}")
        if self.significant_digits <= 0:
            raise ConfigError(f"significant_digits must be positive, got {self.significant_digits}")
        if len(self.padding) != 1 or len(self.overflow_char) != 1:
            raise ConfigError("padding and overflow_char must be single characters")

    def copy(self) -> NumberFormat:
        return replace(self)


def number_format_from_dict(d: Dict[str, Any]) -> NumberFormat:
    known = {f.name for f in fields(NumberFormat)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown number format keys: {sorted(unknown)}")
    try:
        return NumberFormat(**d)
    except TypeError as e:
        raise ConfigError(f"Invalid number format value: {e}") from e


def load_number_format(source: str) -> NumberFormat:
    """
    Load a NumberFormat from YAML text or a YAML file path.

    Args:
        source: Path to an existing file, or the YAML document itself

    Returns:
        NumberFormat with defaults for missing keys

    Raises:
        ConfigError: If the document is not a mapping or has unknown keys
    """
    if os.path.isfile(source):
        with open(source, 'r', encoding='utf-8') as f:
            content = f.read()
    else:
        content = source

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in number format config: {e}") from e

    if data is None:
        return NumberFormat()
    if not isinstance(data, dict):
        raise ConfigError("Number format config must be a mapping")
    if "number_format" in data:
        data = data["number_format"] or {}
        if not isinstance(data, dict):
            raise ConfigError("'number_format' section must be a mapping")
    return number_format_from_dict(data)


__all__ = ["NumberFormat", "ConfigError", "load_number_format", "number_format_from_dict"]
