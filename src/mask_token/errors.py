"""Exceptions raised by mask-token.

Masking fails closed: anything that cannot be masked safely raises
instead of returning the input.
"""

from __future__ import annotations


class MaskTokenError(Exception):
    """Base class for all mask-token errors."""


class InvalidArgumentError(MaskTokenError, ValueError):
    """Empty or wrongly typed argument (e.g. a blank prefix or label)."""


class InvalidOptionError(MaskTokenError, ValueError):
    """A masking option is outside its allowed range."""


class UnknownPresetError(MaskTokenError, KeyError):
    """Requested preset is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown preset: {self.name!r}"


class ConfigError(MaskTokenError, ValueError):
    """Malformed configuration mapping."""
