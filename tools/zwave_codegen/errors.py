"""Exceptions raised by the command class generator."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Raised when generation cannot continue at all."""


class InputError(GenerationError):
    """Raised when the command class document cannot be opened or parsed."""


class OutputError(GenerationError):
    """Raised when the output directory cannot be prepared or written."""


class ConfigError(ValueError):
    """Raised when generator settings are missing or invalid."""
