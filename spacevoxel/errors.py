"""Failure types raised by the generators."""
from __future__ import annotations


class ProcgenError(RuntimeError):
    """Base class for generation failures surfaced to the caller."""


class InvalidArgumentError(ProcgenError, ValueError):
    """Raised when a required input is missing or malformed."""


class ConfigurationMissingError(ProcgenError, LookupError):
    """Raised when a referenced template or profile cannot be found."""


__all__ = ["ProcgenError", "InvalidArgumentError", "ConfigurationMissingError"]
