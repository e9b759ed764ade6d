"""Exceptions raised by epicharts."""
from __future__ import annotations


class EpichartsError(ValueError):
    """Base error for chart-data preparation."""


class ValidationError(EpichartsError):
    """Raised when a required input is missing or malformed."""
