"""Localizer host: per-request locale resolution and culture switching."""

__version__ = "1.0.0"
