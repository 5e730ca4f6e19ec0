"""Embed static assets into a generated source module."""

__version__ = "0.1.0"
