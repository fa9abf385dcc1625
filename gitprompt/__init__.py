"""Condensed git status for shell prompts."""

__version__ = "0.3.0"
