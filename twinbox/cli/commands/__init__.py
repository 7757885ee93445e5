"""CLI commands module."""

from . import config

__all__ = ["config"]
