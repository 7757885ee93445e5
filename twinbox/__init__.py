"""twinbox: account configuration for two-sided mail synchronization."""

__version__ = "0.1.0"
