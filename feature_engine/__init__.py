"""Feature dependency graph and compatibility resolution engine."""

__version__ = "0.1.0"
