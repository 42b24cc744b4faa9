"""Version information for graph-kit."""

__version__ = "0.1.0"
