"""Version information for statize."""

__version__ = "0.1.0"
