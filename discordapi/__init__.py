"""Chat command routing and Discord REST wrappers."""

__version__ = "0.3.0"
