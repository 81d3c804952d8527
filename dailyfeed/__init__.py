"""Daily news feed synchronizer with a persistent local cache."""

__version__ = "0.1.0"
