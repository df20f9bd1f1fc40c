"""Store-credit lending engine."""

__version__ = "0.1.0"
