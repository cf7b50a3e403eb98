"""boxwine — box up Wine apps and turn them into Mac apps."""

__version__ = "0.1.0"
