"""changeline: configuration change timelines for managed databases."""

__version__ = "0.1.0"
