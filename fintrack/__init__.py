"""fintrack - a personal finance tracker with regex validation and search."""

__version__ = "0.1.0"
