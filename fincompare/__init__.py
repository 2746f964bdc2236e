"""Airline financial ratio engine and side-by-side comparison."""

__version__ = "0.1.0"
