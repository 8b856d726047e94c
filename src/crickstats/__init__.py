"""Derived statistics for the fantasy-cricket insights dashboard."""

__version__ = "0.1.0"
