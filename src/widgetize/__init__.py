"""Widgetize - semantic component recognition for rendered web pages."""

__version__ = "0.1.0"
