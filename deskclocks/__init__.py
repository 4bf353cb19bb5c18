"""Alarm, duration, drag-to-reorder and saved-settings logic for a desktop clocks application."""

__version__ = "0.1.0"