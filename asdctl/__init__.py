"""Brightness control for USB HID monitors (Apple Studio Display)."""

__version__ = "0.4.0"
