"""Zakat obligations over a lunar-calendar portfolio model."""

__version__ = "0.1.0"
