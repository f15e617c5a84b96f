"""Falling-block puzzle engine with a gymnasium environment and a pygame host."""

__version__ = "0.1.0"
