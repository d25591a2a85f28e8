"""Niklaus B2B ordering session core."""

__version__ = "1.0.0"
