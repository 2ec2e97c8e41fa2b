"""Seller product photo pipeline."""

__version__ = "0.1.0"
