"""Sell-to-cover calculator for option exercises and RSU releases."""

__version__ = "0.1.0"
