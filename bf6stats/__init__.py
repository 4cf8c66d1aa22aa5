"""Battlefield 6 player stats for Stream Deck."""

__version__ = "1.0.0"
