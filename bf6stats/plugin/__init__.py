"""Stream Deck action logic."""

from .controller import ButtonContext, StatDisplayController

__all__ = ["ButtonContext", "StatDisplayController"]
