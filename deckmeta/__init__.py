"""Deck Meta Analyzer - environment-adaptive meta scoring for competitive decks."""

__version__ = "0.1.0"
