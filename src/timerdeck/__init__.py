"""TimerDeck: one shared countdown driven by many dial and key surfaces."""

__version__ = "0.1.0"
