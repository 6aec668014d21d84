"""Game logic for group chat bots: marriages, sign-in scores, tarot and more."""

__version__ = "0.1.0"

__all__ = [
    "marriage",
    "score",
    "reborn",
    "sleep",
    "tarot",
    "nativewife",
]