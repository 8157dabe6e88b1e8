"""A two-player, turn-based space battleship game for the terminal."""

__version__ = "1.0.0"
__all__ = ["game", "player", "ships"]