"""Event handlers for a drawing session."""

from .controller import SCORE_MULTIPLIER, SessionController

__all__ = ["SCORE_MULTIPLIER", "SessionController"]
