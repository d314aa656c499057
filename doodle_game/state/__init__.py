"""State primitives for a drawing session."""

from .models import (
    DEFAULT_COLOR,
    DEFAULT_PROMPT,
    GatewayFailure,
    Point,
    ScoreResponse,
    Session,
    SessionPhase,
    ShopItem,
)

__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_PROMPT",
    "GatewayFailure",
    "Point",
    "ScoreResponse",
    "Session",
    "SessionPhase",
    "ShopItem",
]
