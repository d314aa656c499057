"""Draw-to-score game: stroke capture, prompts, judging and the color shop."""

from .errors import (
    ConfigurationError,
    DoodleGameError,
    ResourceLoadError,
    UpstreamError,
    ValidationError,
)
from .handlers import SessionController
from .rendering import DrawingSurface
from .services import SHOP_CATALOG, Economy, PromptSource, ScoringGateway
from .state import GatewayFailure, Point, ScoreResponse, Session, SessionPhase, ShopItem

__all__ = [
    "SHOP_CATALOG",
    "ConfigurationError",
    "DoodleGameError",
    "DrawingSurface",
    "Economy",
    "GatewayFailure",
    "Point",
    "PromptSource",
    "ResourceLoadError",
    "ScoreResponse",
    "ScoringGateway",
    "Session",
    "SessionController",
    "SessionPhase",
    "ShopItem",
    "UpstreamError",
    "ValidationError",
]
