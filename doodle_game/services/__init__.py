"""Service layer for the drawing game."""

from .economy import SHOP_CATALOG, Economy
from .gateway import ScoringGateway, parse_score_payload
from .prompts import PromptSource, parse_prompts

__all__ = [
    "SHOP_CATALOG",
    "Economy",
    "PromptSource",
    "ScoringGateway",
    "parse_prompts",
    "parse_score_payload",
]
