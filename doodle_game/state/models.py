"""Dataclasses describing a drawing session and the values flowing through it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Set

DEFAULT_PROMPT = "Circle"
DEFAULT_COLOR = "white"


class Point(NamedTuple):
    """A pointer position in logical (CSS-pixel) coordinates."""

    x: float
    y: float


class SessionPhase(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    SUBMITTING = "submitting"


@dataclass(frozen=True, slots=True)
class ShopItem:
    """A palette color that can be bought with score."""

    name: str
    color: str
    cost: int

    def __post_init__(self) -> None:
        if self.cost <= 0:
            raise ValueError(f"cost of {self.name} must be positive")


@dataclass(frozen=True, slots=True)
class ScoreResponse:
    """A judged score together with the text the judge produced.

    ``output`` is in ``[1, 100]``; ``0`` is the sentinel for a response with
    no usable number in it.
    """

    output: int
    raw_text: str = ""

    @property
    def is_sentinel(self) -> bool:
        return self.output == 0


@dataclass(frozen=True, slots=True)
class GatewayFailure:
    """Non-throwing failure signal returned by the scoring gateway."""

    status: int
    message: str
    detail: Optional[str] = None


@dataclass(slots=True)
class Session:
    """Mutable state of a single player's drawing session."""

    score: int = 0
    active_prompt: str = DEFAULT_PROMPT
    surface_empty: bool = True
    unlocked_colors: Set[str] = field(default_factory=lambda: {DEFAULT_COLOR})
    active_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        self.unlocked_colors = set(self.unlocked_colors) | {DEFAULT_COLOR}
        if self.active_color not in self.unlocked_colors:
            self.active_color = DEFAULT_COLOR
