"""Score accumulation and the color-unlock shop."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..state.models import Session, ShopItem

logger = logging.getLogger(__name__)

SHOP_CATALOG: Sequence[ShopItem] = (
    ShopItem(name="Red", color="red", cost=25),
    ShopItem(name="Orange", color="orange", cost=50),
    ShopItem(name="Yellow", color="yellow", cost=75),
    ShopItem(name="Green", color="lime", cost=100),
    ShopItem(name="Blue", color="deepskyblue", cost=150),
    ShopItem(name="Purple", color="violet", cost=200),
    ShopItem(name="Pink", color="hotpink", cost=250),
)


class Economy:
    """Applies rewards and purchases to a :class:`Session`."""

    def __init__(self, session: Session, catalog: Sequence[ShopItem] = SHOP_CATALOG) -> None:
        self.session = session
        self.catalog = tuple(catalog)

    def find_item(self, color: str) -> Optional[ShopItem]:
        for item in self.catalog:
            if item.color == color:
                return item
        return None

    def is_unlocked(self, color: str) -> bool:
        return color in self.session.unlocked_colors

    def locked_items(self) -> List[ShopItem]:
        return [item for item in self.catalog if not self.is_unlocked(item.color)]

    def reward(self, amount: int) -> int:
        """Add ``amount`` points and return the new score."""

        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"reward must be an integer, got {amount!r}")
        if amount < 0:
            raise ValueError("reward must not be negative")
        self.session.score += amount
        return self.session.score

    def purchase(self, color: str) -> bool:
        """Unlock ``color`` if it is for sale, still locked, and affordable."""

        item = self.find_item(color)
        if item is None:
            logger.debug("No shop item for color %s", color)
            return False
        if self.is_unlocked(color):
            return False
        if self.session.score < item.cost:
            logger.debug("Cannot afford %s: score %d < %d", item.name, self.session.score, item.cost)
            return False
        self.session.score -= item.cost
        self.session.unlocked_colors.add(color)
        logger.info("Unlocked %s for %d points", item.name, item.cost)
        return True

    def set_active_color(self, color: str) -> bool:
        if not self.is_unlocked(color):
            return False
        self.session.active_color = color
        return True
