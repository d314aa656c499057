"""Tests for rewards and the color shop."""

import random

import pytest

from doodle_game import SHOP_CATALOG, Economy, Session, ShopItem


def test_session_defaults() -> None:
    session = Session()
    assert session.score == 0
    assert session.active_prompt == "Circle"
    assert session.surface_empty is True
    assert session.unlocked_colors == {"white"}
    assert session.active_color == "white"


def test_session_always_contains_white() -> None:
    session = Session(unlocked_colors={"red"}, active_color="blue")
    assert session.unlocked_colors == {"red", "white"}
    assert session.active_color == "white"


def test_session_copies_caller_colors() -> None:
    colors = {"red"}
    session = Session(score=100, unlocked_colors=colors)
    Economy(session).purchase("orange")
    assert colors == {"red"}
    assert session.unlocked_colors == {"white", "red", "orange"}


def test_shop_item_requires_positive_cost() -> None:
    with pytest.raises(ValueError):
        ShopItem(name="Free", color="black", cost=0)


def test_reward_adds_points() -> None:
    economy = Economy(Session())
    assert economy.reward(40) == 40
    assert economy.reward(0) == 40


@pytest.mark.parametrize("amount", [-1, 2.5, True, "10"])
def test_reward_rejects_bad_amounts(amount) -> None:
    economy = Economy(Session(score=5))
    with pytest.raises(ValueError):
        economy.reward(amount)
    assert economy.session.score == 5


def test_purchase_deducts_and_unlocks() -> None:
    session = Session(score=30)
    economy = Economy(session)
    assert economy.purchase("red") is True
    assert session.score == 5
    assert "red" in session.unlocked_colors
    assert economy.find_item("red") not in economy.locked_items()


def test_purchase_is_idempotent_once_unlocked() -> None:
    session = Session(score=100)
    economy = Economy(session)
    assert economy.purchase("red")
    assert economy.purchase("red") is False
    assert economy.purchase("red") is False
    assert session.score == 75


def test_purchase_requires_enough_score() -> None:
    session = Session(score=24)
    economy = Economy(session)
    assert economy.purchase("red") is False
    assert session.score == 24
    assert session.unlocked_colors == {"white"}


def test_purchase_unknown_or_default_color() -> None:
    session = Session(score=1000)
    economy = Economy(session)
    assert economy.purchase("white") is False
    assert economy.purchase("mauve") is False
    assert session.score == 1000


def test_score_never_negative_for_random_purchases() -> None:
    rng = random.Random(42)
    colors = [item.color for item in SHOP_CATALOG] + ["white", "mauve"]
    for _ in range(50):
        session = Session(score=rng.randint(0, 600))
        economy = Economy(session)
        for _ in range(20):
            if rng.random() < 0.3:
                economy.reward(rng.randint(0, 100))
            economy.purchase(rng.choice(colors))
            assert session.score >= 0


def test_set_active_color_only_for_unlocked() -> None:
    session = Session(score=50)
    economy = Economy(session)
    assert economy.set_active_color("red") is False
    assert session.active_color == "white"
    economy.purchase("red")
    assert economy.set_active_color("red") is True
    assert session.active_color == "red"


def test_active_color_always_unlocked() -> None:
    rng = random.Random(3)
    session = Session(score=300)
    economy = Economy(session)
    colors = [item.color for item in SHOP_CATALOG]
    for _ in range(100):
        color = rng.choice(colors)
        if rng.random() < 0.5:
            economy.purchase(color)
        economy.set_active_color(color)
        assert session.active_color in session.unlocked_colors
