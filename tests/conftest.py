"""Shared fixtures for the drawing game tests."""

import random
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from doodle_game import DrawingSurface, PromptSource, ScoreResponse, SessionController


@pytest.fixture
def anyio_backend() -> str:
    """Run AnyIO tests on asyncio only."""

    return "asyncio"


@pytest.fixture
def prompts_file(tmp_path: Path) -> Path:
    path = tmp_path / "prompts.txt"
    path.write_text("Cat\n\n  House  \nTree\n", encoding="utf-8")
    return path


@pytest.fixture
def prompt_source(prompts_file: Path) -> PromptSource:
    return PromptSource(prompts_file.as_uri(), rng=random.Random(7))


@pytest.fixture
def fake_gateway() -> SimpleNamespace:
    return SimpleNamespace(score=AsyncMock(return_value=ScoreResponse(output=40, raw_text="40")))


@pytest.fixture
def controller(prompt_source: PromptSource, fake_gateway: SimpleNamespace) -> SessionController:
    prompt_source.load()
    return SessionController(
        surface=DrawingSurface(200, 100),
        prompts=prompt_source,
        gateway=fake_gateway,
        score_multiplier=1,
    )
