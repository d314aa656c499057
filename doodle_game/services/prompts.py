"""Random drawing prompts loaded from a newline-delimited resource."""

from __future__ import annotations

import logging
import os
import random
from importlib import resources
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from urllib import request
from urllib.error import HTTPError, URLError

from ..errors import ResourceLoadError
from ..state.models import DEFAULT_PROMPT

logger = logging.getLogger(__name__)

BUNDLED_PROMPTS_PATH = Path(str(resources.files("doodle_game").joinpath("prompts.txt")))
DEFAULT_PROMPTS_URL = os.environ.get("DOODLE_PROMPTS_URL", BUNDLED_PROMPTS_PATH.as_uri())
DEFAULT_TIMEOUT = float(os.environ.get("DOODLE_PROMPTS_TIMEOUT", "10"))


def parse_prompts(text: str) -> List[str]:
    """Split ``text`` into trimmed prompts, skipping blank lines."""

    return [line.strip() for line in text.splitlines() if line.strip()]


class PromptSource:
    """Keeps the last good prompt list and picks prompts from it."""

    def __init__(
        self,
        url: str = DEFAULT_PROMPTS_URL,
        *,
        default: str = DEFAULT_PROMPT,
        rng: Optional[random.Random] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.last_error: Optional[ResourceLoadError] = None
        self._current = default
        self._prompts: Tuple[str, ...] = ()
        self._rng = rng or random.Random()

    @property
    def current(self) -> str:
        return self._current

    @property
    def prompts(self) -> Sequence[str]:
        return self._prompts

    def _fetch(self) -> List[str]:
        req = request.Request(self.url, headers={"Cache-Control": "no-store"})
        try:
            with request.urlopen(req, timeout=self.timeout) as resp:
                text = resp.read().decode("utf-8")
        except HTTPError as exc:
            raise ResourceLoadError(
                f"HTTP {exc.code} while loading prompts", status_code=exc.code
            ) from exc
        except URLError as exc:
            raise ResourceLoadError(f"Prompt list unreachable: {exc.reason}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            # socket timeouts land here too
            raise ResourceLoadError(f"Prompt list unreadable: {exc}") from exc
        prompts = parse_prompts(text)
        if not prompts:
            raise ResourceLoadError("Prompt list is empty")
        return prompts

    def load(self) -> bool:
        """Refresh the prompt list; on failure keep whatever we had."""

        try:
            prompts = self._fetch()
        except ResourceLoadError as exc:
            self.last_error = exc
            logger.warning("Failed to load prompts from %s: %s", self.url, exc.message)
            return False
        self._prompts = tuple(prompts)
        self.last_error = None
        logger.info("Loaded %d prompts from %s", len(self._prompts), self.url)
        return True

    def next(self) -> str:
        if self._prompts:
            self._current = self._rng.choice(self._prompts)
        return self._current
