"""Session controller tying stroke capture, prompts, judging and the shop together."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from ..rendering import DrawingSurface
from ..services import Economy, PromptSource, ScoringGateway
from ..state import GatewayFailure, Point, ScoreResponse, Session, SessionPhase

logger = logging.getLogger(__name__)

SCORE_MULTIPLIER = int(os.environ.get("DOODLE_SCORE_MULTIPLIER", "1"))

_UNSAFE_FILENAME_CHARS = str.maketrans({os.sep: "_", "/": "_", "\\": "_", "\0": ""})


class SessionController:
    """Single-player drawing session driven by discrete input events.

    All mutations happen on the event loop that calls these methods. The only
    suspension point is :meth:`submit`, and at most one submission is in
    flight at a time; pointer input keeps working while it is.
    """

    def __init__(
        self,
        *,
        surface: Optional[DrawingSurface] = None,
        prompts: Optional[PromptSource] = None,
        gateway: Optional[ScoringGateway] = None,
        session: Optional[Session] = None,
        score_multiplier: int = SCORE_MULTIPLIER,
    ) -> None:
        if score_multiplier < 0:
            raise ValueError("score multiplier must not be negative")
        self.surface = surface or DrawingSurface()
        self.prompts = prompts or PromptSource()
        self.gateway = gateway or ScoringGateway()
        self.session = session or Session(active_prompt=self.prompts.current)
        self.economy = Economy(self.session)
        self.score_multiplier = score_multiplier
        self._submitting = False
        self._generation = 0
        self._sync_surface()

    # State ------------------------------------------------------------
    @property
    def phase(self) -> SessionPhase:
        if self._submitting:
            return SessionPhase.SUBMITTING
        if self.surface.is_drawing:
            return SessionPhase.DRAWING
        return SessionPhase.IDLE

    @property
    def can_submit(self) -> bool:
        return not self.session.surface_empty and not self._submitting

    def _sync_surface(self) -> None:
        self.session.surface_empty = self.surface.is_empty

    async def start(self) -> str:
        """Load the prompt list and draw the first prompt."""

        await asyncio.to_thread(self.prompts.load)
        self.session.active_prompt = self.prompts.next()
        return self.session.active_prompt

    # Pointer input ----------------------------------------------------
    def pointer_down(self, point: Point) -> None:
        self.surface.begin_stroke(point, self.session.active_color)
        self._sync_surface()

    def pointer_move(self, point: Point) -> bool:
        return self.surface.extend_stroke(point)

    def pointer_up(self) -> None:
        self.surface.end_stroke()

    pointer_leave = pointer_up

    def resize(self, width: float, height: float, device_pixel_ratio: Optional[float] = None) -> None:
        self.surface.resize(width, height, device_pixel_ratio)
        self._sync_surface()

    # Actions ----------------------------------------------------------
    def clear(self) -> None:
        self.surface.clear()
        self._sync_surface()

    def reset(self) -> None:
        """Zero the score, wipe the surface and pick a new prompt."""

        self._generation += 1
        self.session.score = 0
        self.clear()
        self.session.active_prompt = self.prompts.next()
        logger.info("Session reset; new prompt %r", self.session.active_prompt)

    async def submit(self) -> Optional[int]:
        """Send the drawing to the judge and apply the outcome.

        Returns the number of points awarded, or ``None`` when nothing was
        awarded (blank surface, submission already running, judge failure or
        a reset while the call was in flight).
        """

        if not self.can_submit:
            logger.debug(
                "Submit ignored (empty=%s, submitting=%s)",
                self.session.surface_empty,
                self._submitting,
            )
            return None

        prompt = self.session.active_prompt
        image_url = self.surface.to_data_url()
        generation = self._generation
        self._submitting = True
        try:
            result: Union[ScoreResponse, GatewayFailure] = await self.gateway.score(prompt, image_url)
        except Exception:
            logger.exception("Submit failed")
            return None
        finally:
            self._submitting = False

        if isinstance(result, GatewayFailure):
            logger.error("Submit failed: %s %s (%s)", result.status, result.message, result.detail)
            return None
        if result.is_sentinel:
            logger.warning("Judge gave no usable score for %r: %r", prompt, result.raw_text)
            return None
        if generation != self._generation:
            logger.info("Discarding score for %r; session was reset", prompt)
            return None

        points = result.output * self.score_multiplier
        self.economy.reward(points)
        self.session.active_prompt = self.prompts.next()
        self.clear()
        logger.info("Awarded %d points for %r; score %d", points, prompt, self.session.score)
        return points

    # Shop -------------------------------------------------------------
    def purchase(self, color: str) -> bool:
        return self.economy.purchase(color)

    def select_color(self, color: str) -> bool:
        return self.economy.set_active_color(color)

    # Export -----------------------------------------------------------
    def image_filename(self) -> str:
        name = self.session.active_prompt.translate(_UNSAFE_FILENAME_CHARS).strip() or "drawing"
        return f"{name}.png"

    def export_image(self) -> Tuple[str, bytes]:
        return self.image_filename(), self.surface.to_png_bytes()

    def save_image(self, directory: Union[str, Path] = ".") -> Path:
        return self.surface.save(Path(directory) / self.image_filename())
