"""Client for the judge endpoint that scores a drawing against its prompt."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Dict, Optional, Union

from urllib import request
from urllib.error import HTTPError, URLError

from ..errors import UpstreamError
from ..state.models import GatewayFailure, ScoreResponse

logger = logging.getLogger(__name__)

DEFAULT_SCORING_URL = os.environ.get("DOODLE_SCORING_URL", "http://127.0.0.1:8000/api/ai")
DEFAULT_TIMEOUT = float(os.environ.get("DOODLE_SCORING_TIMEOUT", "30"))

ScoreResult = Union[ScoreResponse, GatewayFailure]


def _coerce_output(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_score_payload(payload: Any) -> ScoreResponse:
    """Validate a ``{"output", "raw"}`` body from the judge endpoint."""

    if not isinstance(payload, dict):
        raise UpstreamError("Scoring response is not an object", status_code=502)
    output = _coerce_output(payload.get("output"))
    if output is None or not 0 <= output <= 100:
        raise UpstreamError(
            "Received invalid score from judge",
            status_code=502,
            detail=repr(payload.get("output")),
        )
    raw = payload.get("raw")
    return ScoreResponse(output=output, raw_text=raw if isinstance(raw, str) else "")


def _failure_from_http_error(exc: HTTPError) -> GatewayFailure:
    message = f"HTTP {exc.code}"
    detail: Optional[str] = None
    try:
        body: Dict[str, Any] = json.loads(exc.read() or b"{}")
    except (ValueError, OSError):
        body = {}
    if isinstance(body, dict):
        message = str(body.get("error") or message)
        detail = body.get("detail")
    return GatewayFailure(status=exc.code or 500, message=message, detail=detail)


class ScoringGateway:
    """Posts ``{"text", "imageUrl"}`` to the judge and reads back a score.

    :meth:`score` never raises. Every problem is folded into a
    :class:`GatewayFailure`, with status 500 when nothing better is known.
    """

    def __init__(self, url: str = DEFAULT_SCORING_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.url = url
        self.timeout = timeout

    async def score(self, prompt_text: str, image_url: str) -> ScoreResult:
        return await asyncio.to_thread(self._post, prompt_text, image_url)

    def _post(self, prompt_text: str, image_url: str) -> ScoreResult:
        body = json.dumps({"text": prompt_text, "imageUrl": image_url}).encode("utf-8")
        req = request.Request(
            self.url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout) as resp:
                payload = json.loads(resp.read())
        except HTTPError as exc:
            failure = _failure_from_http_error(exc)
            logger.error("Judge returned %s: %s", failure.status, failure.message)
            return failure
        except URLError as exc:
            logger.error("Judge unreachable at %s: %s", self.url, exc.reason)
            return GatewayFailure(status=500, message=f"Judge unreachable: {exc.reason}")
        except (OSError, ValueError) as exc:
            logger.error("Judge call failed: %s", exc)
            return GatewayFailure(status=500, message=str(exc) or "Judge call failed")

        try:
            result = parse_score_payload(payload)
        except UpstreamError as exc:
            logger.warning("%s: %s", exc.message, exc.detail)
            return GatewayFailure(status=exc.status_code, message=exc.message, detail=exc.detail)
        logger.info("Judge scored %r as %d (raw: %r)", prompt_text, result.output, result.raw_text)
        return result
