"""Score drawings against their prompt with an OpenAI vision model via LangChain."""

import logging
import os
import re
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from doodle_game.errors import ConfigurationError, UpstreamError, ValidationError
from doodle_game.state import ScoreResponse
from shared.logging_utils import configure_logging

configure_logging(extra_values=[os.environ.get("OPENAI_API_KEY")])
logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a strict image scorer. Score the drawing from 1 to 100 based on "
    "closeness to the prompt. Output ONLY the integer, no words."
)

model = os.environ.get("OPENAI_LLM_MODEL", "gpt-4o-mini")
max_output_tokens = int(os.environ.get("JUDGE_MAX_OUTPUT_TOKENS", "32"))

# First standalone run of one to three digits; "1234" has none.
_SCORE_RE = re.compile(r"\b\d{1,3}\b", re.ASCII)

MIN_SCORE = 1
MAX_SCORE = 100
NO_SCORE = 0

_llm: Optional[ChatOpenAI] = None


def parse_score(raw: str) -> int:
    """Return the first 1-3 digit number in ``raw`` clamped to 1..100, or 0."""

    match = _SCORE_RE.search(raw or "")
    if not match:
        return NO_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, int(match.group(0))))


def require_api_key() -> str:
    key = os.environ.get("OPENAI_API_KEY")
    if not key:
        raise ConfigurationError("Missing OPENAI_API_KEY on server")
    return key


def _get_llm() -> ChatOpenAI:
    global _llm
    if _llm is None:
        _llm = ChatOpenAI(model=model, max_tokens=max_output_tokens, api_key=require_api_key())
    return _llm


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return "" if content is None else str(content)


def _upstream_error(exc: Exception) -> UpstreamError:
    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if not isinstance(status, int):
        status = 500
    message = getattr(exc, "message", None) or str(exc) or "Internal Server Error"
    detail = message
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error") if isinstance(body.get("error"), dict) else body
        detail = str(error.get("message") or detail)
    return UpstreamError(message, status_code=status, detail=detail)


def build_messages(text: str, image_url: str) -> list:
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(
            content=[
                {"type": "text", "text": text},
                {"type": "image_url", "image_url": {"url": image_url, "detail": "high"}},
            ]
        ),
    ]


async def judge_drawing(text: str, image_url: str) -> ScoreResponse:
    """Ask the model how well ``image_url`` depicts ``text``.

    Raises :class:`ConfigurationError` without a key, :class:`ValidationError`
    for missing inputs and :class:`UpstreamError` when the model call fails.
    A reply without any number gives ``output == 0``.
    """

    require_api_key()
    if not text or not image_url:
        raise ValidationError('Both "text" (prompt string) and "imageUrl" are required.')

    logger.info("Judging drawing for prompt: %s", text)
    try:
        reply = await _get_llm().ainvoke(build_messages(text, image_url))
    except Exception as exc:
        error = _upstream_error(exc)
        logger.exception("Judge request failed: %s %s", error.status_code, error.message)
        raise error from exc

    raw = _message_text(reply).strip()
    output = parse_score(raw)
    logger.info("Judge raw response: %r | score: %d", raw, output)
    return ScoreResponse(output=output, raw_text=raw)
