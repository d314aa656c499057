import logging
import os
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

import judge_utils
from doodle_game.errors import DoodleGameError, UpstreamError, ValidationError
from doodle_game.services.prompts import BUNDLED_PROMPTS_PATH
from shared.logging_utils import configure_logging


PROMPTS_PATH = Path(os.environ.get("PROMPTS_PATH", BUNDLED_PROMPTS_PATH))

configure_logging(extra_values=[os.environ.get("OPENAI_API_KEY")])
logger = logging.getLogger(__name__)

app = FastAPI(title="Doodle Judge")


@app.exception_handler(DoodleGameError)
async def doodle_error_handler(request: Request, exc: DoodleGameError) -> JSONResponse:
    logger.error("API %s error: %s %s", request.url.path, exc.status_code, exc.message)
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.post("/api/ai")
async def score_drawing(request: Request) -> JSONResponse:
    judge_utils.require_api_key()
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be JSON", detail=str(exc)) from exc
    if not isinstance(payload, dict):
        raise ValidationError('Both "text" (prompt string) and "imageUrl" are required.')

    try:
        result = await judge_utils.judge_drawing(payload.get("text"), payload.get("imageUrl"))
    except DoodleGameError:
        raise
    except Exception as exc:
        logger.exception("Unexpected judge failure")
        raise UpstreamError(str(exc) or "Internal Server Error") from exc
    return JSONResponse({"output": result.output, "raw": result.raw_text})


@app.get("/prompts.txt")
async def prompts_txt() -> PlainTextResponse:
    try:
        text = PROMPTS_PATH.read_text(encoding="utf-8")
    except OSError:
        logger.warning("Prompt list missing at %s", PROMPTS_PATH)
        return PlainTextResponse("", status_code=404)
    return PlainTextResponse(text, headers={"Cache-Control": "no-store"})


@app.get("/")
async def root() -> JSONResponse:
    return JSONResponse({"message": "Doodle Judge service. POST drawings to /api/ai."})


@app.get("/healthz")
async def healthz_get():
    return {"status": "ok"}


@app.head("/healthz", include_in_schema=False)
async def healthz_head():
    return Response(status_code=200)
