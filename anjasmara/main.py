from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from . import config, store as history_store, upstream
from .errors import RelayError, ValidationError
from .logger import logger
from .prompts import (
    BAD_VIDEO_URL_MESSAGE,
    DEFAULT_CAPTION_TONE,
    TRANSCRIPT_STUB_MESSAGE,
    build_caption_prompt,
)
from .schemas import (
    AskRequest,
    AskResponse,
    CaptionRequest,
    CaptionResponse,
    ClearResponse,
)
from .streaming import SSE_HEADERS, StreamingRelay
from .youtube import extract_video_id

STATIC_DIR = Path(__file__).resolve().parent / "static"


def get_store() -> history_store.HistoryLog:
    return history_store.store


app = FastAPI(title="Anjasmara AI Relay", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def require_field(value: Optional[Any], message: str) -> str:
    # falsy values (None, "", 0, false) count as missing
    text = str(value) if value else ""
    if not text:
        raise ValidationError(message)
    return text


@app.get("/")
def root():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/health")
def health():
    return {
        "ok": True,
        "backend": "demo" if config.is_demo() else "groq",
        "has_groq_key": bool(config.groq_key()),
        "history_count": len(get_store()),
    }


@app.post("/ai", response_model=AskResponse)
async def ask(payload: AskRequest):
    prompt = require_field(payload.prompt, "Prompt empty")
    logger.info("POST /ai prompt_len={}", len(prompt))

    reply = await upstream.complete(prompt)

    log = get_store()
    await run_in_threadpool(log.append, log.new_record(reply, prompt=prompt))
    return AskResponse(reply=reply)


@app.get("/ai/stream")
async def ask_stream(prompt: str = Query(default="")):
    prompt = require_field(prompt, "Prompt missing")
    logger.info("GET /ai/stream prompt_len={}", len(prompt))
    log = get_store()

    def remember(reply: str) -> None:
        log.append(log.new_record(reply, prompt=prompt))

    relay = StreamingRelay(
        lambda: upstream.complete(prompt),
        on_reply=remember,
        chunk_size=config.stream_chunk_size(),
        delay=config.stream_delay(),
    )
    return StreamingResponse(relay.events(), media_type="text/event-stream", headers=SSE_HEADERS)


@app.get("/yt/transcript")
def yt_transcript(url: str = Query(default="")):
    url = require_field(url, "url missing")
    if not extract_video_id(url):
        return {"error": BAD_VIDEO_URL_MESSAGE}
    # no transcript is fetched; the endpoint only marks where it would go
    return {"error": TRANSCRIPT_STUB_MESSAGE}


@app.post("/ig/caption", response_model=CaptionResponse)
async def ig_caption(payload: CaptionRequest):
    text = require_field(payload.text, "text missing")
    tone = str(payload.tone) if payload.tone else DEFAULT_CAPTION_TONE
    logger.info("POST /ig/caption tone={} text_len={}", tone, len(text))

    reply = await upstream.complete(build_caption_prompt(text, tone))

    log = get_store()
    await run_in_threadpool(log.append, log.new_record(reply, type="ig_caption", text=text, tone=tone))
    return CaptionResponse(caption=reply)


@app.get("/history")
def history() -> List[Dict[str, Any]]:
    return get_store().list()


@app.post("/history/clear", response_model=ClearResponse)
def history_clear():
    get_store().clear()
    logger.info("History cleared")
    return ClearResponse(ok=True)
