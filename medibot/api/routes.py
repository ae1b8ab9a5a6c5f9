"""FastAPI route definitions for the MediBot API."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from medibot.api.schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from medibot.sessions import DEFAULT_SESSION_ID

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGE_REQUIRED_ERROR = "message alanı zorunludur"
SERVER_ERROR = "Sunucu hatası"
NOT_READY_ERROR = "Asistan henüz hazır değil. Lütfen biraz sonra tekrar deneyin."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, http_request: Request):
    """Run one conversation turn and return the assistant's reply.

    ``ChatBot.respond`` makes blocking HTTP calls, so it is offloaded to a
    worker thread to keep the event loop free for other requests.
    """
    if not request.message:
        return error_response(400, MESSAGE_REQUIRED_ERROR)

    bot = getattr(http_request.app.state, "bot", None)
    if bot is None:
        return error_response(503, NOT_READY_ERROR)

    request_id = getattr(http_request.state, "request_id", "?")
    session_id = request.session_id or DEFAULT_SESSION_ID

    try:
        reply = await asyncio.to_thread(bot.respond, request.message, session_id)
    except Exception:
        # Full traceback stays in the server log; the client gets a fixed text.
        logger.exception("[%s] Error processing chat request", request_id)
        return error_response(500, SERVER_ERROR)

    return ChatResponse(reply=reply)
