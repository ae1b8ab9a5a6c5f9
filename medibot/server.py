"""FastAPI server for the MediBot assistant.

Run with:
    uvicorn medibot.server:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from medibot.api.routes import MESSAGE_REQUIRED_ERROR, error_response, router
from medibot.bot import create_chatbot
from medibot.config import CORS_ORIGINS, SERVER_HOST, SERVER_PORT

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Build the ChatBot once and close its HTTP clients on shutdown."""
    logger.info("Starting MediBot…")
    application.state.bot = create_chatbot()
    logger.info("MediBot ready.")
    yield
    bot = getattr(application.state, "bot", None)
    if bot is not None:
        bot.close()


app = FastAPI(
    title="MediBot",
    description="Hastane randevu asistanı — Wit.ai niyet tanıma ve Gemini sohbet desteği.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next) -> Response:
    """Attach a request ID (``X-Request-ID``) for log correlation."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request.state.request_id = request_id
    logger.info("[%s] %s %s", request_id, request.method, request.url.path)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    """Malformed or non-object bodies get the same 400 as a missing message."""
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return error_response(400, MESSAGE_REQUIRED_ERROR)


app.include_router(router)


@app.get("/")
async def root():
    return {
        "service": "MediBot",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    logger.info("Starting MediBot API server on %s:%d", SERVER_HOST, SERVER_PORT)
    uvicorn.run("medibot.server:app", host=SERVER_HOST, port=SERVER_PORT)
