"""
Therapy Chatbot Backend
Handles: health check, chat relay to Dialogflow
Port: 3000 (PORT)

- Dialogflow client is built once in the lifespan and injected per request
- Chat logic returns a ChatOutcome; this module only maps it to HTTP
- Every error leaves as JSON with an error and/or text field, never a traceback
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from therapy_chat import __version__
from therapy_chat.config import Settings, configure_logging, load_settings
from therapy_chat.dependencies import get_intent_client, get_settings
from therapy_chat.dialogflow_client import IntentClient, build_intent_client
from therapy_chat.exceptions import ValidationError
from therapy_chat.models import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from therapy_chat.service import ChatOutcome, handle_chat

logger = logging.getLogger(__name__)


def _status(value: Optional[str]) -> str:
    return "✓ Set" if value else "✗ Missing"


# ── App ───────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    try:
        app.state.intent_client = build_intent_client(settings)
    except Exception:
        # chat requests will answer with the external-service error body
        logger.exception("Could not create Dialogflow client")
        app.state.intent_client = None

    base_url = f"http://localhost:{settings.port}"
    logger.info("Server running on port %s", settings.port)
    logger.info("Health check: %s", base_url)
    logger.info("Chat endpoint: %s/chat", base_url)
    logger.info("Configuration:")
    logger.info("- Project ID: %s", _status(settings.google_project_id))
    logger.info("- Credentials: %s", _status(settings.google_application_credentials))
    yield


app = FastAPI(title="Therapy Chatbot Backend", version=__version__, lifespan=lifespan)
app.state.settings = load_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=app.state.settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def to_http_response(outcome: ChatOutcome) -> JSONResponse:
    if outcome.ok:
        return JSONResponse(status_code=200, content=outcome.response.model_dump(by_alias=True))
    return JSONResponse(status_code=outcome.error.status_code, content=outcome.error.to_body())


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.get("/", response_model=HealthResponse)
async def health():
    return HealthResponse(
        message="Therapy Chatbot Backend is running!",
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


@app.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    message: ChatRequest,
    settings: Settings = Depends(get_settings),
    intent_client: Optional[IntentClient] = Depends(get_intent_client),
):
    outcome = await handle_chat(message, settings, intent_client)
    return to_http_response(outcome)


# ── Error handlers ────────────────────────────────────────────────────────────

@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    body = exc.body if isinstance(exc.body, dict) else {}
    if body.get("message"):
        error = ValidationError("Invalid request body")
    else:
        error = ValidationError()
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    content = {"error": exc.detail}
    if exc.status_code == 404:
        content["message"] = "Available endpoints: GET /, POST /chat"
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def server_error(request: Request, exc: Exception):
    logger.error("Unhandled error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "text": "Something went wrong. Please try again."},
    )


def run():
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)


if __name__ == "__main__":
    run()
