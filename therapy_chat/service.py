"""
Chat handling: validate, forward to Dialogflow, reshape the reply.

handle_chat never raises for expected failures. It returns a ChatOutcome
holding either the response or the RelayError to report, and main.py turns
that into an HTTP response.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from therapy_chat.config import Settings
from therapy_chat.dialogflow_client import IntentClient
from therapy_chat.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    RelayError,
    ValidationError,
)
from therapy_chat.models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "I apologize, but I didn't understand that. Could you rephrase?"
UNKNOWN_INTENT = "unknown"


@dataclass
class ChatOutcome:
    response: Optional[ChatResponse] = None
    error: Optional[RelayError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _intent_name(query_result: Any) -> Optional[str]:
    intent = getattr(query_result, "intent", None)
    if intent is None:
        return None
    return getattr(intent, "display_name", None) or None


def build_chat_response(query_result: Any, session_id: str) -> ChatResponse:
    confidence = getattr(query_result, "intent_detection_confidence", None) or 0
    return ChatResponse(
        text=getattr(query_result, "fulfillment_text", None) or FALLBACK_TEXT,
        intent=_intent_name(query_result) or UNKNOWN_INTENT,
        confidence=min(max(float(confidence), 0.0), 1.0),
        session_id=session_id,
    )


async def handle_chat(
    request: ChatRequest,
    settings: Settings,
    intent_client: Optional[IntentClient],
) -> ChatOutcome:
    if not request.message:
        return ChatOutcome(error=ValidationError())

    if not settings.google_project_id:
        return ChatOutcome(error=ConfigurationError())

    session_id = request.session_id or settings.default_session_id

    try:
        if intent_client is None:
            raise RuntimeError("Dialogflow client was not initialised at startup")

        logger.info("Sending to Dialogflow: %s", request.message)
        query_result = await intent_client.detect_intent(
            settings.google_project_id,
            session_id,
            request.message,
            settings.language_code,
        )
        logger.info(
            "Dialogflow response: intent=%s fulfillmentText=%s",
            _intent_name(query_result) or "No intent",
            getattr(query_result, "fulfillment_text", None),
        )
        return ChatOutcome(response=build_chat_response(query_result, session_id))
    except Exception as e:
        logger.exception("Error processing request: %s", e)
        return ChatOutcome(error=ExternalServiceError(cause=e))
