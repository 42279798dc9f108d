from typing import Optional

from fastapi import Request

from therapy_chat.config import Settings, load_settings
from therapy_chat.dialogflow_client import IntentClient


def get_settings(request: Request) -> Settings:
    """Settings validated at startup; read fresh only when none were stored."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
    return settings


def get_intent_client(request: Request) -> Optional[IntentClient]:
    return getattr(request.app.state, "intent_client", None)
