"""
Dialogflow adapter.

Wraps the SessionsAsyncClient so the rest of the service only deals with a
project id, a session id and the message text. Built once at startup and
handed to requests through app.state.
"""

import logging
from typing import Any, Optional

from google.cloud import dialogflow

from therapy_chat.config import LANGUAGE_CODE, Settings

logger = logging.getLogger(__name__)


class IntentClient:
    def __init__(self, sessions_client: Any = None, credentials_path: Optional[str] = None):
        if sessions_client is None:
            if credentials_path:
                sessions_client = dialogflow.SessionsAsyncClient.from_service_account_file(credentials_path)
            else:
                sessions_client = dialogflow.SessionsAsyncClient()
        self._sessions = sessions_client

    def session_path(self, project_id: str, session_id: str) -> str:
        return self._sessions.session_path(project_id, session_id)

    async def detect_intent(
        self,
        project_id: str,
        session_id: str,
        text: str,
        language_code: str = LANGUAGE_CODE,
    ) -> Any:
        """Send one message to the agent and return the reply's query_result."""
        request = dialogflow.DetectIntentRequest(
            session=self.session_path(project_id, session_id),
            query_input=dialogflow.QueryInput(
                text=dialogflow.TextInput(text=text, language_code=language_code),
            ),
        )
        response = await self._sessions.detect_intent(request=request)
        return response.query_result


def build_intent_client(settings: Settings) -> IntentClient:
    if settings.google_application_credentials:
        logger.info("Loading Dialogflow credentials from %s", settings.google_application_credentials)
    return IntentClient(credentials_path=settings.google_application_credentials)
