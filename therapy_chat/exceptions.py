from typing import Optional


class RelayError(Exception):
    status_code = 500
    error = "Internal server error"
    text: Optional[str] = None
    intent: Optional[str] = None

    def __init__(self, error: Optional[str] = None, cause: Optional[BaseException] = None):
        if error is not None:
            self.error = error
        self.cause = cause
        super().__init__(self.error)

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.text is not None:
            body["text"] = self.text
        if self.intent is not None:
            body["intent"] = self.intent
        return body


class ValidationError(RelayError):
    status_code = 400
    error = "Message is required"


class ConfigurationError(RelayError):
    status_code = 500
    error = "Dialogflow project ID not configured"


class ExternalServiceError(RelayError):
    """Any failure talking to Dialogflow. Network, auth, quota and bad replies all land here."""

    status_code = 500
    error = "Failed to process message"
    text = "I'm having trouble connecting right now. Please try again in a moment."
    intent = "error"
