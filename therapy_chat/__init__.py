"""Therapy Chatbot Backend: relays chat messages to Dialogflow."""

__version__ = "1.0.0"
