"""Dependencies resolving the per-application services stored on app.state."""

from fastapi import Request

from chatgate.core.config import Settings
from chatgate.services.authenticator import Authenticator
from chatgate.services.completion import CompletionClient
from chatgate.services.conversation_store import ConversationStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def get_conversation_store(request: Request) -> ConversationStore:
    return request.app.state.conversations


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion
