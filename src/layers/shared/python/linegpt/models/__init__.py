"""Data models for the relay."""

from linegpt.models.chat import (
    ApiErrorBody,
    ChatChoice,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatUsage,
)
from linegpt.models.webhook import (
    InboundRequest,
    MessageEvent,
    OtherEvent,
    TextMessageEvent,
    parse_events,
)

__all__ = [
    # Chat
    "ApiErrorBody",
    "ChatChoice",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatUsage",
    # Webhook
    "InboundRequest",
    "MessageEvent",
    "OtherEvent",
    "TextMessageEvent",
    "parse_events",
]
