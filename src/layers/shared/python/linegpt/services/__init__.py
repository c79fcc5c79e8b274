"""Service layer for the relay."""

from linegpt.services.completion_client import CompletionClient
from linegpt.services.line_messaging import LineMessagingService
from linegpt.services.parameter_store import ParameterStore, fetch_parameter
from linegpt.services.webhook_relay import WebhookRelay

__all__ = [
    "CompletionClient",
    "LineMessagingService",
    "ParameterStore",
    "fetch_parameter",
    "WebhookRelay",
]
