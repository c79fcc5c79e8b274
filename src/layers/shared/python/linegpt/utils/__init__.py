"""Utility functions and helpers."""

from linegpt.utils.responses import success, error, from_exception
from linegpt.utils.exceptions import (
    FETCH_ERROR_SENTINEL,
    LineGptError,
    SecretFetchError,
    SignatureInvalidError,
    ParseFailedError,
    CompletionError,
    TransportError,
    MarshalError,
    EmptyCompletionError,
    ReplySendError,
)

__all__ = [
    # Response helpers
    "success",
    "error",
    "from_exception",
    # Exceptions
    "FETCH_ERROR_SENTINEL",
    "LineGptError",
    "SecretFetchError",
    "SignatureInvalidError",
    "ParseFailedError",
    "CompletionError",
    "TransportError",
    "MarshalError",
    "EmptyCompletionError",
    "ReplySendError",
]
