"""Custom exception classes for the LINE relay."""


class LineGptError(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int = 500,
        details: dict | None = None,
    ):
        """Initialize LineGptError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: HTTP status code returned to the webhook caller.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}


# Value returned by the original parameter fetch on failure
FETCH_ERROR_SENTINEL = "Fetch Error"


class SecretFetchError(LineGptError):
    """Raised when a parameter cannot be read from the parameter store."""

    def __init__(self, name: str, original_error: str | None = None):
        """Initialize SecretFetchError.

        Args:
            name: Parameter name that failed to load.
            original_error: Message of the underlying AWS error.
        """
        self.name = name
        self.value = FETCH_ERROR_SENTINEL
        super().__init__(
            message=FETCH_ERROR_SENTINEL,
            error_code="SECRET_FETCH_FAILED",
            status_code=500,
            details={"parameter": name, "original_error": original_error},
        )


class SignatureInvalidError(LineGptError):
    """Raised when the x-line-signature header does not match the body."""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(
            message=message,
            error_code="SIGNATURE_INVALID",
            status_code=401,
        )


class ParseFailedError(LineGptError):
    """Raised when the webhook body is not a valid LINE event payload."""

    def __init__(self, message: str = "Malformed webhook payload", errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(
            message=message,
            error_code="PARSE_FAILED",
            status_code=400,
            details={"errors": self.errors} if self.errors else None,
        )

    @classmethod
    def from_pydantic(cls, exc: Exception) -> "ParseFailedError":
        """Create ParseFailedError from a Pydantic ValidationError."""
        errors = []
        if hasattr(exc, "errors"):
            for error in exc.errors():
                errors.append(
                    {
                        "field": ".".join(str(loc) for loc in error.get("loc", [])),
                        "message": error.get("msg", "Invalid value"),
                        "type": error.get("type", "unknown"),
                    }
                )
        return cls(errors=errors)


class CompletionError(LineGptError):
    """Raised when the chat-completion call does not yield a reply."""

    def __init__(
        self,
        message: str = "Completion request failed",
        error_code: str = "COMPLETION_FAILED",
        details: dict | None = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=502,
            details=details,
        )


class TransportError(CompletionError):
    """Raised when the completion endpoint cannot be reached or times out."""

    def __init__(self, message: str = "Completion request failed", original_error: str | None = None):
        super().__init__(
            message=message,
            error_code="REQUEST_FAILED",
            details={"original_error": original_error} if original_error else None,
        )


class MarshalError(CompletionError):
    """Raised when a completion request or response cannot be (de)serialized."""

    def __init__(self, message: str = "Could not decode completion response", details: dict | None = None):
        super().__init__(
            message=message,
            error_code="MARSHAL_FAILED",
            details=details,
        )


class EmptyCompletionError(CompletionError):
    """Raised when the completion response carries no choices."""

    def __init__(self, status_code: int | None = None, api_error: str | None = None):
        details = {}
        if status_code is not None:
            details["upstream_status"] = status_code
        if api_error:
            details["api_error"] = api_error

        super().__init__(
            message="Completion response contained no choices",
            error_code="EMPTY_COMPLETION",
            details=details if details else None,
        )


class ReplySendError(LineGptError):
    """Raised when the LINE reply call fails."""

    def __init__(self, message: str = "Failed to send reply", code: str | None = None):
        super().__init__(
            message=message,
            error_code="REPLY_SEND_FAILED",
            status_code=502,
            details={"line_status": code} if code else None,
        )
