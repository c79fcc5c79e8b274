"""OpenAI chat-completions client.

Sends one single-turn prompt per call and returns the assistant's text.
"""

import time

import httpx
import structlog
from pydantic import ValidationError

from linegpt.config import COMPLETION_TIMEOUT_SECONDS, OPENAI_API_URL, OPENAI_MODEL
from linegpt.models.chat import ChatRequest, ChatResponse
from linegpt.utils.exceptions import EmptyCompletionError, MarshalError, TransportError

logger = structlog.get_logger()


class CompletionClient:
    """Client for the chat-completions endpoint."""

    def __init__(
        self,
        api_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the completion client.

        Args:
            api_url: Endpoint URL. Falls back to OPENAI_API_URL.
            model: Model identifier. Falls back to OPENAI_MODEL.
            timeout: Request timeout in seconds. Falls back to COMPLETION_TIMEOUT_SECONDS.
            transport: Optional httpx transport (for testing).
        """
        self.api_url = api_url or OPENAI_API_URL
        self.model = model or OPENAI_MODEL
        self.timeout = timeout if timeout is not None else COMPLETION_TIMEOUT_SECONDS
        self.transport = transport

    def build_request(self, prompt_text: str) -> ChatRequest:
        """Build the request body for a prompt."""
        return ChatRequest.single_turn(self.model, prompt_text)

    def _read_body(self, response: httpx.Response, deadline: float) -> bytes:
        """Read the streamed body, giving up once ``deadline`` has passed.

        Raises:
            TransportError: If the body is still arriving at the deadline.
        """
        if time.monotonic() >= deadline:
            raise self._timed_out()

        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() >= deadline:
                raise self._timed_out()

        return b"".join(chunks)

    def _timed_out(self) -> TransportError:
        logger.warning("Completion request timed out", timeout=self.timeout)
        return TransportError("Completion request timed out", original_error=f"exceeded {self.timeout}s")

    def complete(self, prompt_text: str, api_key: str) -> str:
        """Ask the model for a reply to ``prompt_text``.

        Args:
            prompt_text: The user's message.
            api_key: Bearer token for the API.

        Returns:
            Content of the first choice.

        Raises:
            TransportError: If the endpoint is unreachable or the call times out.
            MarshalError: If the request or response cannot be (de)serialized.
            EmptyCompletionError: If the response has no choices.
        """
        try:
            payload = self.build_request(prompt_text).model_dump_json()
        except ValueError as e:
            raise MarshalError("Could not encode completion request") from e

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        logger.info("Requesting completion", model=self.model, prompt_length=len(prompt_text))

        # The timeout bounds the whole round trip, not each socket operation.
        deadline = time.monotonic() + self.timeout

        try:
            with httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self.transport) as client:
                with client.stream("POST", self.api_url, content=payload, headers=headers) as response:
                    status_code = response.status_code
                    is_success = response.is_success
                    body = self._read_body(response, deadline)
        except httpx.TimeoutException as e:
            logger.warning("Completion request timed out", timeout=self.timeout)
            raise TransportError("Completion request timed out", original_error=str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("Completion request failed", error=str(e))
            raise TransportError(original_error=str(e)) from e

        if not is_success:
            logger.warning("Completion endpoint returned error status", status_code=status_code)

        try:
            chat_response = ChatResponse.model_validate_json(body)
        except ValidationError as e:
            raise MarshalError(details={"upstream_status": status_code}) from e

        choice = chat_response.first_choice()
        if choice is None:
            api_error = chat_response.error.message if chat_response.error else None
            logger.warning(
                "Completion returned no choices",
                status_code=status_code,
                api_error=api_error,
            )
            raise EmptyCompletionError(status_code=status_code, api_error=api_error)

        logger.info(
            "Completion received",
            finish_reason=choice.finish_reason,
            reply_length=len(choice.message.content),
            **chat_response.log_context(),
        )

        return choice.message.content
