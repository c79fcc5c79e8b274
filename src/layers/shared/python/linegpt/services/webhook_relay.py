"""Webhook relay between LINE and the chat-completion API.

Flow for one webhook call:
    verify signature -> parse events -> for each text event:
    completion -> reply

Failure policy:
- Signature and parse failures abort before any outbound call.
- The first completion failure aborts the rest of the batch.
- Reply failures are logged and do not change the result.
"""

import structlog

from linegpt.config import (
    LINE_CHANNEL_ACCESS_TOKEN_PARAM,
    LINE_CHANNEL_SECRET_PARAM,
    LINE_SIGNATURE_HEADER,
    OPENAI_API_KEY_PARAM,
)
from linegpt.models.webhook import InboundRequest, OtherEvent, TextMessageEvent, parse_events
from linegpt.services.completion_client import CompletionClient
from linegpt.services.line_messaging import LineMessagingService
from linegpt.services.parameter_store import ParameterStore
from linegpt.utils.exceptions import ReplySendError, SignatureInvalidError

logger = structlog.get_logger()


class WebhookRelay:
    """Answers LINE text messages with chat completions."""

    def __init__(
        self,
        channel_secret: str,
        channel_access_token: str,
        api_key: str,
        completion_client: CompletionClient | None = None,
        messaging: LineMessagingService | None = None,
    ):
        """Initialize the relay.

        Args:
            channel_secret: LINE channel secret.
            channel_access_token: LINE channel access token.
            api_key: Completion API key.
            completion_client: Optional completion client (for testing).
            messaging: Optional LINE service (for testing).
        """
        self.api_key = api_key
        self.completion_client = completion_client or CompletionClient()
        self.messaging = messaging or LineMessagingService(channel_secret, channel_access_token)

    @classmethod
    def from_secret_provider(
        cls,
        provider: ParameterStore,
        completion_client: CompletionClient | None = None,
        messaging: LineMessagingService | None = None,
    ) -> "WebhookRelay":
        """Build a relay from secrets read through ``provider.fetch``.

        Raises:
            SecretFetchError: If any secret cannot be read.
        """
        channel_secret = provider.fetch(LINE_CHANNEL_SECRET_PARAM)
        channel_access_token = provider.fetch(LINE_CHANNEL_ACCESS_TOKEN_PARAM)
        api_key = provider.fetch(OPENAI_API_KEY_PARAM)

        return cls(
            channel_secret=channel_secret,
            channel_access_token=channel_access_token,
            api_key=api_key,
            completion_client=completion_client,
            messaging=messaging,
        )

    def handle(self, request: InboundRequest) -> int:
        """Process one webhook request.

        Args:
            request: The inbound request.

        Returns:
            HTTP status code (200 on success).

        Raises:
            SignatureInvalidError: If the signature does not match.
            ParseFailedError: If the body cannot be parsed.
            CompletionError: On the first failed completion.
        """
        signature = request.header(LINE_SIGNATURE_HEADER) or ""

        if not self.messaging.validate_signature(request.body, signature):
            logger.warning(
                "Webhook signature verification failed",
                has_signature=bool(signature),
                path=request.path,
            )
            raise SignatureInvalidError()

        events = parse_events(request.body)

        logger.info("Webhook events parsed", event_count=len(events))

        replied = 0
        for index, event in enumerate(events):
            if isinstance(event, TextMessageEvent):
                self._answer(event, index)
                replied += 1
            elif isinstance(event, OtherEvent):
                logger.debug(
                    "Skipping non-text event",
                    index=index,
                    event_type=event.event_type,
                    message_type=event.message_type,
                )

        logger.info("Webhook processed", event_count=len(events), text_events=replied)

        return 200

    def _answer(self, event: TextMessageEvent, index: int) -> None:
        """Complete one text event and reply to it.

        Completion errors propagate; reply errors are swallowed.
        """
        logger.info("Text message received", index=index, text_length=len(event.text))

        reply_text = self.completion_client.complete(event.text, self.api_key)

        try:
            self.messaging.reply_text(event.reply_token, reply_text)
        except ReplySendError as e:
            logger.warning("Reply not delivered", index=index, error=e.message)
