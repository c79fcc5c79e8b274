"""LINE Messaging API integration.

Wraps the LINE SDK for the two capabilities the relay needs: checking the
webhook signature and replying to a message event.
"""

import structlog
from linebot.v3.messaging import (
    ApiClient,
    Configuration,
    MessagingApi,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.messaging.exceptions import ApiException
from linebot.v3.webhook import SignatureValidator

from linegpt.config import LINE_MAX_TEXT_LENGTH, LINE_REPLY_TIMEOUT_SECONDS
from linegpt.utils.exceptions import ReplySendError

logger = structlog.get_logger()


class LineMessagingService:
    """Service for the LINE Messaging API."""

    def __init__(
        self,
        channel_secret: str,
        channel_access_token: str,
        reply_timeout: float | None = None,
    ):
        """Initialize the LINE service.

        Args:
            channel_secret: Channel secret used to sign webhooks.
            channel_access_token: Long-lived channel access token.
            reply_timeout: Reply call timeout in seconds.
        """
        self.channel_secret = channel_secret
        self.channel_access_token = channel_access_token
        self.reply_timeout = reply_timeout if reply_timeout is not None else LINE_REPLY_TIMEOUT_SECONDS

    def validate_signature(self, body: str, signature: str) -> bool:
        """Check a webhook body against its x-line-signature value."""
        return SignatureValidator(self.channel_secret).validate(body, signature)

    def reply_text(self, reply_token: str, text: str) -> None:
        """Reply to a message event with a text message.

        Args:
            reply_token: Token from the inbound event.
            text: Reply text. Truncated to LINE's text message limit.

        Raises:
            ReplySendError: If the API call fails.
        """
        if len(text) > LINE_MAX_TEXT_LENGTH:
            logger.info("Truncating reply text", original_length=len(text))
            text = text[:LINE_MAX_TEXT_LENGTH]

        configuration = Configuration(access_token=self.channel_access_token)

        try:
            with ApiClient(configuration) as api_client:
                MessagingApi(api_client).reply_message(
                    ReplyMessageRequest(reply_token=reply_token, messages=[TextMessage(text=text)]),
                    _request_timeout=self.reply_timeout,
                )
        except ApiException as e:
            logger.error(
                "LINE reply failed",
                status=e.status,
                reason=e.reason,
            )
            raise ReplySendError(f"Failed to send reply: {e.reason}", code=str(e.status)) from e
        except Exception as e:
            logger.error("LINE reply failed", error=str(e), error_type=type(e).__name__)
            raise ReplySendError(f"Failed to send reply: {e}") from e

        logger.info("Reply sent", reply_length=len(text))
