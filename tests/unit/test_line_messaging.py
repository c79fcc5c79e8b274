"""Tests for the LINE Messaging API service."""

from unittest.mock import MagicMock, patch

import pytest
from linebot.v3.messaging.exceptions import ApiException

from linegpt.services.line_messaging import LineMessagingService
from linegpt.utils.exceptions import ReplySendError

CHANNEL_SECRET = "test-channel-secret"


def _service() -> LineMessagingService:
    return LineMessagingService(CHANNEL_SECRET, "test-channel-access-token", reply_timeout=5)


class TestValidateSignature:
    """Tests for signature validation."""

    def test_valid_signature(self, sign_body):
        """A signature computed with the channel secret validates."""
        body = '{"destination":"U1","events":[]}'

        assert _service().validate_signature(body, sign_body(body, CHANNEL_SECRET)) is True

    def test_wrong_secret(self, sign_body):
        """A signature from another secret is rejected."""
        body = '{"destination":"U1","events":[]}'

        assert _service().validate_signature(body, sign_body(body, "other-secret")) is False

    def test_tampered_body(self, sign_body):
        """A body changed after signing is rejected."""
        signature = sign_body('{"events":[]}', CHANNEL_SECRET)

        assert _service().validate_signature('{"events":[{}]}', signature) is False

    def test_empty_signature(self):
        """An absent signature is rejected."""
        assert _service().validate_signature('{"events":[]}', "") is False


class TestReplyText:
    """Tests for reply_text."""

    @patch("linegpt.services.line_messaging.MessagingApi")
    @patch("linegpt.services.line_messaging.ApiClient")
    def test_reply_sends_text_message(self, mock_api_client_cls, mock_messaging_cls):
        """The reply is addressed to the reply token with a text message."""
        mock_api = MagicMock()
        mock_messaging_cls.return_value = mock_api

        _service().reply_text("reply-token-1", "hi")

        mock_api.reply_message.assert_called_once()
        args, kwargs = mock_api.reply_message.call_args
        request = args[0]
        assert request.reply_token == "reply-token-1"
        assert len(request.messages) == 1
        assert request.messages[0].text == "hi"
        assert kwargs["_request_timeout"] == 5

    @patch("linegpt.services.line_messaging.MessagingApi")
    @patch("linegpt.services.line_messaging.ApiClient")
    def test_reply_truncates_long_text(self, mock_api_client_cls, mock_messaging_cls):
        """Replies longer than LINE's limit are cut to 5000 characters."""
        mock_api = MagicMock()
        mock_messaging_cls.return_value = mock_api

        _service().reply_text("reply-token-1", "a" * 6000)

        request = mock_api.reply_message.call_args[0][0]
        assert len(request.messages[0].text) == 5000

    @patch("linegpt.services.line_messaging.MessagingApi")
    @patch("linegpt.services.line_messaging.ApiClient")
    def test_api_exception(self, mock_api_client_cls, mock_messaging_cls):
        """SDK API errors become ReplySendError."""
        mock_api = MagicMock()
        mock_api.reply_message.side_effect = ApiException(status=400, reason="Invalid reply token")
        mock_messaging_cls.return_value = mock_api

        with pytest.raises(ReplySendError) as exc_info:
            _service().reply_text("expired-token", "hi")

        assert exc_info.value.details["line_status"] == "400"
        assert "Invalid reply token" in exc_info.value.message

    @patch("linegpt.services.line_messaging.MessagingApi")
    @patch("linegpt.services.line_messaging.ApiClient")
    def test_transport_exception(self, mock_api_client_cls, mock_messaging_cls):
        """Network failures also become ReplySendError."""
        mock_api = MagicMock()
        mock_api.reply_message.side_effect = ConnectionError("connection reset")
        mock_messaging_cls.return_value = mock_api

        with pytest.raises(ReplySendError):
            _service().reply_text("reply-token-1", "hi")
