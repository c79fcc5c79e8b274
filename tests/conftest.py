"""Pytest configuration and fixtures."""

import base64
import hashlib
import hmac
import json
import os

import pytest

# Set environment variables before imports
os.environ["AWS_REGION"] = "ap-northeast-1"
os.environ["AWS_DEFAULT_REGION"] = "ap-northeast-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

CHANNEL_SECRET = "test-channel-secret"
CHANNEL_ACCESS_TOKEN = "test-channel-access-token"
OPENAI_API_KEY = "sk-test-key"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "ap-northeast-1"


@pytest.fixture
def ssm_client(aws_credentials):
    """Create a mocked SSM client."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("ssm", region_name="ap-northeast-1")


@pytest.fixture
def sign_body():
    """Compute the x-line-signature value for a body."""
    def _sign(body: str, secret: str = CHANNEL_SECRET) -> str:
        digest = hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).digest()
        return base64.b64encode(digest).decode("utf-8")

    return _sign


def make_text_event(text: str, reply_token: str = "reply-token-1") -> dict:
    """Build a LINE text message event."""
    return {
        "type": "message",
        "mode": "active",
        "timestamp": 1700000000000,
        "webhookEventId": "01HTEST",
        "deliveryContext": {"isRedelivery": False},
        "source": {"type": "user", "userId": "U1234567890"},
        "replyToken": reply_token,
        "message": {"id": "468789", "type": "text", "quoteToken": "q-1", "text": text},
    }


def make_sticker_event(reply_token: str = "reply-token-sticker") -> dict:
    """Build a LINE sticker message event."""
    return {
        "type": "message",
        "mode": "active",
        "timestamp": 1700000000000,
        "source": {"type": "user", "userId": "U1234567890"},
        "replyToken": reply_token,
        "message": {"id": "468790", "type": "sticker", "packageId": "1", "stickerId": "1"},
    }


def make_follow_event() -> dict:
    """Build a LINE follow event."""
    return {
        "type": "follow",
        "mode": "active",
        "timestamp": 1700000000000,
        "source": {"type": "user", "userId": "U1234567890"},
        "replyToken": "reply-token-follow",
    }


@pytest.fixture
def webhook_body():
    """Create a LINE webhook body from a list of events."""
    def _create_body(events: list | None = None) -> str:
        return json.dumps({"destination": "U0000000000", "events": events or []})

    return _create_body


@pytest.fixture
def api_gateway_event(sign_body):
    """Create a sample API Gateway event for the LINE callback."""
    def _create_event(
        body: str = "",
        signature: str | None = None,
        sign: bool = True,
        header_name: str = "x-line-signature",
    ):
        headers = {"Content-Type": "application/json"}
        if signature is not None:
            headers[header_name] = signature
        elif sign:
            headers[header_name] = sign_body(body)

        return {
            "httpMethod": "POST",
            "path": "/callback",
            "headers": headers,
            "body": body,
            "isBase64Encoded": False,
        }

    return _create_event


class LambdaContext:
    """Mock Lambda context."""

    def __init__(self):
        self.function_name = "test-function"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:ap-northeast-1:123456789:function:test"
        self.aws_request_id = "test-request-id"

    def get_remaining_time_in_millis(self):
        return 30000


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context."""
    return LambdaContext()


@pytest.fixture
def text_event():
    """Factory for LINE text message events."""
    return make_text_event


@pytest.fixture
def sticker_event():
    """Factory for LINE sticker message events."""
    return make_sticker_event


@pytest.fixture
def follow_event():
    """Factory for LINE follow events."""
    return make_follow_event
