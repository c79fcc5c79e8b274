"""Inbound webhook request and LINE event models."""

import base64
from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, ValidationError

from linegpt.utils.exceptions import ParseFailedError


class InboundRequest(PydanticBaseModel):
    """HTTP-shaped request handed to the relay, built once per invocation."""

    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    path: str = "/"
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""

    def header(self, name: str) -> str | None:
        """Look up a header value ignoring case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @classmethod
    def from_api_gateway_event(cls, event: dict[str, Any]) -> "InboundRequest":
        """Build a request from an API Gateway proxy event.

        Args:
            event: API Gateway event.

        Returns:
            InboundRequest with the raw (decoded) body.
        """
        body = event.get("body") or ""
        if event.get("isBase64Encoded") and body:
            body = base64.b64decode(body).decode("utf-8", errors="replace")

        headers = event.get("headers", {}) or {}

        return cls(
            method=(event.get("httpMethod") or "POST").upper(),
            path=event.get("path") or "/",
            headers={str(k): str(v) for k, v in headers.items() if v is not None},
            body=body,
        )


class TextMessageEvent(PydanticBaseModel):
    """A message event whose content is plain text."""

    model_config = ConfigDict(frozen=True)

    text: str
    reply_token: str = Field(..., min_length=1)


class OtherEvent(PydanticBaseModel):
    """Any event the relay does not answer (follow, sticker, image, ...)."""

    model_config = ConfigDict(frozen=True)

    event_type: str
    message_type: str | None = None


MessageEvent = TextMessageEvent | OtherEvent


class _RawMessage(PydanticBaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    id: str | None = None
    text: str | None = None


class _RawEvent(PydanticBaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str
    reply_token: str | None = Field(default=None, alias="replyToken")
    message: _RawMessage | None = None

    def to_message_event(self) -> MessageEvent:
        """Narrow the raw event to the relay's event variants."""
        if self.type == "message" and self.message is not None and self.message.type == "text":
            return TextMessageEvent(text=self.message.text, reply_token=self.reply_token)

        return OtherEvent(
            event_type=self.type,
            message_type=self.message.type if self.message else None,
        )


class _WebhookPayload(PydanticBaseModel):
    model_config = ConfigDict(extra="ignore")

    destination: str | None = None
    events: list[_RawEvent]


def parse_events(body: str) -> list[MessageEvent]:
    """Parse a LINE webhook body into events, preserving arrival order.

    The whole payload is parsed before anything is returned, so a malformed
    event anywhere in the batch fails the batch.

    Args:
        body: Raw request body.

    Returns:
        Ordered list of events (possibly empty).

    Raises:
        ParseFailedError: If the body is not valid JSON or an event is malformed.
    """
    try:
        payload = _WebhookPayload.model_validate_json(body)
        return [raw.to_message_event() for raw in payload.events]
    except ValidationError as e:
        raise ParseFailedError.from_pydantic(e) from e
