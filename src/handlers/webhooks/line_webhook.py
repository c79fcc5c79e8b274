"""LINE webhook handler.

Receives LINE Messaging API webhooks through API Gateway, answers each
text message with a chat completion and replies to the sender.

Secrets (channel secret, channel access token, completion API key) are read
from SSM Parameter Store on every invocation.
"""

from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from linegpt.models.webhook import InboundRequest
from linegpt.services.parameter_store import ParameterStore
from linegpt.services.webhook_relay import WebhookRelay
from linegpt.utils.exceptions import LineGptError
from linegpt.utils.responses import error, from_exception, success

logger = structlog.get_logger()


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle LINE webhook requests.

    Routes:
        POST /callback

    Args:
        event: API Gateway event.
        context: Lambda context.

    Returns:
        API Gateway response dict.
    """
    clear_contextvars()
    bind_contextvars(
        aws_request_id=getattr(context, "aws_request_id", None),
    )

    try:
        request = InboundRequest.from_api_gateway_event(event)

        logger.info(
            "LINE webhook received",
            method=request.method,
            path=request.path,
            body_length=len(request.body),
        )

        relay = WebhookRelay.from_secret_provider(ParameterStore())
        status_code = relay.handle(request)

        return success({"ok": True}, status_code=status_code)

    except LineGptError as e:
        logger.warning(
            "LINE webhook rejected",
            error_code=e.error_code,
            status_code=e.status_code,
            error=e.message,
        )
        return from_exception(e)

    except Exception as e:
        logger.exception("LINE webhook handler error", error=str(e))
        return error("Internal server error", 500)
