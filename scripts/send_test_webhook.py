#!/usr/bin/env python3
"""Send a signed LINE webhook to a deployed callback endpoint.

Useful for checking a deployment without going through the LINE app. The
reply token is fake, so LINE will reject the reply; the relay logs that and
still returns 200 once the completion succeeds.

Usage:
    export CALLBACK_URL="https://abc123.execute-api.ap-northeast-1.amazonaws.com/Prod/callback"
    export LINE_CHANNEL_SECRET="..."

    python scripts/send_test_webhook.py --text "hello"
    python scripts/send_test_webhook.py --empty          # console verification request
    python scripts/send_test_webhook.py --bad-signature  # expect 401
"""

import argparse
import base64
import hashlib
import hmac
import json
import os
import sys
import time
import uuid

import httpx

CALLBACK_URL = os.environ.get("CALLBACK_URL", "")
LINE_CHANNEL_SECRET = os.environ.get("LINE_CHANNEL_SECRET", "")


def sign(body: str, secret: str) -> str:
    """Compute the x-line-signature header value."""
    digest = hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def build_body(text: str | None) -> str:
    """Build a webhook body with zero or one text message event."""
    events = []
    if text is not None:
        events.append({
            "type": "message",
            "mode": "active",
            "timestamp": int(time.time() * 1000),
            "webhookEventId": uuid.uuid4().hex,
            "deliveryContext": {"isRedelivery": False},
            "source": {"type": "user", "userId": "Utestuser"},
            "replyToken": uuid.uuid4().hex,
            "message": {"id": "1", "type": "text", "quoteToken": "q", "text": text},
        })
    return json.dumps({"destination": "Utestdestination", "events": events})


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a signed LINE webhook")
    parser.add_argument("--url", default=CALLBACK_URL, help="Callback URL")
    parser.add_argument("--secret", default=LINE_CHANNEL_SECRET, help="LINE channel secret")
    parser.add_argument("--text", default="hello", help="Message text")
    parser.add_argument("--empty", action="store_true", help="Send no events")
    parser.add_argument("--bad-signature", action="store_true", help="Sign with a wrong secret")
    args = parser.parse_args()

    if not args.url or not args.secret:
        print("CALLBACK_URL and LINE_CHANNEL_SECRET are required", file=sys.stderr)
        return 2

    body = build_body(None if args.empty else args.text)
    secret = "wrong-secret" if args.bad_signature else args.secret

    headers = {
        "Content-Type": "application/json",
        "x-line-signature": sign(body, secret),
    }

    try:
        response = httpx.post(args.url, content=body, headers=headers, timeout=60.0)
    except httpx.RequestError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    print(f"{response.status_code} {response.text}")
    return 0 if response.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
