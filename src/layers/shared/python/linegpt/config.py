"""Environment-driven configuration.

Values are read once at import time, the same way every Lambda in the stack
picks up its settings from the function environment.
"""

import os

# Parameter Store
AWS_REGION = os.environ.get("AWS_REGION", "ap-northeast-1")
SSM_TIMEOUT_SECONDS = float(os.environ.get("SSM_TIMEOUT_SECONDS", "10"))

LINE_CHANNEL_SECRET_PARAM = os.environ.get("LINE_CHANNEL_SECRET_PARAM", "LINE_CHANNEL_SECRET")
LINE_CHANNEL_ACCESS_TOKEN_PARAM = os.environ.get(
    "LINE_CHANNEL_ACCESS_TOKEN_PARAM", "LINE_CHANNEL_ACCESS_TOKEN"
)
OPENAI_API_KEY_PARAM = os.environ.get("OPENAI_API_KEY_PARAM", "OPEN_API_KEY")

# Chat completion
OPENAI_API_URL = os.environ.get("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo")
COMPLETION_TIMEOUT_SECONDS = float(os.environ.get("COMPLETION_TIMEOUT_SECONDS", "30"))

# LINE Messaging API
LINE_SIGNATURE_HEADER = "x-line-signature"
LINE_REPLY_TIMEOUT_SECONDS = float(os.environ.get("LINE_REPLY_TIMEOUT_SECONDS", "10"))
LINE_MAX_TEXT_LENGTH = 5000
