"""Chat-completion request and response models."""

from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field


class ChatMessage(PydanticBaseModel):
    """A single chat message."""

    role: str
    content: str


class ChatRequest(PydanticBaseModel):
    """Request body for the chat-completions endpoint.

    Every request is single turn: no history is kept between messages, so
    exactly one user message is sent.
    """

    model: str
    messages: list[ChatMessage] = Field(..., min_length=1, max_length=1)

    @classmethod
    def single_turn(cls, model: str, text: str) -> "ChatRequest":
        """Build a request carrying one user message."""
        return cls(model=model, messages=[ChatMessage(role="user", content=text)])


class ChatChoice(PydanticBaseModel):
    """One generated alternative."""

    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatUsage(PydanticBaseModel):
    """Token accounting reported by the API."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ApiErrorBody(PydanticBaseModel):
    """Error object the API returns on non-2xx responses."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    type: str | None = None
    code: str | None = None


class ChatResponse(PydanticBaseModel):
    """Response body of the chat-completions endpoint.

    Only ``choices[0].message.content`` is used for the reply. ``choices``
    defaults to empty so that error bodies still parse and the caller can
    report them.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    object: str | None = None
    created: int | None = None
    choices: list[ChatChoice] = Field(default_factory=list)
    usage: ChatUsage | None = None
    error: ApiErrorBody | None = None

    def first_choice(self) -> ChatChoice | None:
        """Return the first choice, or None when the list is empty."""
        if not self.choices:
            return None
        return self.choices[0]

    def log_context(self) -> dict[str, Any]:
        """Fields safe to attach to a log line."""
        context: dict[str, Any] = {
            "completion_id": self.id,
            "choice_count": len(self.choices),
        }
        if self.usage:
            context["total_tokens"] = self.usage.total_tokens
        return context
