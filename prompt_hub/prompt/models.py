"""Prompt data models.

Pydantic models covering both the domain bodies held in the cache and the
wire contracts of the prompt service:

- ``TextPrompt`` / ``ChatPrompt`` – immutable prompt bodies (``PromptBody``)
  stored in :class:`~prompt_hub.prompt.cache.PromptCache` and bound to
  compilers.
- ``PromptRecord`` – a full prompt resource as returned by ``POST /prompts``;
  unknown fields are ignored. Fetches decode only ``type`` and ``prompt``
  into a ``PromptBody``.
- ``PromptSpec`` – request body for prompt creation.

Guidelines:
- Keep alias mappings aligned with the service's camelCase JSON
  (e.g. ``commitMessage``, ``createdAt``).
- Domain bodies are frozen; compilation always builds new objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

ROLE_SYSTEM = "system"
ROLE_USER = "user"


def _to_camel(s: str) -> str:
    """Convert snake_case to camelCase for JSON aliasing."""
    parts = s.split("_")
    return parts[0] + "".join(p.capitalize() or "_" for p in parts[1:])


class BaseSchema(BaseModel):
    """Shared base for all prompt models.

    - Enables populate_by_name for using either snake_case or camelCase
    - Uses a snake->camel alias generator for JSON interop
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        alias_generator=_to_camel,
    )


class PromptType(str, Enum):
    """Prompt kinds understood by the prompt service."""

    TEXT = "text"
    CHAT = "chat"


class ChatMessage(BaseSchema):
    """A single message of a chat prompt. ``role`` is an opaque string."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: str = Field(..., description="Message role, e.g. 'system' or 'user'.", examples=["system"])
    content: str = Field(
        ..., description="Message content; may contain {{variable}} placeholders.", examples=["You are {{persona}}"]
    )


class PromptChatList(list):
    """Ordered chat messages produced by compiling a chat prompt."""

    def get_system_message(self) -> str:
        """Return the content of the first system message, or ``""``.

        Only suitable for prompts carrying a single system message.
        """
        return self._first_content(ROLE_SYSTEM)

    def get_user_message(self) -> str:
        """Return the content of the first user message, or ``""``.

        Only suitable for prompts carrying a single user message.
        """
        return self._first_content(ROLE_USER)

    def _first_content(self, role: str) -> str:
        for message in self:
            if message.role == role:
                return message.content
        return ""


class TextPrompt(BaseSchema):
    """Immutable text prompt body."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    prompt: str = Field(..., description="Template string.", examples=["Hello {{name}}"])


class ChatPrompt(BaseSchema):
    """Immutable chat prompt body."""

    model_config = ConfigDict(frozen=True)

    type: Literal["chat"] = "chat"
    prompt: Tuple[ChatMessage, ...] = Field(..., description="Ordered chat message templates.")


PromptBody = Annotated[Union[TextPrompt, ChatPrompt], Field(discriminator="type")]


def is_same_prompt(a: Optional[Union[TextPrompt, ChatPrompt]], b: Optional[Union[TextPrompt, ChatPrompt]]) -> bool:
    """Structural equality between two prompt bodies.

    Text bodies compare by value; chat bodies compare by their ordered
    ``(role, content)`` pairs. Bodies of different kinds are never equal.
    """
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, TextPrompt) and isinstance(b, TextPrompt):
        return a.prompt == b.prompt
    if isinstance(a, ChatPrompt) and isinstance(b, ChatPrompt):
        return [(m.role, m.content) for m in a.prompt] == [(m.role, m.content) for m in b.prompt]
    return False


def _check_prompt_shape(prompt_type: PromptType, prompt: Any) -> None:
    if prompt_type == PromptType.TEXT and not isinstance(prompt, str):
        raise ValueError("text prompts must carry a string prompt")
    if prompt_type == PromptType.CHAT and not isinstance(prompt, list):
        raise ValueError("chat prompts must carry a list of messages")


class PromptRecord(BaseSchema):
    """Prompt resource returned by the prompt service.

    Examples:
        A typical chat prompt object returned by the service:

        {
            'id': 'p-1',
            'name': 'support/triage',
            'version': 3,
            'type': 'chat',
            'prompt': [{'role': 'system', 'content': 'You are {{persona}}'}],
            'labels': ['production'],
            'tags': ['support'],
            'commitMessage': 'tighten tone',
            'isActive': True
        }

    References:
        - Returned by ``LangfusePromptSource.create_prompt``.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(default=None, description="Service-side prompt identifier.")
    name: Optional[str] = Field(default=None, description="Prompt name.")
    version: Optional[int] = Field(default=None, description="Prompt version number.")
    type: PromptType = Field(..., description="Prompt kind: 'text' or 'chat'.")
    prompt: Union[str, List[ChatMessage]] = Field(..., description="Template string or chat messages.")
    labels: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    config: Optional[Any] = Field(default=None, description="Free-form model configuration.")
    commit_message: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_by: Optional[str] = None
    project_id: Optional[str] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _prompt_matches_type(self) -> "PromptRecord":
        _check_prompt_shape(self.type, self.prompt)
        return self

    def to_body(self) -> Union[TextPrompt, ChatPrompt]:
        """Map the record onto the immutable body stored in the cache."""
        if isinstance(self.prompt, str):
            return TextPrompt(prompt=self.prompt)
        return ChatPrompt(prompt=tuple(self.prompt))


class PromptSpec(BaseSchema):
    """Request body for ``POST /prompts``.

    Use ``to_payload()`` to serialize with camelCase keys and without unset
    optional fields.
    """

    name: str = Field(..., min_length=1, description="Prompt name.", examples=["support/triage"])
    type: PromptType = Field(..., description="Prompt kind: 'text' or 'chat'.")
    prompt: Union[str, List[ChatMessage]] = Field(..., description="Template string or chat messages.")
    commit_message: Optional[str] = Field(default=None, description="Optional commit message for the version.")
    labels: Optional[List[str]] = Field(default=None, examples=[["production"]])
    tags: Optional[List[str]] = Field(default=None, examples=[["support"]])
    config: Optional[Dict[str, Any]] = Field(default=None, description="Free-form model configuration.")

    @model_validator(mode="after")
    def _prompt_matches_type(self) -> "PromptSpec":
        _check_prompt_shape(self.type, self.prompt)
        return self

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
