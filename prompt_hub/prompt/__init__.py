"""Prompt client facade.

This subpackage defines the public surface for prompt-hub's prompt cache and
template compiler. It re-exports the key types that callers are expected to
use:

- ``PromptClient`` – stale-while-revalidate entry point (``get``,
  ``invalidate_cache``, ``create_prompt``).
- ``PromptCompiler`` – compiles a cached prompt body against variables.
- ``PromptCache`` / ``RefreshCoordinator`` – the cache and its refresh logic.
- ``LangfusePromptSource`` – HTTP source for the Langfuse prompt API.
- ``RemotePromptSource`` – protocol describing any prompt source.
- ``load_prompt_client`` – helper that builds a client from configuration.

Higher layers should import from this module rather than individual
implementation files to keep the integration surface stable.
"""

from .base import RemotePromptSource
from .cache import CacheEntry, PromptCache
from .client import PromptClient
from .compiler import PromptCompiler
from .errors import (
    ConfigurationError,
    EmptyPromptError,
    InvalidateCacheError,
    PromptApiError,
    PromptCompileError,
    PromptCreateError,
    PromptFetchError,
    PromptHubError,
    UnknownPromptTypeError,
    UnknownVariableError,
)
from .loader import load_prompt_client
from .models import (
    ROLE_SYSTEM,
    ROLE_USER,
    ChatMessage,
    ChatPrompt,
    PromptBody,
    PromptChatList,
    PromptRecord,
    PromptSpec,
    PromptType,
    TextPrompt,
    is_same_prompt,
)
from .refresh import RefreshCoordinator
from .source import LangfusePromptSource

__all__ = [
    "ROLE_SYSTEM",
    "ROLE_USER",
    "CacheEntry",
    "ChatMessage",
    "ChatPrompt",
    "ConfigurationError",
    "EmptyPromptError",
    "InvalidateCacheError",
    "LangfusePromptSource",
    "PromptApiError",
    "PromptBody",
    "PromptCache",
    "PromptChatList",
    "PromptClient",
    "PromptCompileError",
    "PromptCompiler",
    "PromptCreateError",
    "PromptFetchError",
    "PromptHubError",
    "PromptRecord",
    "PromptSpec",
    "PromptType",
    "RefreshCoordinator",
    "RemotePromptSource",
    "TextPrompt",
    "UnknownPromptTypeError",
    "UnknownVariableError",
    "is_same_prompt",
    "load_prompt_client",
]
