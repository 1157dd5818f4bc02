"""Error types for the prompt subsystem.

Purpose:
- Provide typed exceptions for the three failure domains of the prompt
  client: talking to the remote service (fetch/create), compiling a cached
  prompt against variable bindings, and batch cache invalidation.
- Expose HTTP-oriented context (status code, error body) for diagnosis
  without ever carrying prompt text.

Usage:
- Catch ``PromptFetchError`` around explicit fetches; the facade never lets
  it escape ``PromptClient.get``.
- Catch ``PromptCompileError`` (or its subclasses) around
  ``compile_text``/``compile_chat``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional


class PromptHubError(Exception):
    """Base error for all prompt-hub exceptions."""


class ConfigurationError(PromptHubError):
    """Raised when the client cannot be built from the provided settings."""


class PromptApiError(PromptHubError):
    """Base error for prompt service API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the server (e.g., error body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class PromptFetchError(PromptApiError):
    """Raised when a prompt cannot be fetched or decoded.

    Covers transport failures, non-success statuses, undecodable bodies and
    prompts whose payload does not match their declared type.
    """

    def __init__(
        self,
        name: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(f"Failed to fetch prompt '{name}': {message}", status_code=status_code, details=details)
        self.name = name


class UnknownPromptTypeError(PromptFetchError):
    """Raised when the service returns a prompt type other than text or chat."""

    def __init__(self, name: str, prompt_type: Any) -> None:
        super().__init__(name, f"unknown prompt type: {prompt_type!r}")
        self.prompt_type = prompt_type


class PromptCreateError(PromptApiError):
    """Raised when the service rejects or fails a prompt creation request."""


class PromptCompileError(PromptHubError):
    """Base error for template compilation failures."""


class EmptyPromptError(PromptCompileError):
    """Raised when no usable prompt body is bound for the requested mode."""

    def __init__(self, mode: str) -> None:
        super().__init__(f"active prompt {mode} is empty")
        self.mode = mode


class UnknownVariableError(PromptCompileError):
    """Raised when a supplied variable has no placeholder in the prompt.

    ``key`` is the lexicographically first offending key so the error is
    stable regardless of the bindings' iteration order; ``keys`` lists all of
    them.
    """

    def __init__(self, keys: List[str]) -> None:
        ordered = sorted(keys)
        super().__init__(f"prompt variable with key {ordered[0]} does not exist")
        self.key = ordered[0]
        self.keys = ordered


class InvalidateCacheError(PromptHubError):
    """Raised when at least one prompt of a batch invalidation failed to fetch.

    Prompts that were fetched successfully remain stored in the cache.
    """

    def __init__(self, failures: Mapping[str, PromptFetchError]) -> None:
        self.failures: Dict[str, PromptFetchError] = dict(failures)
        self.names = sorted(self.failures)
        super().__init__(f"failed to prefill cache for prompts: {', '.join(self.names)}")
