"""Core RemotePromptSource protocol used by the prompt subsystem.

This module defines :class:`RemotePromptSource`, a small, runtime-checkable
protocol describing what the cache and refresh layers need from the remote
prompt service. The HTTP implementation lives in
:mod:`prompt_hub.prompt.source`; tests and alternative deployments can plug
in any object with the same shape.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from .models import ChatPrompt, PromptRecord, PromptSpec, TextPrompt


@runtime_checkable
class RemotePromptSource(Protocol):
    """Protocol for remote prompt sources.

    Key design points:

    - **Keyed access**: prompts are addressed by their unique name.
    - **Tagged result**: ``fetch_prompt`` returns either a ``TextPrompt`` or a
      ``ChatPrompt``; anything else the service returns is a fetch error.
    - **Caller deadline**: ``timeout`` overrides the source's default request
      timeout for a single call; ``None`` keeps the default.

    Implementations should never log prompt text through this interface.
    """

    def fetch_prompt(self, name: str, *, timeout: Optional[float] = None) -> Union[TextPrompt, ChatPrompt]:
        """Fetch the current body of prompt `name`.

        Implementations must raise `PromptFetchError` on any failure.
        """

        ...

    def create_prompt(self, spec: PromptSpec) -> PromptRecord:
        """Create a new prompt (or prompt version) and return the stored record."""

        ...
