from __future__ import annotations

import base64
import logging
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import PromptCreateError, PromptFetchError, UnknownPromptTypeError
from .models import ChatPrompt, PromptBody, PromptRecord, PromptSpec, PromptType, TextPrompt

_PROMPTS_PATH = "/api/public/v2/prompts"
_KNOWN_TYPES = tuple(t.value for t in PromptType)
_BODY_ADAPTER: TypeAdapter[Union[TextPrompt, ChatPrompt]] = TypeAdapter(PromptBody)


class LangfusePromptSource:
    """
    Thin HTTP client for the Langfuse prompt-management API.

    Responsibilities:
    - fetch_prompt
    - create_prompt

    Note: This client does not cache anything. Caching and refresh are handled
    by :class:`~prompt_hub.prompt.refresh.RefreshCoordinator`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        public_key: str,
        secret_key: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._public_key = public_key
        self._secret_key = secret_key
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        raw = f"{self._public_key}:{self._secret_key}".encode()
        return {
            "Content-Type": "application/json",
            "Authorization": "Basic " + base64.b64encode(raw).decode("ascii"),
        }

    def _prompt_url(self, name: str) -> str:
        return f"{self.base_url}{_PROMPTS_PATH}/{quote(name, safe='')}"

    def fetch_prompt(self, name: str, *, timeout: Optional[float] = None) -> Union[TextPrompt, ChatPrompt]:
        url = self._prompt_url(name)
        request_timeout: Any = timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
        try:
            self._logger.debug("LangfusePromptSource.fetch_prompt: GET %s", url)
            r = self._client.get(url, headers=self._headers(), timeout=request_timeout)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PromptFetchError(
                name,
                f"prompt service returned {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise PromptFetchError(name, f"transport error: {type(e).__name__}") from e

        try:
            data = r.json()
        except ValueError as e:
            raise PromptFetchError(name, "response body is not valid JSON", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise PromptFetchError(name, "unexpected response shape", status_code=r.status_code)

        prompt_type = data.get("type")
        if not isinstance(prompt_type, str) or prompt_type not in _KNOWN_TYPES:
            raise UnknownPromptTypeError(name, prompt_type)

        # Only type and prompt matter here; metadata is not validated.
        try:
            body = _BODY_ADAPTER.validate_python({"type": prompt_type, "prompt": data.get("prompt")})
        except ValidationError as e:
            raise PromptFetchError(
                name, f"cannot decode {prompt_type} prompt", status_code=r.status_code, details=e.errors()
            ) from e

        self._logger.debug(
            "LangfusePromptSource.fetch_prompt: resolved name=%s type=%s version=%s",
            name,
            prompt_type,
            data.get("version"),
        )
        return body

    def create_prompt(self, spec: PromptSpec) -> PromptRecord:
        url = f"{self.base_url}{_PROMPTS_PATH}"
        try:
            self._logger.debug("LangfusePromptSource.create_prompt: POST %s name=%s", url, spec.name)
            r = self._client.post(url, headers=self._headers(), json=spec.to_payload())
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PromptCreateError(
                f"Prompt create failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise PromptCreateError(f"Prompt create failed: transport error: {type(e).__name__}") from e

        try:
            record = PromptRecord.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            raise PromptCreateError(
                "Unexpected response shape from create_prompt", status_code=r.status_code, details=r.text
            ) from e
        self._logger.debug("LangfusePromptSource.create_prompt: created name=%s version=%s", record.name, record.version)
        return record

    def close(self) -> None:
        """Close the underlying HTTP client if this source created it."""
        if self._owns_client:
            self._client.close()
