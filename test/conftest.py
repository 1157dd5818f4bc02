from __future__ import annotations

from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import httpx
import pytest

from prompt_hub.prompt import ChatMessage, ChatPrompt, PromptFetchError, PromptRecord, PromptSpec, TextPrompt

# Load dotenv files early so test fixtures can read settings via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except Exception:
    pass


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
    )

    orig_sync = httpx._client.Client.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)


class InlineExecutor(Executor):
    """Executor running submitted work immediately on the calling thread."""

    def __init__(self) -> None:
        self.submitted: List[Any] = []
        self._shutdown = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        if self._shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted.append(args)
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self._shutdown = True


class DeferredExecutor(Executor):
    """Executor that queues work until ``run_all`` is called."""

    def __init__(self) -> None:
        self.pending: List[Any] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        self.pending.append((fn, args, kwargs, future))
        return future

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for fn, args, kwargs, future in pending:
            future.set_result(fn(*args, **kwargs))


class FakePromptSource:
    """In-memory RemotePromptSource.

    ``prompts`` maps names to bodies or to an exception instance to raise.
    """

    def __init__(self, prompts: Optional[Dict[str, Union[TextPrompt, ChatPrompt, Exception]]] = None) -> None:
        self.prompts: Dict[str, Union[TextPrompt, ChatPrompt, Exception]] = dict(prompts or {})
        self.calls: List[str] = []
        self.timeouts: List[Optional[float]] = []
        self.created: List[PromptSpec] = []

    def fetch_prompt(self, name: str, *, timeout: Optional[float] = None) -> Union[TextPrompt, ChatPrompt]:
        self.calls.append(name)
        self.timeouts.append(timeout)
        value = self.prompts.get(name)
        if value is None:
            raise PromptFetchError(name, "prompt service returned 404", status_code=404)
        if isinstance(value, Exception):
            raise value
        return value

    def create_prompt(self, spec: PromptSpec) -> PromptRecord:
        self.created.append(spec)
        return PromptRecord(name=spec.name, version=1, type=spec.type, prompt=spec.prompt)


@pytest.fixture()
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture()
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()


@pytest.fixture()
def fake_source() -> FakePromptSource:
    return FakePromptSource(
        {
            "greeting": TextPrompt(prompt="Hello {{name}}, you are {{age}} years old"),
            "pirate": ChatPrompt(
                prompt=(
                    ChatMessage(role="system", content="You are {{persona}}"),
                    ChatMessage(role="user", content="{{q}}"),
                )
            ),
        }
    )
