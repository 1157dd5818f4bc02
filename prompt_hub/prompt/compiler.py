"""Template compiler for cached prompt bodies.

A :class:`PromptCompiler` is bound to a single prompt body snapshot taken
when the compiler is created. Compiling substitutes ``{{key}}`` placeholders
with the supplied bindings:

* every occurrence of a bound placeholder is replaced in one pass over the
  template, so replacement text is never re-scanned;
* placeholders without a binding are left as literal ``{{key}}``;
* a binding whose placeholder appears nowhere in the body is an error
  (:class:`UnknownVariableError`), checked before anything is substituted.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Optional, Set, Union

from .errors import EmptyPromptError, UnknownVariableError
from .models import ChatMessage, ChatPrompt, PromptChatList, TextPrompt


def _token(key: str) -> str:
    return "{{%s}}" % key


def _build_pattern(params: Mapping[str, str]) -> re.Pattern[str]:
    # Longest tokens first so overlapping keys resolve to the longest match.
    tokens = sorted((_token(k) for k in params), key=len, reverse=True)
    return re.compile("|".join(re.escape(t) for t in tokens))


def _check_unused(params: Mapping[str, str], pattern: re.Pattern[str], contents: Iterable[str]) -> None:
    # A key is used only if the substitution pattern would actually match it.
    unused: Set[str] = set(params)
    for content in contents:
        unused.difference_update(m.group(0)[2:-2] for m in pattern.finditer(content))
        if not unused:
            return
    raise UnknownVariableError(list(unused))


def _substitute(template: str, pattern: re.Pattern[str], params: Mapping[str, str]) -> str:
    return pattern.sub(lambda m: params[m.group(0)[2:-2]], template)


class PromptCompiler:
    """Compile a prompt body snapshot against variable bindings.

    A compiler bound to ``None`` stands for a prompt that could not be
    fetched; every compile call on it raises :class:`EmptyPromptError`.
    """

    def __init__(self, body: Optional[Union[TextPrompt, ChatPrompt]] = None) -> None:
        self._body = body

    @property
    def body(self) -> Optional[Union[TextPrompt, ChatPrompt]]:
        return self._body

    def compile_text(self, params: Optional[Mapping[str, str]] = None) -> str:
        """Return the text prompt with ``params`` substituted.

        Raises:
            EmptyPromptError: No text body is bound (never fetched, chat
                prompt, or empty template).
            UnknownVariableError: A key in ``params`` has no placeholder.
        """
        if not isinstance(self._body, TextPrompt) or not self._body.prompt:
            raise EmptyPromptError("text")
        template = self._body.prompt
        params = dict(params or {})
        if not params:
            return template

        pattern = _build_pattern(params)
        _check_unused(params, pattern, [template])
        return _substitute(template, pattern, params)

    def compile_chat(self, params: Optional[Mapping[str, str]] = None) -> PromptChatList:
        """Return new chat messages with ``params`` substituted in each content.

        Roles are copied verbatim. A key counts as used if its placeholder
        appears in any message.

        Raises:
            EmptyPromptError: No chat body is bound (never fetched, text
                prompt, or no messages).
            UnknownVariableError: A key in ``params`` has no placeholder.
        """
        if not isinstance(self._body, ChatPrompt) or not self._body.prompt:
            raise EmptyPromptError("chat")
        messages = self._body.prompt
        params = dict(params or {})
        if not params:
            return PromptChatList(ChatMessage(role=m.role, content=m.content) for m in messages)

        pattern = _build_pattern(params)
        _check_unused(params, pattern, (m.content for m in messages))
        return PromptChatList(
            ChatMessage(role=m.role, content=_substitute(m.content, pattern, params)) for m in messages
        )
