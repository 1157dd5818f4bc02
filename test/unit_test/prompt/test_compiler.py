from __future__ import annotations

import itertools

import pytest

from prompt_hub.prompt import (
    ChatMessage,
    ChatPrompt,
    EmptyPromptError,
    PromptChatList,
    PromptCompiler,
    TextPrompt,
    UnknownVariableError,
)

TEMPLATE = "Hello {{name}}, you are {{age}} years old"


def _pirate() -> ChatPrompt:
    return ChatPrompt(
        prompt=(
            ChatMessage(role="system", content="You are {{persona}}"),
            ChatMessage(role="user", content="{{q}}"),
        )
    )


def test_compile_text_substitutes_all_bound_variables() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    assert compiler.compile_text({"name": "Ada", "age": "30"}) == "Hello Ada, you are 30 years old"


def test_compile_text_replaces_every_occurrence() -> None:
    compiler = PromptCompiler(TextPrompt(prompt="{{x}}-{{x}}-{{x}}"))
    result = compiler.compile_text({"x": "a"})
    assert result == "a-a-a"
    assert "{{x}}" not in result


def test_compile_text_unknown_variable_raises() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    with pytest.raises(UnknownVariableError) as exc_info:
        compiler.compile_text({"name": "Ada", "city": "Paris"})
    assert exc_info.value.key == "city"
    assert exc_info.value.keys == ["city"]
    assert "city" in str(exc_info.value)


def test_unknown_variable_key_is_independent_of_binding_order() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    items = [("name", "Ada"), ("zeta", "1"), ("beta", "2"), ("alpha", "3")]
    keys = set()
    for perm in itertools.permutations(items):
        with pytest.raises(UnknownVariableError) as exc_info:
            compiler.compile_text(dict(perm))
        keys.add((exc_info.value.key, tuple(exc_info.value.keys)))
    assert keys == {("alpha", ("alpha", "beta", "zeta"))}


def test_unbound_placeholders_are_left_literal() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    assert compiler.compile_text({"name": "Ada"}) == "Hello Ada, you are {{age}} years old"


def test_no_params_returns_template_unchanged() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    assert compiler.compile_text() == TEMPLATE
    assert compiler.compile_text({}) == TEMPLATE


def test_replacement_text_is_not_rescanned() -> None:
    compiler = PromptCompiler(TextPrompt(prompt="{{a}} and {{b}}"))
    result = compiler.compile_text({"a": "{{b}}", "b": "B"})
    assert result == "{{b}} and B"


def test_placeholder_must_match_literally() -> None:
    compiler = PromptCompiler(TextPrompt(prompt="Hi {{ name }}"))
    with pytest.raises(UnknownVariableError):
        compiler.compile_text({"name": "Ada"})


def test_keys_with_regex_characters_are_matched_literally() -> None:
    compiler = PromptCompiler(TextPrompt(prompt="cost: {{price.usd}} / {{a+b}}"))
    assert compiler.compile_text({"price.usd": "$3", "a+b": "c"}) == "cost: $3 / c"


def test_overlapping_key_swallowed_by_longer_match_is_unused() -> None:
    compiler = PromptCompiler(TextPrompt(prompt="{{{x}}}"))
    with pytest.raises(UnknownVariableError) as exc_info:
        compiler.compile_text({"x": "1", "{x}": "2"})
    assert exc_info.value.key == "x"
    assert compiler.compile_text({"{x}": "2"}) == "2"
    assert compiler.compile_text({"x": "1"}) == "{1}"


def test_compile_chat_overlapping_key_counts_if_matched_elsewhere() -> None:
    compiler = PromptCompiler(
        ChatPrompt(
            prompt=(
                ChatMessage(role="system", content="{{{x}}}"),
                ChatMessage(role="user", content="{{x}}"),
            )
        )
    )
    messages = compiler.compile_chat({"x": "1", "{x}": "2"})
    assert [m.content for m in messages] == ["2", "1"]


@pytest.mark.parametrize(
    "body",
    [None, TextPrompt(prompt=""), _pirate()],
    ids=["never-fetched", "empty-text", "chat-body"],
)
def test_compile_text_without_text_body_raises_empty(body) -> None:
    with pytest.raises(EmptyPromptError) as exc_info:
        PromptCompiler(body).compile_text({"name": "Ada"})
    assert exc_info.value.mode == "text"


def test_compile_text_is_idempotent() -> None:
    compiler = PromptCompiler(TextPrompt(prompt=TEMPLATE))
    params = {"name": "Ada", "age": "30"}
    assert compiler.compile_text(params) == compiler.compile_text(params)


def test_compile_chat_substitutes_each_message() -> None:
    result = PromptCompiler(_pirate()).compile_chat({"persona": "a pirate", "q": "Where is the treasure?"})
    assert isinstance(result, PromptChatList)
    assert result == [
        ChatMessage(role="system", content="You are a pirate"),
        ChatMessage(role="user", content="Where is the treasure?"),
    ]


def test_compile_chat_tracks_usage_across_messages() -> None:
    # "q" only appears in the second message; it still counts as used.
    result = PromptCompiler(_pirate()).compile_chat({"q": "hi"})
    assert [m.content for m in result] == ["You are {{persona}}", "hi"]


def test_compile_chat_unknown_variable_raises() -> None:
    with pytest.raises(UnknownVariableError) as exc_info:
        PromptCompiler(_pirate()).compile_chat({"persona": "x", "mood": "grumpy"})
    assert exc_info.value.key == "mood"


def test_compile_chat_never_substitutes_roles() -> None:
    body = ChatPrompt(prompt=(ChatMessage(role="{{role}}", content="static"),))
    with pytest.raises(UnknownVariableError):
        PromptCompiler(body).compile_chat({"role": "system"})


def test_compile_chat_does_not_mutate_bound_body() -> None:
    body = _pirate()
    compiler = PromptCompiler(body)
    first = compiler.compile_chat({"persona": "a pirate", "q": "?"})
    first[0] = ChatMessage(role="system", content="tampered")
    second = compiler.compile_chat({"persona": "a pirate", "q": "?"})
    assert second[0].content == "You are a pirate"
    assert body.prompt[0].content == "You are {{persona}}"


def test_compile_chat_without_params_returns_copy() -> None:
    body = _pirate()
    result = PromptCompiler(body).compile_chat()
    assert [(m.role, m.content) for m in result] == [("system", "You are {{persona}}"), ("user", "{{q}}")]
    assert result[0] is not body.prompt[0]


@pytest.mark.parametrize(
    "body",
    [None, ChatPrompt(prompt=()), TextPrompt(prompt=TEMPLATE)],
    ids=["never-fetched", "no-messages", "text-body"],
)
def test_compile_chat_without_chat_body_raises_empty(body) -> None:
    with pytest.raises(EmptyPromptError) as exc_info:
        PromptCompiler(body).compile_chat()
    assert exc_info.value.mode == "chat"


def test_compiled_chat_accessors() -> None:
    result = PromptCompiler(_pirate()).compile_chat({"persona": "a pirate", "q": "Where?"})
    assert result.get_system_message() == "You are a pirate"
    assert result.get_user_message() == "Where?"
