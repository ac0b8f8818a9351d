"""Message construction and prompt flattening."""

from __future__ import annotations

import pytest

from langwire.errors import InvalidInput
from langwire.messages import Message, messages_to_string

pytestmark = pytest.mark.unit


def test_constructors_set_roles() -> None:
    assert Message.system("s").role == "system"
    assert Message.human("h").role == "human"
    assert Message.ai("a").role == "ai"
    assert Message.tool("t").role == "tool"


def test_content_defaults_to_empty() -> None:
    assert Message("human").content == ""


def test_unknown_role_is_rejected() -> None:
    with pytest.raises(InvalidInput, match="Unknown message role"):
        Message("assistant", "hi")  # type: ignore[arg-type]


def test_non_string_content_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        Message("human", 42)  # type: ignore[arg-type]


def test_messages_are_immutable_values() -> None:
    message = Message.human("hi")
    assert message == Message("human", "hi")
    with pytest.raises(AttributeError):
        message.content = "changed"  # type: ignore[misc]


def test_flatten_one_line_per_turn_in_order() -> None:
    text = messages_to_string(
        [Message.system("Be brief."), Message.human("Hi"), Message.ai("Hello")]
    )
    assert text == "system: Be brief.\nhuman: Hi\nai: Hello"


def test_flatten_empty_conversation() -> None:
    assert messages_to_string([]) == ""
    assert messages_to_string([Message.human("")]) == "human: "
