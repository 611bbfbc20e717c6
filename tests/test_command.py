import pytest

from src.features.relay_chat.command import RelayChatCommand

MESSAGES = [{"role": "user", "content": "Hello!"}]


def test_defaults_applied_when_fields_absent():
    data = RelayChatCommand.from_body({"messages": MESSAGES}).to_request_data()

    assert data == {
        "model": "gpt-5-mini",
        "messages": MESSAGES,
        "temperature": 1,
        "max_completion_tokens": 16000,
        "stream": False,
    }


def test_caller_values_are_kept():
    data = RelayChatCommand.from_body({
        "model": "gpt-4o",
        "messages": MESSAGES,
        "temperature": 0.2,
        "max_completion_tokens": 50,
        "stream": True,
    }).to_request_data()

    assert data["model"] == "gpt-4o"
    assert data["temperature"] == 0.2
    assert data["max_completion_tokens"] == 50
    assert data["stream"] is True


def test_falsy_values_fall_back_to_defaults():
    data = RelayChatCommand.from_body({
        "model": "",
        "messages": MESSAGES,
        "temperature": 0,
        "max_completion_tokens": 0,
        "stream": 0,
    }).to_request_data()

    assert data["model"] == "gpt-5-mini"
    assert data["temperature"] == 1
    assert data["max_completion_tokens"] == 16000
    assert data["stream"] is False


def test_stream_is_coerced_to_bool():
    assert RelayChatCommand.from_body({"stream": "yes"}).stream is True


def test_missing_messages_are_omitted():
    data = RelayChatCommand.from_body({}).to_request_data()
    assert "messages" not in data


def test_malformed_fields_pass_through_unchecked():
    data = RelayChatCommand.from_body({"messages": "not a list", "temperature": "hot"}).to_request_data()

    assert data["messages"] == "not a list"
    assert data["temperature"] == "hot"


def test_non_object_body_is_rejected():
    with pytest.raises(ValueError, match="JSON object"):
        RelayChatCommand.from_body(["not", "an", "object"])
