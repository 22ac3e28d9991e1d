from types import SimpleNamespace

import pytest
from openai import OpenAIError

from llm_client import stream_answer


class FakeResponses:
    def __init__(self, events=None, error=None):
        self.events = events or []
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return iter(self.events)


def _client(responses):
    return SimpleNamespace(responses=responses)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.delenv("OPENAI_API_KEY")
    monkeypatch.setenv("OPENAI_MODEL", "test-model")


def test_blank_question_is_rejected(tmp_path):
    assert stream_answer("   ", {}, env_dir=tmp_path) == (None, "Question is required.")


def test_missing_api_key(tmp_path):
    chunks, err = stream_answer("Who drove most?", {}, env_dir=tmp_path)
    assert chunks is None
    assert "OPENAI_API_KEY" in err


def test_streams_text_deltas_only(tmp_path):
    responses = FakeResponses(events=[
        SimpleNamespace(type="response.created"),
        SimpleNamespace(type="response.output_text.delta", delta="Driver D1 "),
        SimpleNamespace(type="response.output_text.delta", delta="earned most."),
        SimpleNamespace(type="response.completed"),
    ])
    chunks, err = stream_answer(" Who earned most? ", {"kpis": {"profit": 1}}, env_dir=tmp_path, client=_client(responses))
    assert err is None
    assert list(chunks) == ["Driver D1 ", "earned most."]

    (call,) = responses.calls
    assert call["model"] == "test-model"
    assert call["stream"] is True
    system, user = call["input"]
    assert system["role"] == "system"
    assert user["content"][0]["text"].startswith("Question: Who earned most?\n\nContext JSON:\n")
    assert '"profit": 1' in user["content"][0]["text"]


def test_api_error_is_returned(tmp_path):
    responses = FakeResponses(error=OpenAIError("boom"))
    chunks, err = stream_answer("Q?", {}, env_dir=tmp_path, client=_client(responses))
    assert chunks is None
    assert err == "API error: boom"


def test_stream_failure_surfaces_while_reading(tmp_path):
    def dropped_stream():
        yield SimpleNamespace(type="response.output_text.delta", delta="Partial ")
        raise OpenAIError("connection reset")

    responses = FakeResponses()
    responses.create = lambda **kwargs: dropped_stream()
    chunks, err = stream_answer("Q?", {}, env_dir=tmp_path, client=_client(responses))
    assert err is None
    assert next(chunks) == "Partial "
    with pytest.raises(OpenAIError):
        next(chunks)
