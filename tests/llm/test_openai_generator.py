from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from inbox_tasks.llm.client import GenerationError, OpenAIGenerator


class FakeResponses:
    def __init__(self, result=None, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc
        self.calls: list = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.result


def _generator(responses: FakeResponses) -> OpenAIGenerator:
    return OpenAIGenerator(SimpleNamespace(responses=responses), model="test-model")


def test_generate_returns_output_text() -> None:
    responses = FakeResponses(result=SimpleNamespace(output_text="Event Type: Email"))

    assert _generator(responses).generate("prompt") == "Event Type: Email"
    assert responses.calls == [{"model": "test-model", "input": "prompt"}]


def test_empty_output_raises_generation_error() -> None:
    responses = FakeResponses(result=SimpleNamespace(output_text=""))

    with pytest.raises(GenerationError):
        _generator(responses).generate("prompt")


def test_sdk_errors_are_wrapped() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    responses = FakeResponses(exc=APIConnectionError(request=request))

    with pytest.raises(GenerationError) as excinfo:
        _generator(responses).generate("prompt")

    assert isinstance(excinfo.value.__cause__, APIConnectionError)
    assert len(responses.calls) == 1
