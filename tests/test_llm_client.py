import asyncio
from types import SimpleNamespace

import openai
import pytest

from conftest import make_completion, make_status_error
from contract_blueprints.errors import (
    AnalysisError,
    ModelOutputError,
    UpstreamError,
    UpstreamTimeoutError,
)
from contract_blueprints.services.llm_client import ChatService

MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]
SCHEMA = {"name": "country_information", "schema": {"type": "object"}, "strict": True}


def fake_client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def run(coro):
    return asyncio.run(coro)


def test_complete_sends_structured_output_payload():
    seen = {}

    async def create(**payload):
        seen.update(payload)
        return make_completion('{"hauptstadt": "Wien"}')

    svc = ChatService(fake_client(create), model="test-model", temperature=0.0, top_p=0.1, timeout=5)
    result = run(svc.complete(MESSAGES, SCHEMA, max_tokens=800))

    assert result.content == '{"hauptstadt": "Wien"}'
    assert result.usage.total_tokens == 42
    assert seen["model"] == "test-model"
    assert seen["messages"] == MESSAGES
    assert seen["top_p"] == 0.1
    assert seen["max_tokens"] == 800
    assert seen["response_format"] == {"type": "json_schema", "json_schema": SCHEMA}


def test_missing_usage_is_tolerated():
    async def create(**payload):
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="{}"))], usage=None)

    result = run(ChatService(fake_client(create), timeout=5).complete(MESSAGES, SCHEMA, max_tokens=10))
    assert result.usage.total_tokens == 0


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_completion_is_model_output_error(content):
    async def create(**payload):
        return make_completion(content)

    with pytest.raises(ModelOutputError, match="keinen Inhalt"):
        run(ChatService(fake_client(create), timeout=5).complete(MESSAGES, SCHEMA, max_tokens=10))


def test_status_error_becomes_upstream_error_with_body():
    calls = []

    async def create(**payload):
        calls.append(payload)
        raise make_status_error(openai.BadRequestError, 400, '{"error":"invalid"}')

    with pytest.raises(UpstreamError) as info:
        run(ChatService(fake_client(create), timeout=5).complete(MESSAGES, SCHEMA, max_tokens=10))

    assert info.value.status_code == 400
    assert info.value.body == '{"error":"invalid"}'
    assert '{"error":"invalid"}' in info.value.detail
    assert len(calls) == 1


def test_connection_error_becomes_generic_failure():
    async def create(**payload):
        raise openai.OpenAIError("connection reset")

    with pytest.raises(AnalysisError, match="connection reset") as info:
        run(ChatService(fake_client(create), timeout=5).complete(MESSAGES, SCHEMA, max_tokens=10))
    assert not isinstance(info.value, UpstreamError)


def test_slow_upstream_hits_timeout_without_retry():
    calls = []

    async def create(**payload):
        calls.append(payload)
        await asyncio.sleep(1)

    with pytest.raises(UpstreamTimeoutError):
        run(ChatService(fake_client(create), timeout=0.01).complete(MESSAGES, SCHEMA, max_tokens=10))
    assert len(calls) == 1
