import asyncio
from types import SimpleNamespace

import openai
import pytest

from conftest import make_status_error
from contract_blueprints.errors import ImageGenerationError, InvalidQueryError, ModelOutputError
from contract_blueprints.services.image_client import ImageService, build_image_prompt


def fake_client(generate):
    return SimpleNamespace(images=SimpleNamespace(generate=generate))


def service(generate):
    return ImageService(fake_client(generate), model="img", size="1024x1024", quality="high", style="vivid", timeout=5)


def run(coro):
    return asyncio.run(coro)


def test_generate_returns_base64_image():
    seen = {}

    async def generate(**kwargs):
        seen.update(kwargs)
        return SimpleNamespace(data=[SimpleNamespace(url=None, b64_json="aGVsbG8=")])

    result = run(service(generate).generate("Alpenpanorama"))

    assert result.prompt == "Alpenpanorama"
    assert result.image_base64 == "aGVsbG8="
    assert result.image_url is None
    assert result.media_type == "image/png"
    assert seen["response_format"] == "b64_json"
    assert seen["size"] == "1024x1024"
    assert seen["style"] == "vivid"


def test_generate_returns_url_image():
    async def generate(**kwargs):
        return SimpleNamespace(data=[SimpleNamespace(url="https://example.test/a.png", b64_json=None)])

    result = run(service(generate).generate("x"))
    assert result.image_url == "https://example.test/a.png"
    assert result.image_base64 is None


@pytest.mark.parametrize("prompt", ["", "   "])
def test_blank_prompt_rejected_before_call(prompt):
    calls = []

    async def generate(**kwargs):
        calls.append(kwargs)

    with pytest.raises(InvalidQueryError):
        run(service(generate).generate(prompt))
    assert calls == []


@pytest.mark.parametrize(
    "response, message",
    [
        (SimpleNamespace(data=[]), "kein Bild"),
        (SimpleNamespace(data=None), "kein Bild"),
        (SimpleNamespace(data=[SimpleNamespace(url="", b64_json="")]), "weder"),
    ],
)
def test_malformed_payloads_are_hard_failures(response, message):
    async def generate(**kwargs):
        return response

    with pytest.raises(ModelOutputError, match=message):
        run(service(generate).generate("x"))


def test_upstream_failure_is_wrapped():
    async def generate(**kwargs):
        raise make_status_error(openai.InternalServerError, 503, "busy")

    with pytest.raises(ImageGenerationError, match="fehlgeschlagen") as info:
        run(service(generate).generate("x"))
    assert info.value.status_code == 503
    assert info.value.body == "busy"


def test_connection_failure_without_status_is_bad_gateway():
    async def generate(**kwargs):
        raise openai.OpenAIError("connection reset")

    with pytest.raises(ImageGenerationError) as info:
        run(service(generate).generate("x"))
    assert info.value.status_code == 502
    assert info.value.body is None


def test_build_image_prompt_appends_missing_query():
    data = {"bildPrompt": "  Pulsierende Altstadt mit engen Gassen  "}
    assert build_image_prompt(data, "Testland") == "Pulsierende Altstadt mit engen Gassen – Testland"


def test_build_image_prompt_keeps_prompt_naming_query():
    data = {"bildPrompt": "Porträt von Marie Curie im Labor"}
    assert build_image_prompt(data, "marie curie") == "Porträt von Marie Curie im Labor"


@pytest.mark.parametrize("data", [{}, {"bildPrompt": ""}, {"bildPrompt": 5}, {"bildPrompt": None}])
def test_build_image_prompt_absent(data):
    assert build_image_prompt(data, "Testland") is None
