"""
Общие фикстуры: фейковые клиенты Nebius и TestClient с подменёнными зависимостями.
Сети нет ни в одном тесте.
"""
import json
import os
from types import SimpleNamespace

os.environ.setdefault("NEBIUS_API_KEY", "test-key")

import httpx
import pytest
from fastapi.testclient import TestClient

from contract_blueprints.app.main import app
from contract_blueprints.app.routers import get_analyzer
from contract_blueprints.blueprints.registry import BlueprintRegistry
from contract_blueprints.schemas import ImageGenerationResult, Usage
from contract_blueprints.services.analyzer import AnalyzerService
from contract_blueprints.services.llm_client import ChatResult


class FakeChat:
    """Подмена ChatService: отдаёт заранее заданный ответ или бросает ошибку."""

    def __init__(self, content="{}", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def complete(self, messages, json_schema, *, max_tokens):
        self.calls.append({"messages": messages, "json_schema": json_schema, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        content = self.content if isinstance(self.content, str) else json.dumps(self.content)
        return ChatResult(content=content, usage=Usage(prompt_tokens=10, completion_tokens=5, total_tokens=15))


class FakeImages:
    def __init__(self, error=None):
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return ImageGenerationResult(
            prompt=prompt,
            image_url="https://example.test/image.png",
            media_type="image/png",
        )


def make_completion(content, usage=None):
    """Объект в форме ответа openai chat.completions.create."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=usage or SimpleNamespace(prompt_tokens=12, completion_tokens=30, total_tokens=42),
    )


def make_status_error(error_cls, status, body):
    request = httpx.Request("POST", "https://api.studio.nebius.com/v1/chat/completions")
    response = httpx.Response(status, request=request, text=body)
    return error_cls("Nebius request failed.", response=response, body=None)


@pytest.fixture(scope="session")
def registry():
    return BlueprintRegistry()


@pytest.fixture
def employment(registry):
    return registry.get_by_id("employment")


@pytest.fixture
def rent(registry):
    return registry.get_by_id("rent")


@pytest.fixture
def fake_chat():
    return FakeChat()


@pytest.fixture
def fake_images():
    return FakeImages()


@pytest.fixture
def client(fake_chat, fake_images):
    app.dependency_overrides[get_analyzer] = lambda: AnalyzerService(fake_chat, fake_images)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
