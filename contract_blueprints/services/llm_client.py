"""
services/llm_client.py
Обёртка над Chat Completion API Nebius (OpenAI-совместимый endpoint).

✔ Structured Output (`response_format=json_schema`)
✔ Ровно одна попытка: без ретраев ни клиента, ни наших
✔ Собственный тайм-аут, независимый от отмены входящего запроса
✔ Ошибки провайдера → UpstreamError (со статусом и телом ответа)
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openai import APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError  # type: ignore

from contract_blueprints.core.settings import settings
from contract_blueprints.errors import (
    AnalysisError,
    ModelOutputError,
    UpstreamError,
    UpstreamTimeoutError,
)
from contract_blueprints.schemas import Usage

log = logging.getLogger(__name__)

__all__ = ["ChatResult", "ChatService", "create_client"]


def create_client() -> AsyncOpenAI:
    """Единственный клиент на приложение; max_retries=0 — повторов нет."""
    return AsyncOpenAI(
        api_key=settings.NEBIUS_API_KEY,
        base_url=settings.NEBIUS_BASE_URL,
        timeout=max(settings.REQUEST_TIMEOUT_SECONDS, settings.IMAGE_TIMEOUT_SECONDS),
        max_retries=0,
    )


@dataclass
class ChatResult:
    content: str
    usage: Usage = field(default_factory=Usage)


class ChatService:
    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._model = model or settings.NEBIUS_MODEL
        self._temperature = settings.TEMPERATURE if temperature is None else temperature
        self._top_p = settings.TOP_P if top_p is None else top_p
        self._timeout = timeout or settings.REQUEST_TIMEOUT_SECONDS

    async def complete(
        self,
        messages: List[Dict[str, str]],
        json_schema: Dict[str, Any],
        *,
        max_tokens: int,
    ) -> ChatResult:
        """
        Один запрос к модели. Возвращает сырой текст ответа + usage.
        * `json_schema` – {"name", "schema", "strict"} для response_format.
        """
        payload: Dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
            "top_p": self._top_p,
            "max_tokens": max_tokens,
            "response_format": {"type": "json_schema", "json_schema": json_schema},
            "stream": False,
        }

        try:
            resp = await asyncio.wait_for(
                self._client.chat.completions.create(**payload),  # type: ignore
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, APITimeoutError) as exc:
            log.error("Nebius API timeout after %.0fs (schema %s)", self._timeout, json_schema.get("name"))
            raise UpstreamTimeoutError("Die Nebius API hat nicht rechtzeitig geantwortet.") from exc
        except APIStatusError as exc:
            body = exc.response.text if exc.response is not None else None
            log.error("Nebius API error: %s %s", exc.status_code, body or "(no body)")
            raise UpstreamError(exc.message, exc.status_code, body) from exc
        except OpenAIError as exc:
            log.error("Fehler bei der Kommunikation mit der Nebius API: %s", exc)
            raise AnalysisError(str(exc)) from exc

        usage = _usage(resp)
        log.info(
            "Nebius Token Usage - Input: %s, Output: %s, Total: %s",
            usage.prompt_tokens, usage.completion_tokens, usage.total_tokens,
        )

        content = resp.choices[0].message.content if resp.choices else None
        if not content or not content.strip():
            raise ModelOutputError("Die Nebius-Antwort enthielt keinen Inhalt.")
        return ChatResult(content=content, usage=usage)


def _usage(resp: Any) -> Usage:
    raw = getattr(resp, "usage", None)
    if raw is None:
        return Usage()
    prompt = int(getattr(raw, "prompt_tokens", 0) or 0)
    completion = int(getattr(raw, "completion_tokens", 0) or 0)
    total = int(getattr(raw, "total_tokens", 0) or (prompt + completion))
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)
