"""
services/image_client.py
Генерация иллюстрации через Images API Nebius (OpenAI-совместимый).
Одна попытка; пустой prompt отсекаем до вызова.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from openai import APIStatusError, AsyncOpenAI, OpenAIError  # type: ignore

from contract_blueprints.core.settings import settings
from contract_blueprints.errors import (
    ImageGenerationError,
    InvalidQueryError,
    ModelOutputError,
    UpstreamTimeoutError,
)
from contract_blueprints.schemas import ImageGenerationResult

log = logging.getLogger(__name__)

MEDIA_TYPE = "image/png"


def build_image_prompt(data: Dict[str, Any], query: str) -> Optional[str]:
    """
    Берём "bildPrompt" из ответа модели. Если в нём нет самого запроса
    (имени персоны/страны), дописываем его — иначе картинка безымянная.
    """
    raw = data.get("bildPrompt") if isinstance(data, dict) else None
    if not isinstance(raw, str) or not raw.strip():
        return None
    prompt = raw.strip()
    query = (query or "").strip()
    if query and query.casefold() not in prompt.casefold():
        prompt = f"{prompt} – {query}"
    return prompt


class ImageService:
    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: Optional[str] = None,
        size: Optional[str] = None,
        quality: Optional[str] = None,
        style: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._model = model or settings.image_model
        self._size = size or settings.IMAGE_SIZE
        self._quality = quality or settings.IMAGE_QUALITY
        self._style = style or settings.IMAGE_STYLE
        self._timeout = timeout or settings.IMAGE_TIMEOUT_SECONDS
        log.debug("Image model: %s", self._model)

    async def generate(self, prompt: str) -> ImageGenerationResult:
        if not prompt or not prompt.strip():
            raise InvalidQueryError("Der Prompt darf nicht leer sein.")

        try:
            resp = await asyncio.wait_for(
                self._client.images.generate(  # type: ignore
                    model=self._model,
                    prompt=prompt,
                    n=1,
                    size=self._size,
                    quality=self._quality,
                    style=self._style,
                    response_format="b64_json",
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            log.error("Nebius image generation timed out after %.0fs", self._timeout)
            raise UpstreamTimeoutError("Die Nebius Bild-API hat nicht rechtzeitig geantwortet.") from exc
        except APIStatusError as exc:
            body = exc.response.text if exc.response is not None else None
            log.error("Nebius image generation failed: %s %s", exc.status_code, body or "(no body)")
            raise ImageGenerationError("Nebius Bildgenerierung fehlgeschlagen.", exc.status_code, body) from exc
        except OpenAIError as exc:
            log.error("Fehler bei der Kommunikation mit der Nebius Bild-API: %s", exc)
            raise ImageGenerationError("Nebius Bildgenerierung fehlgeschlagen.") from exc

        images = getattr(resp, "data", None) or []
        if not images:
            raise ModelOutputError("Die Nebius-Antwort enthielt kein Bild.")

        image = images[0]
        url = (getattr(image, "url", None) or "").strip()
        b64 = (getattr(image, "b64_json", None) or "").strip()
        if not url and not b64:
            raise ModelOutputError("Die Nebius-Antwort enthält weder eine Bild-URL noch Base64-Daten.")

        return ImageGenerationResult(
            prompt=prompt,
            image_url=url or None,
            image_base64=b64 or None,
            media_type=MEDIA_TYPE,
        )
