"""
services/analyzer.py
Сервис анализа: персона/страна (+ иллюстрация) и договор по blueprint.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.core.settings import settings
from contract_blueprints.errors import InvalidQueryError
from contract_blueprints.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisResult,
    AnalysisType,
    ImageGenerationResult,
)
from contract_blueprints.services.domain_schema import get_provider, strip_ui_metadata
from contract_blueprints.services.image_client import ImageService, build_image_prompt
from contract_blueprints.services.llm_client import ChatService
from contract_blueprints.services.prompts import build_contract_messages, build_domain_messages
from contract_blueprints.services.result_parser import parse_json_object, parse_model_output
from contract_blueprints.services.schema_builder import build_result_schema, structured_output_format

log = logging.getLogger(__name__)

QUERY_REQUIRED = {
    AnalysisType.PERSON: "Bitte gib den Namen einer Person an.",
    AnalysisType.COUNTRY: "Bitte gib den Namen eines Landes an.",
}


class AnalyzerService:
    """
    Без состояния: все зависимости передаются в конструктор
    один раз при старте приложения.
    """

    def __init__(self, chat: ChatService, images: Optional[ImageService] = None):
        self._chat = chat
        self._images = images

    async def get_domain_information(self, kind: AnalysisType, query: str) -> Dict[str, Any]:
        provider = get_provider(kind)
        schema = strip_ui_metadata(provider.get_schema())
        result = await self._chat.complete(
            build_domain_messages(kind, query),
            structured_output_format(provider.name, schema, strict=settings.STRICT_SCHEMA),
            max_tokens=settings.MAX_OUTPUT_TOKENS,
        )
        return parse_json_object(result.content)

    async def analyze(self, req: AnalysisRequest) -> AnalysisResponse:
        query = req.query
        if not query:
            raise InvalidQueryError(QUERY_REQUIRED[req.type])

        data = await self.get_domain_information(req.type, query)
        image, image_error = await self._try_image(data, query)

        return AnalysisResponse(
            type=req.type,
            query=query,
            data=data,
            image=image,
            image_error=image_error,
        )

    async def _try_image(
        self, data: Dict[str, Any], query: str
    ) -> Tuple[Optional[ImageGenerationResult], Optional[str]]:
        # картинка не должна ронять основной результат; отмена — всегда наружу
        if self._images is None or not settings.IMAGE_ENABLED:
            return None, None
        prompt = build_image_prompt(data, query)
        if prompt is None:
            return None, None
        try:
            return await self._images.generate(prompt), None
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            log.warning("Bildgenerierung für '%s' fehlgeschlagen: %s", query, exc)
            return None, str(exc)

    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        if self._images is None:
            raise InvalidQueryError("Bildgenerierung ist nicht konfiguriert.")
        return await self._images.generate((prompt or "").strip())

    async def analyze_contract(self, blueprint: AnalysisBlueprint, contract_text: str) -> AnalysisResult:
        text = (contract_text or "").strip()
        if not text:
            raise InvalidQueryError("Bitte gib den Vertragstext an.")

        messages, note = build_contract_messages(blueprint, text, max_chars=settings.MAX_CONTRACT_CHARS)
        if note:
            log.info("Blueprint %s: %s", blueprint.id, note)

        result = await self._chat.complete(
            messages,
            structured_output_format(
                f"{blueprint.id}_analysis",
                build_result_schema(blueprint),
                strict=settings.STRICT_SCHEMA,
            ),
            max_tokens=settings.CONTRACT_MAX_OUTPUT_TOKENS,
        )
        return parse_model_output(result.content, blueprint)
