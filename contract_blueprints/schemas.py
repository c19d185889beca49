"""
schemas.py
Pydantic-DTO: вход/выход HTTP API.
Имена полей в JSON — camelCase, как ожидает фронтенд.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisType(str, Enum):
    PERSON = "person"
    COUNTRY = "country"


# ---------- ВХОД ----------
class AnalysisRequest(_CamelModel):
    """
    Запрос анализа персоны или страны.
    - type: "person" | "country" (по умолчанию person)
    - person / country: текст запроса для соответствующего типа
    """
    type: AnalysisType = AnalysisType.PERSON
    person: Optional[str] = None
    country: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"type": "country", "country": "Österreich"}]}
    )

    @property
    def query(self) -> str:
        raw = self.person if self.type is AnalysisType.PERSON else self.country
        return (raw or "").strip()


class ContractAnalysisRequest(_CamelModel):
    contract_text: str = Field("", description="Volltext des Vertrags")


class ImageRequest(BaseModel):
    prompt: str = ""


# ---------- ВЫХОД ----------
class ImageGenerationResult(_CamelModel):
    prompt: str
    image_url: Optional[str] = None
    image_base64: Optional[str] = None
    media_type: Optional[str] = None


class AnalysisResponse(_CamelModel):
    """Ответ на person/country: данные модели + (опционально) картинка или ошибка картинки."""
    type: AnalysisType
    query: str
    data: Dict[str, Any]
    image: Optional[ImageGenerationResult] = None
    image_error: Optional[str] = None


class AnalysisResult(_CamelModel):
    """
    Нормализованный результат анализа договора.
    Все объявленные id сводки и секций присутствуют всегда.
    """
    blueprint_id: str
    summary: Dict[str, str] = Field(default_factory=dict)
    sections: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    conclusion: str = ""
    collective_agreement: Optional[str] = None


class BlueprintInfo(_CamelModel):
    id: str
    display_name: str
    section_count: int


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Problem(BaseModel):
    """problem-details тело ошибки."""
    type: str = "about:blank"
    title: str
    status: int
    detail: Optional[str] = None
