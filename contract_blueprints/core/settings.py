"""
core/settings.py
Настройки сервиса Contract Blueprints.
Читает NEBIUS_* переменные (OpenAI-совместимый эндпоинт Nebius AI Studio),
тайм-ауты, параметры сэмплинга и генерации изображений.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # ---------- Nebius ----------
    NEBIUS_API_KEY: str = Field("", description="API key for Nebius AI Studio")
    NEBIUS_BASE_URL: str = Field("https://api.studio.nebius.com/v1/", description="OpenAI-compatible base URL")
    NEBIUS_MODEL: str = Field("meta-llama/Meta-Llama-3.1-70B-Instruct", description="Модель для chat completion")
    NEBIUS_IMAGE_MODEL: str = Field("", description="Модель для изображений; пусто → NEBIUS_MODEL")

    # ---------- Тайм-ауты (сек) ----------
    REQUEST_TIMEOUT_SECONDS: float = Field(240.0, gt=0)
    IMAGE_TIMEOUT_SECONDS: float = Field(240.0, gt=0)

    # ---------- Сэмплинг ----------
    TEMPERATURE: float = 0.0
    TOP_P: float = 0.1
    MAX_OUTPUT_TOKENS: int = Field(800, description="Лимит ответа для person/country")
    CONTRACT_MAX_OUTPUT_TOKENS: int = Field(4000, description="Лимит ответа для анализа договора")
    STRICT_SCHEMA: bool = True

    # ---------- Договоры ----------
    MAX_CONTRACT_CHARS: int = Field(60000, description="Длиннее — усекаем перед отправкой")

    # ---------- Изображения ----------
    IMAGE_ENABLED: bool = True
    IMAGE_SIZE: str = "1024x1024"
    IMAGE_QUALITY: str = "high"
    IMAGE_STYLE: Literal["vivid", "natural"] = "vivid"

    LOG_LEVEL: str = "INFO"

    @property
    def image_model(self) -> str:
        """Модель изображений, с откатом на основную модель."""
        return self.NEBIUS_IMAGE_MODEL or self.NEBIUS_MODEL


settings = Settings()
