"""
errors.py
Иерархия ошибок сервиса. Каждая ошибка знает свой HTTP-статус и заголовок
для problem-details ответа (см. app/errors.py).
"""
from typing import Optional


class AnalysisError(RuntimeError):
    """Общая ошибка анализа (неожиданный сбой связи с LLM и т.п.)."""

    status_code = 500
    title = "Analyse fehlgeschlagen"


class InvalidQueryError(AnalysisError, ValueError):
    """Пустой или отсутствующий запрос — до обращения к LLM."""

    status_code = 400
    title = "Ungültige Anfrage"


class UpstreamError(AnalysisError):
    """Nebius API вернул HTTP-ошибку (статус + тело ответа)."""

    title = "Nebius API Fehler"

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code or 502
        self.body = body

    @property
    def detail(self) -> str:
        if self.body and self.body.strip():
            return f"{self}\n{self.body}"
        return str(self)


class UpstreamTimeoutError(AnalysisError):
    """Nebius не ответил за отведённое время; повторов нет."""

    status_code = 504
    title = "Nebius API Zeitüberschreitung"


class ModelOutputError(AnalysisError):
    """Ответ модели не читается (не JSON, нет изображения и т.п.)."""

    title = "Ungültige Modellantwort"


class ImageGenerationError(UpstreamError):
    """Сбой генерации изображения на стороне провайдера (статус + тело, как у UpstreamError)."""

    title = "Bildgenerierung fehlgeschlagen"


class BlueprintNotFoundError(LookupError):
    """Blueprint с таким id не зарегистрирован."""

    status_code = 404
    title = "Blueprint nicht gefunden"
