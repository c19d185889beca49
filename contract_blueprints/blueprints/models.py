"""
blueprints/models.py
Декларативное описание отчёта анализа (Blueprint).
Модели неизменяемые (frozen), списки хранятся кортежами.
"""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SectionFieldKind(str, Enum):
    """Тип поля секции: подсказка для рендера и тип листа в JSON Schema."""
    TEXT = "Text"
    EMPHASIS = "Emphasis"
    LIST = "List"


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


def _duplicates(ids) -> list:
    seen, dupes = set(), []
    for i in ids:
        if i in seen and i not in dupes:
            dupes.append(i)
        seen.add(i)
    return dupes


class SummaryField(_Frozen):
    """Один факт сводки (ключ → значение)."""
    id: str = Field(..., min_length=1)
    label: str
    description: Optional[str] = None


class SectionField(_Frozen):
    id: str = Field(..., min_length=1)
    label: str
    kind: SectionFieldKind = SectionFieldKind.TEXT


class SectionBlueprint(_Frozen):
    """
    Категория находок (например, «недопустимые пункты»).
    В результате секция — массив объектов, ключи объекта = id полей.
    """
    id: str = Field(..., min_length=1)
    title: str
    icon: str
    fields: Tuple[SectionField, ...] = ()

    @model_validator(mode="after")
    def _unique_field_ids(self):
        dupes = _duplicates(f.id for f in self.fields)
        if dupes:
            raise ValueError(f"Section '{self.id}': duplicate field ids {dupes}")
        return self


class AnalysisBlueprint(_Frozen):
    """
    Корневой агрегат: сводка + секции + подписи заключения.
    """
    id: str = Field(..., min_length=1)
    display_name: str
    summary_title: str
    summary_fields: Tuple[SummaryField, ...] = ()
    sections: Tuple[SectionBlueprint, ...] = ()
    conclusion_label: str
    collective_agreement_label: Optional[str] = None

    @model_validator(mode="after")
    def _unique_ids(self):
        dupes = _duplicates(f.id for f in self.summary_fields)
        if dupes:
            raise ValueError(f"Blueprint '{self.id}': duplicate summary field ids {dupes}")
        dupes = _duplicates(s.id for s in self.sections)
        if dupes:
            raise ValueError(f"Blueprint '{self.id}': duplicate section ids {dupes}")
        return self

    @property
    def has_collective_agreement(self) -> bool:
        return bool(self.collective_agreement_label and self.collective_agreement_label.strip())
