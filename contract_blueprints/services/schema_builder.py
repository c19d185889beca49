"""
services/schema_builder.py
Blueprint → JSON Schema для Structured Output.
Чистая функция: одинаковый blueprint всегда даёт одинаковую схему,
порядок ключей следует порядку объявления полей.
"""
from typing import Any, Dict

from contract_blueprints.blueprints.models import (
    AnalysisBlueprint,
    SectionBlueprint,
    SectionField,
    SectionFieldKind,
)

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def build_result_schema(blueprint: AnalysisBlueprint) -> Dict[str, Any]:
    required = ["summary", "sections", "conclusion"]
    properties: Dict[str, Any] = {
        "summary": _summary_schema(blueprint),
        "sections": _sections_schema(blueprint),
        "conclusion": {"type": "string", "description": blueprint.conclusion_label},
    }

    if blueprint.has_collective_agreement:
        properties["collectiveAgreement"] = {
            "type": "string",
            "description": blueprint.collective_agreement_label,
        }
        required.append("collectiveAgreement")

    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "type": "object",
        "properties": properties,
        "required": required,
    }


def structured_output_format(name: str, schema: Dict[str, Any], *, strict: bool = True) -> Dict[str, Any]:
    """
    Обёртка для response_format=json_schema:
    { "name": ..., "schema": {...}, "strict": ... }
    """
    return {"name": name, "schema": schema, "strict": strict}


def _summary_schema(blueprint: AnalysisBlueprint) -> Dict[str, Any]:
    props: Dict[str, Any] = {}
    for field in blueprint.summary_fields:
        description = field.label
        if field.description is not None:
            description = f"{field.label} – {field.description}"
        props[field.id] = {"type": "string", "description": description}

    return {
        "type": "object",
        "description": blueprint.summary_title,
        "properties": props,
        "required": [f.id for f in blueprint.summary_fields],
    }


def _sections_schema(blueprint: AnalysisBlueprint) -> Dict[str, Any]:
    return {
        "type": "object",
        "description": "Analyseabschnitte",
        "properties": {s.id: _section_schema(s) for s in blueprint.sections},
        "required": [s.id for s in blueprint.sections],
    }


def _section_schema(section: SectionBlueprint) -> Dict[str, Any]:
    return {
        "type": "array",
        "description": section.title,
        "items": {
            "type": "object",
            "properties": {f.id: _field_schema(f) for f in section.fields},
            "required": [f.id for f in section.fields],
        },
    }


def _field_schema(field: SectionField) -> Dict[str, Any]:
    if field.kind is SectionFieldKind.LIST:
        return {
            "type": "array",
            "description": field.label,
            "items": {"type": "string", "description": f"{field.label} (Eintrag)"},
        }
    return {"type": "string", "description": field.label}
