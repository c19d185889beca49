"""
services/result_parser.py
Разбор ответа модели: достаём JSON (в т.ч. из ```-блока), парсим
и приводим к AnalysisResult. Отсутствующие поля сводки и секции
заполняются значениями по умолчанию — это никогда не фатально.
Фатален только невалидный JSON целиком.
"""
import json
import logging
from typing import Any, Dict, List, Union

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.errors import ModelOutputError
from contract_blueprints.schemas import AnalysisResult

log = logging.getLogger(__name__)

FENCE = "```"

# Узел JSON после нормализации
JsonValue = Union[str, int, float, bool, None, List[str], Dict[str, Any]]


def extract_json_payload(raw: str) -> str:
    """
    • Обычный текст → возвращаем как есть (после strip)
    • ```json\\n{...}\\n``` → убираем первую строку и всё с последнего ```
    """
    text = (raw or "").strip()
    if not text.startswith(FENCE):
        return text

    newline = text.find("\n")
    if newline < 0:
        return text

    body = text[newline + 1:]
    closing = body.rfind(FENCE)
    if closing >= 0:
        body = body[:closing]
    return body.strip()


def parse_json_object(raw: str) -> Dict[str, Any]:
    """Строго: на верхнем уровне должен быть JSON-объект."""
    payload = extract_json_payload(raw)
    try:
        parsed = json.loads(payload)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ModelOutputError("Das Ergebnis konnte nicht als JSON gelesen werden.") from exc
    if not isinstance(parsed, dict):
        raise ModelOutputError("Das Ergebnis konnte nicht als JSON-Objekt gelesen werden.")
    return parsed


def parse_model_output(raw: str, blueprint: AnalysisBlueprint) -> AnalysisResult:
    data = parse_json_object(raw)

    summary_node = data.get("summary")
    if not isinstance(summary_node, dict):
        summary_node = {}
    summary = {f.id: to_display_string(summary_node.get(f.id)) for f in blueprint.summary_fields}

    declared = [s.id for s in blueprint.sections]
    sections: Dict[str, List[Dict[str, JsonValue]]] = {}
    sections_node = data.get("sections")
    if isinstance(sections_node, dict):
        for key, entries in sections_node.items():
            if not isinstance(entries, list):
                continue
            if key not in declared:
                log.warning("Blueprint %s: ignoring undeclared section '%s'", blueprint.id, key)
                continue
            sections[key] = [
                {name: convert_json_value(value) for name, value in entry.items()}
                for entry in entries
                if isinstance(entry, dict)
            ]

    # каждая объявленная секция — ключ в результате (минимум пустой список)
    ordered = {sid: sections.get(sid, []) for sid in declared}

    agreement = data.get("collectiveAgreement")
    return AnalysisResult(
        blueprint_id=blueprint.id,
        summary=summary,
        sections=ordered,
        conclusion=to_display_string(data.get("conclusion")),
        collective_agreement=None if agreement is None else to_display_string(agreement),
    )


def to_display_string(value: Any) -> str:
    """Значение сводки → строка: None → "", bool → "true"/"false", числа как в JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def convert_json_value(value: Any) -> JsonValue:
    """
    Явный рекурсивный разбор узла JSON:
      str / bool / None → как есть
      число            → int, если нет дробной части, иначе float
      массив           → список строк (не-строки сериализуются)
      объект           → строковая форма (compact JSON)
    """
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, list):
        return [item if isinstance(item, str) else _stringify(item) for item in value]
    if isinstance(value, dict):
        return _stringify(value)
    return str(value)


def _stringify(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
