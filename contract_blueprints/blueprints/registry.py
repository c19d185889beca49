"""
blueprints/registry.py
Реестр Blueprint-ов: читается один раз из blueprints.yaml при старте,
дальше — только чтение (никакой регистрации в рантайме).
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import yaml

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.errors import BlueprintNotFoundError

BLUEPRINTS_FILE = Path(__file__).resolve().parent / "blueprints.yaml"


def load_blueprints(path: Path = BLUEPRINTS_FILE) -> List[AnalysisBlueprint]:
    """Читает YAML и валидирует каждый blueprint через pydantic."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return [AnalysisBlueprint.model_validate(raw) for raw in data.get("blueprints", [])]


class BlueprintRegistry:
    """Неизменяемый снимок всех известных blueprint-ов."""

    def __init__(self, blueprints: Optional[Sequence[AnalysisBlueprint]] = None):
        items = tuple(load_blueprints() if blueprints is None else blueprints)

        by_id: Dict[str, AnalysisBlueprint] = {}
        for bp in items:
            key = bp.id.casefold()
            if key in by_id:
                raise ValueError(f"Duplicate blueprint id '{bp.id}'")
            by_id[key] = bp

        self._blueprints = items
        self._by_id = by_id

    def get_all(self) -> List[AnalysisBlueprint]:
        return list(self._blueprints)

    def get_by_id(self, blueprint_id: str) -> AnalysisBlueprint:
        """Поиск без учёта регистра; неизвестный id → BlueprintNotFoundError."""
        try:
            return self._by_id[(blueprint_id or "").casefold()]
        except KeyError:
            raise BlueprintNotFoundError(f"Blueprint '{blueprint_id}' wurde nicht gefunden.") from None

    def summarize(self) -> List[Dict[str, object]]:
        # короткий список для выпадающего меню фронтенда
        return [
            {"id": bp.id, "displayName": bp.display_name, "sectionCount": len(bp.sections)}
            for bp in self._blueprints
        ]
