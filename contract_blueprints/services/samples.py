"""
services/samples.py
Готовые примеры AnalysisResult для каждого blueprint (samples.yaml).
Используются фронтендом, пока договор ещё не проанализирован.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.blueprints.registry import BlueprintRegistry
from contract_blueprints.errors import BlueprintNotFoundError
from contract_blueprints.schemas import AnalysisResult

SAMPLES_FILE = Path(__file__).resolve().parent / "samples.yaml"

PLACEHOLDER = "–"


class SampleResultProvider:
    def __init__(self, registry: BlueprintRegistry, samples: Optional[Dict[str, Any]] = None):
        self._registry = registry
        if samples is None:
            samples = yaml.safe_load(SAMPLES_FILE.read_text(encoding="utf-8")) or {}
        self._samples = samples

    def get_sample(self, blueprint_id: str) -> AnalysisResult:
        blueprint = self._registry.get_by_id(blueprint_id)
        raw = self._samples.get(blueprint.id)
        if raw is None:
            raise BlueprintNotFoundError(f"Kein Sample für Blueprint '{blueprint_id}' konfiguriert.")
        return _build_result(blueprint, raw)


def _build_result(blueprint: AnalysisBlueprint, raw: Dict[str, Any]) -> AnalysisResult:
    values = raw.get("summary") or {}
    summary = {}
    for field in blueprint.summary_fields:
        value = values.get(field.id)
        summary[field.id] = str(value) if value is not None and str(value).strip() else PLACEHOLDER

    raw_sections = raw.get("sections") or {}
    sections = {s.id: list(raw_sections.get(s.id) or []) for s in blueprint.sections}

    return AnalysisResult(
        blueprint_id=blueprint.id,
        summary=summary,
        sections=sections,
        conclusion=raw.get("conclusion", ""),
        collective_agreement=raw.get("collective_agreement"),
    )
