"""
services/prompts.py
Загрузка шаблонов и сборка system/user сообщений для трёх видов анализа:
персона, страна, договор (по blueprint).
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.schemas import AnalysisType

PROMPT_DIR = Path(__file__).resolve().parents[1] / "prompts"


def _read(name: str) -> str:
    return (PROMPT_DIR / name).read_text(encoding="utf-8")


SYSTEM_PROMPTS: Dict[str, str] = {
    "person": _read("person.system.txt").strip(),
    "country": _read("country.system.txt").strip(),
    "contract": _read("contract.system.txt").strip(),
}
USER_TEMPLATES: Dict[str, str] = {
    "person": _read("person_user.tpl.txt"),
    "country": _read("country_user.tpl.txt"),
    "contract": _read("contract_user.tpl.txt"),
}


def build_domain_messages(kind: AnalysisType, query: str) -> List[Dict[str, str]]:
    """system + user для запроса о персоне или стране."""
    return [
        {"role": "system", "content": SYSTEM_PROMPTS[kind.value]},
        {"role": "user", "content": USER_TEMPLATES[kind.value].format(QUERY=query).strip()},
    ]


def _truncate(text: str, limit: int) -> Tuple[str, Optional[str]]:
    if len(text) <= limit:
        return text, None
    return text[:limit], f"Vertragstext auf {limit} Zeichen gekürzt."


def build_contract_messages(
    blueprint: AnalysisBlueprint,
    contract_text: str,
    *,
    max_chars: int,
) -> Tuple[List[Dict[str, str]], Optional[str]]:
    """
    Подставляет в шаблон:
      • SUMMARY_BLOCK  — поля сводки (id: label)
      • SECTIONS_BLOCK — секции и их поля
      • CONTRACT       — текст договора (усечённый до max_chars)
    Возвращает (messages, note) — note не None, если текст усечён.
    """
    text, note = _truncate(contract_text, max_chars)

    summary_block = "\n".join(f"- {f.id}: {f.label}" for f in blueprint.summary_fields)
    sections_block = "\n".join(
        f"- {s.id} ({s.title}): " + ", ".join(f.id for f in s.fields)
        for s in blueprint.sections
    )
    agreement_hint = ""
    if blueprint.has_collective_agreement:
        agreement_hint = f"\nGib im Feld collectiveAgreement an: {blueprint.collective_agreement_label}"

    user_msg = USER_TEMPLATES["contract"].format(
        DISPLAY_NAME=blueprint.display_name,
        SUMMARY_BLOCK=summary_block,
        SECTIONS_BLOCK=sections_block,
        CONCLUSION_LABEL=blueprint.conclusion_label,
        AGREEMENT_HINT=agreement_hint,
        CONTRACT=text,
    ).strip()

    return [
        {"role": "system", "content": SYSTEM_PROMPTS["contract"]},
        {"role": "user", "content": user_msg},
    ], note
