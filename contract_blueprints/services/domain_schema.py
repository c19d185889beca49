"""
services/domain_schema.py
Статические JSON Schema для запросов о персоне и стране.

Каждое свойство может нести блок "x-ui" (label/order/variant/tooltip) —
его читает только фронтенд. В модель схема уходит без "x-ui"
(см. strip_ui_metadata).
"""
import copy
from typing import Any, Dict

from contract_blueprints.schemas import AnalysisType


def _ui(label: str, order: int, variant: str, tooltip: str) -> Dict[str, Any]:
    return {"label": label, "order": order, "variant": variant, "tooltip": tooltip}


def _text(description: str, ui: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "string", "description": description, "x-ui": ui}


def _list(description: str, ui: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description, "x-ui": ui}


PERSON_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "name": _text(
            "Voller Name der Person.",
            _ui("Person", 10, "highlight", "Vollständiger Name der gesuchten Person."),
        ),
        "geburtsdatum": _text(
            "Geburtsdatum im Format TT. Monat JJJJ (oder Jahr, falls unbekannt).",
            _ui("Geboren", 20, "default", "Datum oder Jahr der Geburt."),
        ),
        "geburtsort": _text(
            "Ort und Land der Geburt.",
            _ui("Geburtsort", 30, "default", "Stadt und Land der Geburt."),
        ),
        "nationalitaet": _text(
            "Hauptsächliche Nationalität oder kulturelle Zugehörigkeit.",
            _ui("Nationalität", 40, "default", "Staatsangehörigkeit bzw. kulturelle Zugehörigkeit."),
        ),
        "haupttaetigkeit": _text(
            "Kurzbeschreibung des wichtigsten Tätigkeitsfeldes (z. B. Wissenschaftlerin, Musiker, Politikerin).",
            _ui("Tätigkeit", 50, "badge", "Wofür die Person vor allem bekannt ist."),
        ),
        "bekannteWerke": _list(
            "Liste prägender Werke, Projekte oder Leistungen mit Jahresangabe, falls möglich.",
            _ui("Bekannte Werke", 60, "pill-list", "Prägende Werke, Projekte oder Leistungen."),
        ),
        "auszeichnungen": _list(
            "Wichtige Auszeichnungen mit Jahr (falls bekannt).",
            _ui("Auszeichnungen", 70, "pill-list", "Preise und Ehrungen mit Jahr."),
        ),
        "kurzbiografie": _text(
            "Prägnante Zusammenfassung der wichtigsten Lebensstationen und Bedeutung der Person in 3–4 Sätzen.",
            _ui("Kurzbiografie", 80, "paragraph", "Lebensstationen und Bedeutung in wenigen Sätzen."),
        ),
        "bildPrompt": _text(
            "Bildbeschreibung, die die Person mit Namen, typischem Aussehen, Kleidungsstil und Stimmung schildert.",
            _ui("Bild-Prompt", 90, "muted", "Prompt für die KI-Bildgenerierung."),
        ),
    },
    "required": [
        "name",
        "geburtsdatum",
        "nationalitaet",
        "haupttaetigkeit",
        "bekannteWerke",
        "kurzbiografie",
        "bildPrompt",
    ],
}

COUNTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "name": _text(
            "Offizieller deutscher Name des Landes.",
            _ui("Land", 10, "highlight", "Name des analysierten Landes."),
        ),
        "hauptstadt": _text(
            "Die Hauptstadt des Landes.",
            _ui("Hauptstadt", 20, "default", "Sitz der Regierung bzw. offizielle Hauptstadt."),
        ),
        "einwohnerzahl": _text(
            "Aktuelle Einwohnerzahl als Text inklusive Stand, z. B. '9,1 Mio. (2024)'.",
            _ui("Einwohner", 30, "metric", "Geschätzte Einwohnerzahl mit Stand."),
        ),
        "flaeche": _text(
            "Fläche des Landes inklusive Maßeinheit.",
            _ui("Fläche", 40, "metric", "Gesamtfläche inklusive Einheit."),
        ),
        "amtssprachen": _list(
            "Amtssprachen und weit verbreitete Sprachen.",
            _ui("Amtssprachen", 50, "pill-list", "Offizielle und verbreitete Sprachen."),
        ),
        "kontinent": _text(
            "Kontinent, auf dem das Land liegt.",
            _ui("Kontinent", 60, "badge", "Geografische Lage."),
        ),
        "staatsform": _text(
            "Staats- und Regierungsform.",
            _ui("Staatsform", 70, "default", "Zum Beispiel parlamentarische Republik."),
        ),
        "kurzbeschreibung": _text(
            "Prägnante Beschreibung des Landes in 2–3 Sätzen.",
            _ui("Kurzbeschreibung", 80, "paragraph", "Überblick über Land und Leute."),
        ),
        "bildPrompt": _text(
            "Prägnanter Prompt für eine bildliche Darstellung (Motiv, Stil, Lichtstimmung).",
            _ui("Bild-Prompt", 90, "muted", "Prompt für die KI-Bildgenerierung."),
        ),
    },
    "required": [
        "name",
        "hauptstadt",
        "einwohnerzahl",
        "flaeche",
        "amtssprachen",
        "kontinent",
        "kurzbeschreibung",
        "bildPrompt",
    ],
}


class _SchemaProvider:
    """Отдаёт глубокую копию — вызывающий может менять её как угодно."""

    name: str
    _schema: Dict[str, Any]

    def get_schema(self) -> Dict[str, Any]:
        return copy.deepcopy(self._schema)


class PersonSchemaProvider(_SchemaProvider):
    name = "person_information"
    _schema = PERSON_SCHEMA


class CountrySchemaProvider(_SchemaProvider):
    name = "country_information"
    _schema = COUNTRY_SCHEMA


def get_provider(kind: AnalysisType) -> _SchemaProvider:
    if kind is AnalysisType.PERSON:
        return PersonSchemaProvider()
    return CountrySchemaProvider()


def strip_ui_metadata(node: Any) -> Any:
    """Копия схемы без ключей "x-ui" на любом уровне."""
    if isinstance(node, dict):
        return {k: strip_ui_metadata(v) for k, v in node.items() if k != "x-ui"}
    if isinstance(node, list):
        return [strip_ui_metadata(v) for v in node]
    return node
