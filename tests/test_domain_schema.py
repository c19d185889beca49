import pytest

from contract_blueprints.schemas import AnalysisType
from contract_blueprints.services.domain_schema import (
    CountrySchemaProvider,
    PersonSchemaProvider,
    get_provider,
    strip_ui_metadata,
)


@pytest.mark.parametrize("provider_cls, key", [(PersonSchemaProvider, "name"), (CountrySchemaProvider, "hauptstadt")])
def test_get_schema_returns_independent_copies(provider_cls, key):
    provider = provider_cls()
    first = provider.get_schema()
    second = provider.get_schema()

    second["properties"][key]["description"] = "verändert"
    second["properties"][key]["x-ui"]["order"] = -1

    assert first["properties"][key]["description"] != "verändert"
    assert first["properties"][key]["x-ui"]["order"] != -1
    assert provider_cls().get_schema()["properties"][key]["description"] != "verändert"


def test_country_schema_shape():
    schema = CountrySchemaProvider().get_schema()
    assert schema["type"] == "object"
    assert schema["additionalProperties"] is False
    assert set(schema["required"]) == {
        "name",
        "hauptstadt",
        "einwohnerzahl",
        "flaeche",
        "amtssprachen",
        "kontinent",
        "kurzbeschreibung",
        "bildPrompt",
    }

    props = schema["properties"]
    assert set(schema["required"]) | {"staatsform"} <= set(props)
    assert props["amtssprachen"]["type"] == "array"
    assert props["amtssprachen"]["items"]["type"] == "string"
    assert props["einwohnerzahl"]["type"] == "string"
    assert props["flaeche"]["type"] == "string"
    assert props["bildPrompt"]["type"] == "string"
    assert props["bildPrompt"]["description"].strip()


def test_person_schema_ui_metadata():
    schema = PersonSchemaProvider().get_schema()
    assert schema["additionalProperties"] is False
    assert set(schema["required"]) == {
        "name",
        "geburtsdatum",
        "nationalitaet",
        "haupttaetigkeit",
        "bekannteWerke",
        "kurzbiografie",
        "bildPrompt",
    }
    props = schema["properties"]
    assert "geburtsort" in props

    name_ui = props["name"]["x-ui"]
    assert name_ui["label"] == "Person"
    assert name_ui["order"] == 10
    assert name_ui["variant"] == "highlight"
    assert "Name" in name_ui["tooltip"]

    works_ui = props["bekannteWerke"]["x-ui"]
    assert works_ui["variant"] == "pill-list"
    assert "Werke" in works_ui["tooltip"]

    prompt_ui = props["bildPrompt"]["x-ui"]
    assert prompt_ui["variant"] == "muted"
    assert prompt_ui["order"] == 90
    assert "Prompt" in prompt_ui["tooltip"]


@pytest.mark.parametrize("kind", list(AnalysisType))
def test_ui_orders_are_unique(kind):
    props = get_provider(kind).get_schema()["properties"]
    orders = [p["x-ui"]["order"] for p in props.values()]
    assert len(orders) == len(set(orders))


def test_strip_ui_metadata_removes_only_ui_keys():
    schema = PersonSchemaProvider().get_schema()
    stripped = strip_ui_metadata(schema)

    assert all("x-ui" not in p for p in stripped["properties"].values())
    assert stripped["required"] == schema["required"]
    assert stripped["properties"]["bekannteWerke"]["items"] == {"type": "string"}
    assert "x-ui" in schema["properties"]["name"]


def test_get_provider_selects_by_type():
    assert isinstance(get_provider(AnalysisType.PERSON), PersonSchemaProvider)
    assert isinstance(get_provider(AnalysisType.COUNTRY), CountrySchemaProvider)
