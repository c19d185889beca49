"""
app/routers.py
HTTP-роуты: схемы, blueprints, примеры, анализ и генерация изображений.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Query, Request

from contract_blueprints.blueprints.models import AnalysisBlueprint
from contract_blueprints.blueprints.registry import BlueprintRegistry
from contract_blueprints.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisResult,
    AnalysisType,
    BlueprintInfo,
    ContractAnalysisRequest,
    ImageGenerationResult,
    ImageRequest,
)
from contract_blueprints.services.analyzer import AnalyzerService
from contract_blueprints.services.domain_schema import get_provider
from contract_blueprints.services.samples import SampleResultProvider
from contract_blueprints.services.schema_builder import build_result_schema

router = APIRouter(prefix="/api")


# ---------- DI: объекты созданы один раз в lifespan ----------
def get_registry(request: Request) -> BlueprintRegistry:
    return request.app.state.registry


def get_samples(request: Request) -> SampleResultProvider:
    return request.app.state.samples


def get_analyzer(request: Request) -> AnalyzerService:
    return request.app.state.analyzer


def get_blueprint(blueprint_id: str, registry: BlueprintRegistry = Depends(get_registry)) -> AnalysisBlueprint:
    """Неизвестный id → BlueprintNotFoundError → 404 до любых сетевых вызовов."""
    return registry.get_by_id(blueprint_id)


# ---------- Person / Country ----------
@router.get("/schema", tags=["Analysis"], summary="JSON Schema (mit UI-Metadaten) für Person oder Land")
def get_schema(kind: AnalysisType = Query(AnalysisType.COUNTRY, alias="type")) -> Dict[str, Any]:
    return get_provider(kind).get_schema()


@router.post(
    "/analyze",
    tags=["Analysis"],
    response_model=AnalysisResponse,
    summary="Person oder Land analysieren (+ Illustration)",
)
async def analyze(
    req: AnalysisRequest = Body(...),
    analyzer: AnalyzerService = Depends(get_analyzer),
):
    return await analyzer.analyze(req)


@router.post(
    "/generate-image",
    tags=["Analysis"],
    response_model=ImageGenerationResult,
    summary="Bild aus einem Prompt erzeugen",
)
async def generate_image(
    req: ImageRequest = Body(...),
    analyzer: AnalyzerService = Depends(get_analyzer),
):
    return await analyzer.generate_image(req.prompt)


# ---------- Blueprints ----------
@router.get("/blueprints", tags=["Blueprints"], response_model=List[BlueprintInfo])
def list_blueprints(registry: BlueprintRegistry = Depends(get_registry)):
    return registry.summarize()


@router.get("/blueprints/{blueprint_id}", tags=["Blueprints"], response_model=AnalysisBlueprint)
def get_blueprint_details(blueprint: AnalysisBlueprint = Depends(get_blueprint)):
    return blueprint


@router.get("/blueprints/{blueprint_id}/schema", tags=["Blueprints"], summary="Ergebnis-Schema des Blueprints")
def get_blueprint_schema(blueprint: AnalysisBlueprint = Depends(get_blueprint)) -> Dict[str, Any]:
    return build_result_schema(blueprint)


@router.post(
    "/blueprints/{blueprint_id}/analysis",
    tags=["Blueprints"],
    response_model=AnalysisResult,
    summary="Vertragstext gegen ein Blueprint analysieren",
)
async def analyze_contract(
    req: ContractAnalysisRequest = Body(...),
    blueprint: AnalysisBlueprint = Depends(get_blueprint),
    analyzer: AnalyzerService = Depends(get_analyzer),
):
    return await analyzer.analyze_contract(blueprint, req.contract_text)


@router.get("/samples/{blueprint_id}", tags=["Blueprints"], response_model=AnalysisResult)
def get_sample(blueprint_id: str, samples: SampleResultProvider = Depends(get_samples)):
    return samples.get_sample(blueprint_id)
