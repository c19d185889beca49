"""
main.py
Запуск: uvicorn contract_blueprints.app.main:app --reload --port 8030
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from contract_blueprints.app.errors import register_exception_handlers
from contract_blueprints.app.routers import router
from contract_blueprints.blueprints.registry import BlueprintRegistry
from contract_blueprints.core.settings import settings
from contract_blueprints.services.analyzer import AnalyzerService
from contract_blueprints.services.image_client import ImageService
from contract_blueprints.services.llm_client import ChatService, create_client
from contract_blueprints.services.samples import SampleResultProvider

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # всё строится один раз до первого запроса и дальше только читается
    client = create_client()
    registry = BlueprintRegistry()
    app.state.registry = registry
    app.state.samples = SampleResultProvider(registry)
    app.state.analyzer = AnalyzerService(ChatService(client), ImageService(client))
    try:
        yield
    finally:
        await client.close()


app = FastAPI(
    title="Contract Blueprints API",
    version="1.0.0",
    description="Structured-Output-Analysen (Person, Land, Vertrag) über die Nebius API.",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Analysis", "description": "Person/Land-Analyse und Bildgenerierung"},
        {"name": "Blueprints", "description": "Vertrags-Blueprints, Schemas und Beispiele"},
    ],
)

register_exception_handlers(app)
app.include_router(router)


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}
