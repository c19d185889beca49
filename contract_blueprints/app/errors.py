"""
app/errors.py
Перевод доменных исключений в problem-details JSON:
{ "type", "title", "status", "detail" }.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from contract_blueprints.errors import AnalysisError, BlueprintNotFoundError, UpstreamError
from contract_blueprints.schemas import Problem

log = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(status: int, title: str, detail: str | None = None) -> JSONResponse:
    body = Problem(title=title, status=status, detail=detail)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def _blueprint_not_found(request: Request, exc: BlueprintNotFoundError) -> JSONResponse:
    return problem_response(exc.status_code, exc.title, str(exc.args[0]) if exc.args else None)


async def _upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    return problem_response(exc.status_code, exc.title, exc.detail)


async def _analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s → %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return problem_response(exc.status_code, exc.title, str(exc))


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return problem_response(500, AnalysisError.title, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlueprintNotFoundError, _blueprint_not_found)
    app.add_exception_handler(UpstreamError, _upstream_error)
    app.add_exception_handler(AnalysisError, _analysis_error)
    app.add_exception_handler(Exception, _unhandled)
