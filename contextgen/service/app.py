"""FastAPI application entrypoint for contextgen service mode."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..context.schema import ENGINE_VERSION
from ..logging import get_logger
from ..normalizer import IngestionCancelledError, IngestionError
from ..pipeline import AnalysisResult, Pipeline
from ..validators import ValidationError

logger = get_logger("service")


class AnalyzeRequest(BaseModel):
    """The ``{files, folders, fileMap}`` input contract plus an optional repo name."""

    model_config = ConfigDict(populate_by_name=True)

    files: List[str]
    folders: Optional[List[str]] = None
    file_map: Dict[str, str] = Field(default_factory=dict, alias="fileMap")
    repo_name: Optional[str] = Field(default=None, alias="repoName")
    timeout: Optional[float] = Field(default=None, gt=0)


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    context: Dict[str, Any]
    json_text: str = Field(alias="json")
    markdown: str
    prompt: str
    summary: str


class HealthResponse(BaseModel):
    status: str
    version: str


def _default_pipeline() -> Pipeline:
    return Pipeline()


def create_app(
    pipeline_factory: Callable[[], Pipeline] = _default_pipeline,
) -> FastAPI:
    """Create the FastAPI application exposing contextgen analysis."""

    app = FastAPI(title="contextgen Service", version=ENGINE_VERSION)

    async def get_pipeline() -> Pipeline:
        return pipeline_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=ENGINE_VERSION)

    @app.post("/analyze", response_model=AnalyzeResponse, response_model_by_alias=True)
    async def analyze(
        payload: AnalyzeRequest,
        pipeline: Pipeline = Depends(get_pipeline),
    ) -> AnalyzeResponse:
        def _run() -> AnalysisResult:
            return pipeline.analyze_mapping(
                payload.files,
                payload.folders,
                payload.file_map,
                repo_name=payload.repo_name,
                timeout=payload.timeout,
            )

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return AnalyzeResponse(
            context=json.loads(result.json),
            json_text=result.json,
            markdown=result.markdown,
            prompt=result.prompt,
            summary=result.summary,
        )

    @app.exception_handler(IngestionCancelledError)
    async def cancelled_handler(_: Any, exc: IngestionCancelledError) -> JSONResponse:
        return JSONResponse(status_code=408, content={"detail": str(exc)})

    @app.exception_handler(IngestionError)
    async def ingestion_error_handler(_: Any, exc: IngestionError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_: Any, exc: ValidationError) -> JSONResponse:
        logger.error("Refusing to serve unsafe public context: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Public context failed validation"})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["AnalyzeRequest", "AnalyzeResponse", "create_app", "run_service"]
