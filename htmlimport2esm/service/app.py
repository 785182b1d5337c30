"""FastAPI application entrypoint for htmlimport2esm service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, RewriteOptions
from ..converter import Converter
from ..migrator import MigrationReport, Migrator


class ConvertRequest(BaseModel):
    html: str
    js: Optional[str] = None
    filename: str = ""
    library_segment: Optional[str] = None


class ConvertResponse(BaseModel):
    status: str
    identity: Optional[str] = None
    output: Optional[str] = None
    reason: Optional[str] = None
    detail: Optional[str] = None


class MigrateRequest(BaseModel):
    path: str
    dry_run: bool = False


class FailureEntry(BaseModel):
    path: str
    reason: str
    detail: Optional[str] = None


class MigrateResponse(BaseModel):
    status: str
    converted: List[str]
    failed: List[FailureEntry]
    dry_run: bool


class HealthResponse(BaseModel):
    status: str


def _default_migrator() -> Migrator:
    return Migrator()


def create_app(
    migrator_factory: Callable[[], Migrator] = _default_migrator,
) -> FastAPI:
    """Create the FastAPI application exposing conversion operations."""

    app = FastAPI(title="htmlimport2esm Service", version="1.0.0")

    async def get_migrator() -> Migrator:
        return migrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/convert", response_model=ConvertResponse)
    async def convert(payload: ConvertRequest) -> ConvertResponse:
        converter = Converter(RewriteOptions().with_library_segment(payload.library_segment))
        result = converter.convert(payload.js, payload.html, payload.filename)
        if result.output is None:
            return ConvertResponse(
                status="failed",
                reason=result.reason.value if result.reason else None,
                detail=result.message,
            )
        return ConvertResponse(
            status="ok",
            identity=result.output.identity,
            output=result.output.text,
        )

    @app.post("/migrate", response_model=MigrateResponse)
    async def migrate(
        payload: MigrateRequest,
        migrator: Migrator = Depends(get_migrator),
    ) -> MigrateResponse:
        def _run() -> MigrationReport:
            return migrator.run(payload.path, dry_run=payload.dry_run)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run)
        return MigrateResponse(
            status="ok" if report.success else "partial",
            converted=[str(outcome.pair.target_path) for outcome in report.converted],
            failed=[
                FailureEntry(
                    path=str(outcome.pair.target_path),
                    reason=outcome.result.reason.value if outcome.result.reason else "Unknown",
                    detail=outcome.result.message,
                )
                for outcome in report.failed
            ],
            dry_run=report.dry_run,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
