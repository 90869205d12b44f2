"""FastAPI application entrypoint for podrefs service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..builder import Installation, build_installation
from ..config import ConfigError, load_config
from ..headers import MissingInputError
from ..project import ProjectModelError


class InstallRequest(BaseModel):
    path: str
    workers: int = 1


class CollisionModel(BaseModel):
    visibility: str
    platform: str
    destination: str
    pods: List[str]


class InstallResponse(BaseModel):
    groups: Dict[str, Any]
    headers: Dict[str, Any]
    file_references: int
    collisions: List[CollisionModel]


class HealthResponse(BaseModel):
    status: str


def _default_installation_factory(path: str) -> Installation:
    return build_installation(load_config(Path(path)))


def create_app(
    installation_factory: Callable[[str], Installation] = _default_installation_factory,
) -> FastAPI:
    """Create the FastAPI application exposing the file references installer."""

    app = FastAPI(title="podrefs Service", version="1.0.0")

    async def get_installation_factory() -> Callable[[str], Installation]:
        return installation_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/install", response_model=InstallResponse)
    async def install(
        payload: InstallRequest,
        factory: Callable[[str], Installation] = Depends(get_installation_factory),
    ) -> InstallResponse:
        def _run_install() -> Dict[str, Any]:
            installation = factory(payload.path)
            report = installation.installer(max_workers=payload.workers).install()
            return installation.layout(report)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover - fallback path when not in async context
            layout = _run_install()
        else:
            layout = await loop.run_in_executor(None, _run_install)
        return InstallResponse(**layout)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ProjectModelError)
    async def project_error_handler(_: Any, exc: ProjectModelError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(MissingInputError)
    async def missing_input_handler(_: Any, exc: MissingInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
