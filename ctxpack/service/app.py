"""FastAPI application entrypoint for ctxpack service mode."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from ..config import PackOptions
from ..packager import Packager

PackagerFactory = Callable[[Sequence[str], PackOptions], Packager]


class PackRequest(BaseModel):
    paths: List[str] = Field(min_length=1)
    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    tokens: bool = False
    max_file_size: Optional[int] = Field(default=None, gt=0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    summary: bool = False
    recent: Optional[int] = Field(default=None, gt=0)


class PackResponse(BaseModel):
    document: str
    total_files: int
    total_lines: int
    total_tokens: int


class HealthResponse(BaseModel):
    status: str


def _default_packager(paths: Sequence[str], options: PackOptions) -> Packager:
    return Packager(paths, options)


def create_app(packager_factory: PackagerFactory = _default_packager) -> FastAPI:
    """Create the FastAPI application exposing the packaging pipeline."""

    app = FastAPI(title="ctxpack Service", version="1.0.0")

    async def get_packager_factory() -> PackagerFactory:
        return packager_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/pack", response_model=PackResponse)
    async def pack_paths(
        payload: PackRequest,
        factory: PackagerFactory = Depends(get_packager_factory),
    ) -> PackResponse:
        options = PackOptions(
            include=list(payload.include),
            exclude=list(payload.exclude),
            tokens=payload.tokens,
            max_file_size=payload.max_file_size,
            max_tokens=payload.max_tokens,
            summary=payload.summary,
            recent=payload.recent,
        )
        # A fresh packager per request keeps run state isolated.
        packager = factory(payload.paths, options)

        def _run_pack() -> PackResponse:
            result = packager.analyze()
            document = packager.generate(result)
            stats = result.statistics
            return PackResponse(
                document=document,
                total_files=stats.total_files,
                total_lines=stats.total_lines,
                total_tokens=stats.total_tokens,
            )

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run_pack)

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
