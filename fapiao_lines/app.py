"""FastAPI application extracting line items from uploaded invoice PDFs.

Endpoints:
- GET /health - Health check
- POST /process - Single PDF -> document result
- POST /batch - Multiple PDFs -> document results in upload order
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile

from .batch import BatchItem
from .columns import COLUMN_NAMES
from .logging import get_logger
from .pdf_source import FragmentSourceError, load_pages
from .runtime import Runtime, build_runtime

logger = get_logger(__name__)


def get_runtime(request: Request) -> Runtime:
    runtime: Runtime = request.app.state.runtime
    return runtime


async def _read_pdf(file: UploadFile, runtime: Runtime) -> bytes:
    if not (file.filename or "").lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="File must be a PDF")
    data = await file.read()
    if len(data) > runtime.config.max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {runtime.config.max_upload_mb} MB")
    return data


def create_app(runtime: Runtime | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "runtime", None) is None:
            app.state.runtime = build_runtime()
        yield

    api = FastAPI(
        title="Fapiao Line Items",
        description="Reconstruct VAT invoice line items from PDF text positions",
        version="1.0.0",
        lifespan=lifespan,
    )
    if runtime is not None:
        api.state.runtime = runtime

    columns = list(COLUMN_NAMES)

    @api.get("/health")
    def health(runtime: Runtime = Depends(get_runtime)) -> dict:
        return {
            "status": "healthy",
            "service": "fapiao-lines",
            "strategy": runtime.config.strategy.value,
        }

    @api.post("/process")
    async def process_single(
        file: UploadFile = File(...),
        runtime: Runtime = Depends(get_runtime),
    ) -> dict:
        data = await _read_pdf(file, runtime)
        name = Path(file.filename).name
        try:
            pages = await asyncio.to_thread(load_pages, data)
        except FragmentSourceError as exc:
            logger.error("document_failed", source=name, error=str(exc))
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        result = await asyncio.to_thread(runtime.extractor.extract, pages, name)
        return result.to_dict(columns)

    @api.post("/batch")
    async def process_batch(
        files: List[UploadFile] = File(...),
        runtime: Runtime = Depends(get_runtime),
    ) -> dict:
        items: List[BatchItem] = []
        for file in files:
            data = await _read_pdf(file, runtime)
            items.append((Path(file.filename).name, data))

        results = await asyncio.to_thread(runtime.run_batch, items)
        return {"results": [r.to_dict(columns) for r in results]}

    return api
