"""FastAPI application for the TDD review data library.

This module exposes the review pipeline over HTTP. Runtime settings are
read from ``TDD_REVIEW_*`` environment variables on every request.

Usage (from project root, after installing the ``server`` extra):

    uvicorn tdd_review.api.app:app --reload

Then GET /api/review-data for the classified review data of the
configured source, or POST a CSV body to /api/review/parse.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .. import __version__
from ..parsers.serialization import ParsedDataSerializer
from ..pipeline import PipelineConfig, ReviewPipeline
from ..review.view_renderer import ReportRenderer


app = FastAPI(title="TDD Review Data API", version=__version__)


def _create_pipeline_from_env() -> ReviewPipeline:
    """Create a pipeline configured from the environment.

    Raises HTTPException(500) when the environment holds an invalid
    setting, such as a non-numeric TDD_REVIEW_TIMEOUT or an unknown
    TDD_REVIEW_WORD_CHANGE_STRATEGY.
    """
    try:
        return ReviewPipeline(config=PipelineConfig.from_env())
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=f"Invalid configuration: {exc}") from exc


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}


@app.post("/api/review/parse")
async def parse_review_csv(request: Request) -> JSONResponse:
    """Parse and classify a posted review CSV.

    The request body is the raw CSV text. Returns the three classified
    collections, their counts and the diagnostics of dropped rows.
    """
    body = await request.body()
    try:
        csv_text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="Request body must be UTF-8 text") from exc

    if not csv_text.strip():
        raise HTTPException(status_code=400, detail="Request body is empty")

    pipeline = _create_pipeline_from_env()
    parsed = pipeline.parse_text(csv_text)

    response_payload = ParsedDataSerializer.to_dict(parsed)
    response_payload["counts"] = parsed.counts()
    return JSONResponse(status_code=200, content=response_payload)


@app.get("/api/review-data")
def get_review_data() -> JSONResponse:
    """Run the pipeline against the configured review data source.

    A source that cannot be read is reported in the payload with
    ``success: false`` and empty collections rather than as an HTTP error.
    """
    pipeline = _create_pipeline_from_env()
    result = pipeline.run()
    return JSONResponse(status_code=200, content=result.to_dict())


@app.get("/api/review/report", response_class=HTMLResponse)
def get_review_report(
    page: Optional[str] = Query(None, description="Page filter, e.g. 'Page 4'"),
    tag: Optional[List[str]] = Query(None, description="Edit-type tags to keep"),
) -> HTMLResponse:
    """Render the HTML review report for the configured source."""
    pipeline = _create_pipeline_from_env()
    result = pipeline.run()

    renderer = ReportRenderer()
    html = renderer.render_report(result, page=page, tags=tag)
    return HTMLResponse(status_code=200, content=html)
