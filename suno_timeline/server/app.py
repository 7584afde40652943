"""FastAPI application exposing the lyric timeline converter.

WHY: Web front-ends and automation tools (n8n, curl, other services)
need the converter over HTTP without shelling out to the CLI. FastAPI
provides request validation and automatic OpenAPI documentation.

HOW: Conversion is a pure, fast, synchronous function of the request
body, so every endpoint answers inline; there is no job store. POST
/timelines returns the nested timeline JSON, POST
/timelines/render/{format_key} returns one formatter's file content.
/formats and /health support discovery and liveness checks.

RULES:
- All endpoints have OpenAPI descriptions on every response
- Error responses use a consistent ErrorResponse schema
- Unknown format keys return 404; malformed bodies return 422 (FastAPI)
- Unexpected conversion failures are logged with logger.exception and
  returned as 500
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from suno_timeline import __version__
from suno_timeline.config import API_HOST, API_PORT
from suno_timeline.core.lyric import Lyric
from suno_timeline.core.parser import SunoParser
from suno_timeline.formatters import FORMATTERS
from suno_timeline.formatters.timeline_json import lyric_to_dict
from suno_timeline.server.models import (
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    TimelineRequest,
    TimelineResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Suno Timeline API",
    description=(
        "REST API for converting Suno aligned lyrics into karaoke timelines "
        "(paragraphs, lines and timed words) and exporting them as timeline "
        "JSON, enhanced LRC, SRT or plain text."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _convert(payload: TimelineRequest) -> Lyric:
    """Run the parser for one request body."""
    parser = SunoParser(
        offset_s=payload.offset_s,
        split_words=payload.split_words,
        duration_s=payload.duration_s,
    )
    records = [item.to_record() for item in payload.aligned_words]
    try:
        return await parser.parse(records, payload.resource_id)
    except Exception:
        logger.exception("Timeline conversion failed for resource %s", payload.resource_id)
        raise HTTPException(status_code=500, detail="Timeline conversion failed.")


# ---------------------------------------------------------------------------
# Endpoints: Timelines
# ---------------------------------------------------------------------------


@app.post(
    "/timelines",
    response_model=TimelineResponse,
    tags=["timelines"],
    summary="Convert aligned words into a lyric timeline",
    description=(
        "Segments the aligned fragments into paragraphs, lines and words, "
        "strips section labels and returns the nested timeline."
    ),
    responses={
        500: {"model": ErrorResponse, "description": "Conversion failed"},
    },
)
async def create_timeline(payload: TimelineRequest) -> TimelineResponse:
    lyric = await _convert(payload)
    logger.info(
        "Converted %d aligned words for %s into %d words",
        len(payload.aligned_words), payload.resource_id, len(lyric.words()),
    )
    return TimelineResponse(**lyric_to_dict(lyric))


@app.post(
    "/timelines/render/{format_key}",
    tags=["timelines"],
    summary="Convert aligned words and render one output format",
    description=(
        "Same conversion as POST /timelines, then runs the named formatter "
        "and returns its file as an attachment."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Unknown format"},
        500: {"model": ErrorResponse, "description": "Conversion failed"},
    },
)
async def render_timeline(format_key: str, payload: TimelineRequest) -> Response:
    if format_key not in FORMATTERS:
        available = ", ".join(sorted(FORMATTERS.keys()))
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available formats: {}".format(format_key, available),
        )

    lyric = await _convert(payload)
    output = FORMATTERS[format_key]().format(lyric)[0]
    filename = "{}{}".format(payload.resource_id, output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, and file suffixes."
    ),
)
async def list_formats() -> List[FormatInfo]:
    # An empty lyric is enough to learn each formatter's suffix
    dummy = await Lyric(resource_id="dummy", duration_s=0.0, timelines=[]).init()
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        outputs = formatter.format(dummy)
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=outputs[0].suffix if outputs else "",
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the suno-timeline-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
