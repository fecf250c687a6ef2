"""
Q&A Forum Backend - Health Check and Index Routes
===================================================

What:  GET / (liveness string) and GET /health (database probe).
Who:   Docker health checks, load balancers, humans with curl.

Status levels:
    healthy:   the database answers SELECT 1 (HTTP 200)
    unhealthy: the database is unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from qaforum import __version__
from qaforum.database import get_database
from qaforum.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", summary="Liveness string")
async def index() -> str:
    return "Server API is working 🚀"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Probe the database with SELECT 1 on a fresh pooled connection.

    Returns:
        HealthResponse, with HTTP 503 when the database is unreachable.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        database = get_database(request)
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
