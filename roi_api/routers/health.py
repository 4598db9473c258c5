# roi_api/routers/health.py
# -----------------------------------------------------------------------------
# /health            : database ping + process memory + free disk space
# /health/liveness   : is the process running?
# /health/readiness  : can it serve traffic (database reachable)?
# - not rate limited
# -----------------------------------------------------------------------------
import os
import resource
import shutil
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roi_api.core.config import settings
from roi_api.db import crud
from roi_api.db.session import get_session

router = APIRouter(prefix="/health", tags=["health"])

STARTED_AT = time.monotonic()
STATM = Path("/proc/self/statm")


def _rss_mb() -> float:
    """Current resident set size of this process in MB"""
    try:
        resident_pages = int(STATM.read_text().split()[1])
        return resident_pages * os.sysconf("SC_PAGE_SIZE") / (1024 * 1024)
    except (OSError, IndexError, ValueError):
        pass
    # no procfs: fall back to the peak value
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # bytes on macOS, kilobytes elsewhere
    return peak / (1024 * 1024) if sys.platform == "darwin" else peak / 1024


async def _database_check(db: AsyncSession) -> tuple[bool, dict]:
    try:
        await crud.ping(db)
        return True, {"status": "up"}
    except SQLAlchemyError as e:
        logger.warning("database ping failed: {}", e)
        return False, {"status": "down", "message": str(e)}


def _memory_check() -> tuple[bool, dict]:
    rss = round(_rss_mb(), 1)
    limit = settings.MEMORY_RSS_LIMIT_MB
    ok = rss <= limit
    return ok, {"status": "up" if ok else "down", "rssMb": rss, "limitMb": limit}


def _disk_check() -> tuple[bool, dict]:
    usage = shutil.disk_usage(settings.DISK_PATH)
    used = round(usage.used / usage.total, 3) if usage.total else 1.0
    threshold = settings.DISK_THRESHOLD_PERCENT
    ok = used <= threshold
    return ok, {
        "status": "up" if ok else "down",
        "path": settings.DISK_PATH,
        "usedPercent": used,
        "thresholdPercent": threshold,
    }


def _report(checks: dict[str, tuple[bool, dict]]) -> JSONResponse:
    details = {name: detail for name, (_, detail) in checks.items()}
    ok = all(passed for passed, _ in checks.values())
    body = {
        "status": "ok" if ok else "error",
        "info": {k: v for k, v in details.items() if v["status"] == "up"},
        "error": {k: v for k, v in details.items() if v["status"] != "up"},
        "details": details,
    }
    return JSONResponse(body, status_code=200 if ok else 503)


@router.get("", summary="Complete health check")
async def health(db: AsyncSession = Depends(get_session)):
    return _report(
        {
            "database": await _database_check(db),
            "memory_rss": _memory_check(),
            "disk": _disk_check(),
        }
    )


@router.get("/liveness", summary="Liveness probe")
async def liveness():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }


@router.get("/readiness", summary="Readiness probe")
async def readiness(db: AsyncSession = Depends(get_session)):
    return _report({"database": await _database_check(db)})
