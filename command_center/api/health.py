"""
Health and live-data status endpoints.

Endpoints:
- GET /health: Service liveness
- GET /health/db: Storage round-trip
- GET /api/live/status: Per-slice size, last update and last adapter error
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from command_center.api.deps import get_live_cache
from command_center.database import get_db
from command_center.live.cache import LiveDataCache

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "command-center"}


@router.get("/health/db")
def health_db(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


@router.get("/api/live/status")
def live_status(request: Request, cache: LiveDataCache = Depends(get_live_cache)) -> Dict[str, Any]:
    refresher = getattr(request.app.state, "live_refresher", None)
    return {
        "refresherRunning": bool(refresher and refresher.running),
        "intervalSeconds": refresher.interval if refresher else None,
        "slices": cache.status(),
    }
