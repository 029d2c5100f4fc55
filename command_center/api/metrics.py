"""
Network and system metric endpoints.

Reads prefer the live cache slices; writes always go to storage.
"""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from command_center.api.deps import get_live_cache
from command_center.config import NETWORK_LIMIT_DEFAULT, NETWORK_LIMIT_MAX, NETWORK_LIMIT_MIN
from command_center.database import get_db
from command_center.live.cache import LiveDataCache
from command_center.models import NetworkMetric, SystemMetric
from command_center.schemas import CamelModel, network_metric_to_dict, system_metric_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["metrics"])

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class NetworkMetricCreate(CamelModel):
    inbound: float
    outbound: float


class SystemMetricCreate(CamelModel):
    cpu_usage: float
    memory_usage: float
    active_nodes: int = Field(ge=0)
    total_nodes: int = Field(ge=0)
    network_throughput: float


def clamp_limit(raw: Optional[str]) -> int:
    """Read the leading integer of ?limit= ('5.7' -> 5, '12abc' -> 12) and clamp it to 1..100.

    Falls back to the default when the value is missing or has no leading digits.
    """
    match = _LEADING_INT.match(raw) if raw is not None else None
    if match is None:
        return NETWORK_LIMIT_DEFAULT
    requested = int(match.group(1))
    return min(max(requested, NETWORK_LIMIT_MIN), NETWORK_LIMIT_MAX)


@router.get("/network-metrics")
def list_network_metrics(
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    cache: LiveDataCache = Depends(get_live_cache),
):
    count = clamp_limit(limit)

    live = cache.get_network_metrics()
    if live:
        return [m.to_json() for m in live[:count]]

    metrics = db.scalars(
        select(NetworkMetric).order_by(NetworkMetric.timestamp.desc(), NetworkMetric.id.desc()).limit(count)
    ).all()
    return [network_metric_to_dict(m) for m in metrics]


@router.post("/network-metrics", status_code=201)
def create_network_metric(payload: NetworkMetricCreate, db: Session = Depends(get_db)):
    metric = NetworkMetric(inbound=payload.inbound, outbound=payload.outbound)
    db.add(metric)
    db.commit()
    db.refresh(metric)
    return network_metric_to_dict(metric)


@router.get("/system-metrics/latest")
def latest_system_metric(db: Session = Depends(get_db), cache: LiveDataCache = Depends(get_live_cache)):
    live = cache.get_system_metric()
    if live is not None:
        return live.to_json()

    metric = db.scalars(
        select(SystemMetric).order_by(SystemMetric.timestamp.desc(), SystemMetric.id.desc()).limit(1)
    ).first()
    return system_metric_to_dict(metric) if metric else None


@router.post("/system-metrics", status_code=201)
def create_system_metric(payload: SystemMetricCreate, db: Session = Depends(get_db)):
    metric = SystemMetric(
        cpu_usage=payload.cpu_usage,
        memory_usage=payload.memory_usage,
        active_nodes=payload.active_nodes,
        total_nodes=payload.total_nodes,
        network_throughput=payload.network_throughput,
    )
    db.add(metric)
    db.commit()
    db.refresh(metric)
    logger.debug(f"System metric stored (id={metric.id})")
    return system_metric_to_dict(metric)
