"""
Source adapters for the live data refresher.

Each adapter pulls one external endpoint and writes one cache slice. The
upstream sources are stand-ins for real monitoring feeds: only a few fields
are read from them and the remaining gauge values are synthesized.

Every upstream shape is declared as a pydantic contract whose fields are all
optional (unknown fields are ignored), and mapped into snapshots by a pure
function so the mapping can be exercised without the network.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Union

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy import select

from command_center.config import (
    FETCH_TIMEOUT_MS,
    LIVE_NETWORK_SAMPLES,
    LIVE_SERVER_COUNT,
    NETWORK_META_URL,
    RATE_LIMIT_URL,
    REGIONS_URL,
)
from command_center.live.cache import NETWORK_METRICS, SERVERS, SYSTEM_METRIC, LiveDataCache
from command_center.live.errors import MalformedPayloadError
from command_center.live.http import fetch_json
from command_center.models import Server, ServerStatus
from command_center.schemas import (
    NetworkMetricSnapshot,
    ServerSnapshot,
    SystemMetricSnapshot,
    server_to_snapshot,
)

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

# Inclusive load ranges per status
LOAD_RANGES = {
    ServerStatus.HEALTHY: (0, 60),
    ServerStatus.WARNING: (60, 80),
    ServerStatus.CRITICAL: (80, 100),
    ServerStatus.MAINTENANCE: (0, 0),
}

THROUGHPUT_RANGE = (1000, 6999)
MEMORY_USAGE_RANGE = (5.0, 20.0)
NETWORK_THROUGHPUT_RANGE = (0.5, 5.0)


# ============================================================================
# UPSTREAM CONTRACTS
# ============================================================================

class RegionRecord(BaseModel):
    code: Optional[Union[str, int]] = None
    id: Optional[Union[str, int]] = None
    location: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


class GeoInfo(BaseModel):
    country: Optional[str] = None
    city: Optional[str] = None


class NetworkMeta(BaseModel):
    asn: Optional[Union[int, str]] = None
    country: Optional[str] = None
    city: Optional[str] = None
    geo: Optional[GeoInfo] = None


class RateLimitBucket(BaseModel):
    remaining: Optional[int] = None
    limit: Optional[int] = None


class RateLimitResources(BaseModel):
    core: Optional[RateLimitBucket] = None


class RateLimitStatus(BaseModel):
    resources: Optional[RateLimitResources] = None


_REGION_LIST = TypeAdapter(List[RegionRecord])


def _first(*values) -> Optional[str]:
    for value in values:
        if value:
            return str(value)
    return None


# ============================================================================
# MAPPING FUNCTIONS
# ============================================================================

def map_regions(payload: Any, rng: random.Random, limit: int = LIVE_SERVER_COUNT) -> List[ServerSnapshot]:
    """Turn a region listing into server snapshots with a random status/load."""
    if not isinstance(payload, list):
        raise MalformedPayloadError(f"expected a region list, got {type(payload).__name__}")
    try:
        regions = _REGION_LIST.validate_python(payload[:limit])
    except ValidationError as exc:
        raise MalformedPayloadError(f"unexpected region entry: {exc.error_count()} validation errors") from exc

    statuses = list(ServerStatus)
    snapshots = []
    for index, region in enumerate(regions, start=1):
        status = rng.choice(statuses)
        low, high = LOAD_RANGES[status]
        snapshots.append(ServerSnapshot(
            id=index,
            server_id=_first(region.code, region.id) or f"region-{index}",
            region=_first(region.location, region.name, region.country, region.city) or UNKNOWN,
            status=status,
            load=rng.randint(low, high),
        ))
    return snapshots


def map_network_meta(
    payload: Any,
    rng: random.Random,
    next_id: Callable[[], int],
    now: datetime,
    samples: int = LIVE_NETWORK_SAMPLES,
) -> List[NetworkMetricSnapshot]:
    """Fabricate `samples` throughput readings one second apart, newest first."""
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a metadata object, got {type(payload).__name__}")
    try:
        meta = NetworkMeta.model_validate(payload)
    except ValidationError as exc:
        raise MalformedPayloadError(f"unexpected network metadata: {exc.error_count()} validation errors") from exc

    geo = meta.geo or GeoInfo()
    asn = _first(meta.asn) or UNKNOWN
    country = _first(meta.country, geo.country) or UNKNOWN
    city = _first(meta.city, geo.city) or UNKNOWN

    low, high = THROUGHPUT_RANGE
    return [
        NetworkMetricSnapshot(
            id=next_id(),
            timestamp=now - timedelta(seconds=offset),
            inbound=rng.randint(low, high),
            outbound=rng.randint(low, high),
            asn=asn,
            country=country,
            city=city,
        )
        for offset in range(samples)
    ]


def map_rate_limit(payload: Any, rng: random.Random, now: datetime) -> SystemMetricSnapshot:
    """Read remaining/limit counters as a CPU proxy and node counts."""
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a rate limit object, got {type(payload).__name__}")
    try:
        status = RateLimitStatus.model_validate(payload)
    except ValidationError as exc:
        raise MalformedPayloadError(f"unexpected rate limit payload: {exc.error_count()} validation errors") from exc

    core = (status.resources.core if status.resources else None) or RateLimitBucket()
    remaining = core.remaining if core.remaining is not None else 0
    limit = core.limit if core.limit is not None else 1

    cpu_usage = (remaining / limit) * 100 if limit > 0 else 0.0
    return SystemMetricSnapshot(
        id=1,
        cpu_usage=max(0.0, min(100.0, cpu_usage)),
        memory_usage=rng.uniform(*MEMORY_USAGE_RANGE),
        active_nodes=remaining,
        total_nodes=limit,
        network_throughput=rng.uniform(*NETWORK_THROUGHPUT_RANGE),
        timestamp=now,
    )


# ============================================================================
# ADAPTERS
# ============================================================================

class SourceAdapter:
    """
    One external source feeding one cache slice.

    run() never raises: any failure is logged, recorded on the cache and the
    slice is left as it was.
    """

    slice_name: str = ""

    def __init__(self, url: str, timeout_ms: int = FETCH_TIMEOUT_MS, rng: Optional[random.Random] = None):
        self.url = url
        self.timeout_ms = timeout_ms
        self.rng = rng or random.Random()

    def run(self, session: requests.Session, cache: LiveDataCache) -> bool:
        try:
            payload = fetch_json(session, self.url, self.timeout_ms)
            self.apply(payload, cache)
        except Exception as exc:
            logger.warning(f"Failed to refresh live {self.slice_name} from {self.url}: {exc}")
            cache.record_error(self.slice_name, str(exc))
            self.on_failure(cache)
            return False
        return True

    def apply(self, payload: Any, cache: LiveDataCache) -> None:
        raise NotImplementedError

    def on_failure(self, cache: LiveDataCache) -> None:
        pass


class ServerAdapter(SourceAdapter):
    slice_name = SERVERS

    def __init__(self, url: str = REGIONS_URL, session_factory=None, **kwargs):
        super().__init__(url, **kwargs)
        self.session_factory = session_factory

    def apply(self, payload: Any, cache: LiveDataCache) -> None:
        snapshots = map_regions(payload, self.rng)
        if not snapshots:
            logger.info("Region listing was empty; keeping cached servers")
            return
        cache.replace_servers(snapshots)
        logger.debug(f"Live servers refreshed ({len(snapshots)} entries)")

    def on_failure(self, cache: LiveDataCache) -> None:
        """Seed an empty slice from storage on a cold failure."""
        if self.session_factory is None or cache.get_servers():
            return
        db = self.session_factory()
        try:
            stored = [server_to_snapshot(s) for s in db.scalars(select(Server)).all()]
        except Exception as exc:
            logger.error(f"Failed to load servers from storage fallback: {exc}")
            return
        finally:
            db.close()
        if stored:
            cache.replace_servers(stored, clear_error=False)
            logger.info(f"Live servers seeded from storage ({len(stored)} entries)")


class NetworkAdapter(SourceAdapter):
    slice_name = NETWORK_METRICS

    def __init__(self, url: str = NETWORK_META_URL, **kwargs):
        super().__init__(url, **kwargs)

    def apply(self, payload: Any, cache: LiveDataCache) -> None:
        metrics = map_network_meta(payload, self.rng, cache.next_network_id, datetime.now(timezone.utc))
        cache.replace_network_metrics(metrics)
        logger.debug(f"Live network metrics refreshed ({len(metrics)} samples)")


class SystemAdapter(SourceAdapter):
    slice_name = SYSTEM_METRIC

    def __init__(self, url: str = RATE_LIMIT_URL, **kwargs):
        super().__init__(url, **kwargs)

    def apply(self, payload: Any, cache: LiveDataCache) -> None:
        metric = map_rate_limit(payload, self.rng, datetime.now(timezone.utc))
        cache.replace_system_metric(metric)
        logger.debug(f"Live system metric refreshed (cpu={metric.cpu_usage:.1f}%)")
