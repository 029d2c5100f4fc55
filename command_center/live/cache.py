"""
In-memory cache slices for live snapshots.

One LiveDataCache is created per application and shared by the refresher
(writer) and the read endpoints (readers). Each slice is replaced wholesale
under the lock; readers get a shallow copy.
"""

import itertools
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

from command_center.schemas import NetworkMetricSnapshot, ServerSnapshot, SystemMetricSnapshot

SERVERS = "servers"
NETWORK_METRICS = "networkMetrics"
SYSTEM_METRIC = "systemMetric"

SLICES = (SERVERS, NETWORK_METRICS, SYSTEM_METRIC)


class LiveDataCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._servers: List[ServerSnapshot] = []
        self._network_metrics: List[NetworkMetricSnapshot] = []
        self._system_metric: Optional[SystemMetricSnapshot] = None
        self._updated_at: Dict[str, Optional[datetime]] = {name: None for name in SLICES}
        self._last_error: Dict[str, Optional[str]] = {name: None for name in SLICES}
        self._network_ids = itertools.count(1)

    # -- servers -----------------------------------------------------------

    def get_servers(self) -> List[ServerSnapshot]:
        with self._lock:
            return list(self._servers)

    def replace_servers(self, servers: List[ServerSnapshot], clear_error: bool = True) -> None:
        """Swap the server slice. Pass clear_error=False when writing fallback data after a failed fetch."""
        with self._lock:
            self._servers = list(servers)
            self._mark_updated(SERVERS, clear_error)

    # -- network metrics ---------------------------------------------------

    def get_network_metrics(self) -> List[NetworkMetricSnapshot]:
        with self._lock:
            return list(self._network_metrics)

    def replace_network_metrics(self, metrics: List[NetworkMetricSnapshot]) -> None:
        with self._lock:
            self._network_metrics = list(metrics)
            self._mark_updated(NETWORK_METRICS)

    def next_network_id(self) -> int:
        with self._lock:
            return next(self._network_ids)

    # -- system metric -----------------------------------------------------

    def get_system_metric(self) -> Optional[SystemMetricSnapshot]:
        with self._lock:
            return self._system_metric

    def replace_system_metric(self, metric: SystemMetricSnapshot) -> None:
        with self._lock:
            self._system_metric = metric
            self._mark_updated(SYSTEM_METRIC)

    # -- bookkeeping -------------------------------------------------------

    def record_error(self, slice_name: str, message: str) -> None:
        with self._lock:
            self._last_error[slice_name] = message

    def status(self) -> Dict[str, Any]:
        with self._lock:
            sizes = {
                SERVERS: len(self._servers),
                NETWORK_METRICS: len(self._network_metrics),
                SYSTEM_METRIC: 1 if self._system_metric is not None else 0,
            }
            return {
                name: {
                    "size": sizes[name],
                    "updatedAt": self._updated_at[name].isoformat() if self._updated_at[name] else None,
                    "lastError": self._last_error[name],
                }
                for name in SLICES
            }

    def _mark_updated(self, slice_name: str, clear_error: bool = True) -> None:
        # caller holds the lock
        self._updated_at[slice_name] = datetime.utcnow()
        if clear_error:
            self._last_error[slice_name] = None
