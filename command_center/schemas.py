"""
Wire shapes shared by the API routers and the live data refresher.

Bodies use camelCase keys to match the dashboard client; Python attributes
stay snake_case.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from command_center.models import (
    NetworkMetric,
    Server,
    ServerStatus,
    Settings,
    SystemMetric,
    Ticket,
    User,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ============================================================================
# LIVE SNAPSHOTS
# ============================================================================

class ServerSnapshot(CamelModel):
    id: int
    server_id: str
    name: Optional[str] = None
    region: str
    status: ServerStatus
    load: int = Field(ge=0, le=100)


class NetworkMetricSnapshot(CamelModel):
    id: int
    timestamp: datetime
    inbound: float
    outbound: float
    asn: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


class SystemMetricSnapshot(CamelModel):
    id: int
    cpu_usage: float
    memory_usage: float
    active_nodes: int
    total_nodes: int
    network_throughput: float
    timestamp: datetime


# ============================================================================
# ROW SERIALIZERS
# ============================================================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def server_to_dict(server: Server) -> Dict[str, Any]:
    return {
        "id": server.id,
        "serverId": server.server_id,
        "name": server.name,
        "region": server.region,
        "status": server.status,
        "load": server.load,
    }


def server_to_snapshot(server: Server) -> ServerSnapshot:
    return ServerSnapshot(
        id=server.id,
        server_id=server.server_id,
        name=server.name,
        region=server.region,
        status=server.status,
        load=server.load,
    )


def ticket_to_dict(ticket: Ticket) -> Dict[str, Any]:
    return {
        "id": ticket.id,
        "ticketId": ticket.ticket_id,
        "subject": ticket.subject,
        "status": ticket.status,
        "priority": ticket.priority,
        "createdAt": _iso(ticket.created_at),
    }


def network_metric_to_dict(metric: NetworkMetric) -> Dict[str, Any]:
    return {
        "id": metric.id,
        "timestamp": _iso(metric.timestamp),
        "inbound": metric.inbound,
        "outbound": metric.outbound,
    }


def system_metric_to_dict(metric: SystemMetric) -> Dict[str, Any]:
    return {
        "id": metric.id,
        "cpuUsage": metric.cpu_usage,
        "memoryUsage": metric.memory_usage,
        "activeNodes": metric.active_nodes,
        "totalNodes": metric.total_nodes,
        "networkThroughput": metric.network_throughput,
        "timestamp": _iso(metric.timestamp),
    }


def user_to_dict(user: User) -> Dict[str, Any]:
    """Sanitized user: the password hash never leaves the service."""
    return {
        "id": user.id,
        "username": user.username,
    }


def settings_to_dict(settings: Settings) -> Dict[str, Any]:
    return {
        "id": settings.id,
        "maintenanceMode": settings.maintenance_mode,
        "alertEmail": settings.alert_email,
        "theme": settings.theme,
        "notifications": settings.notifications,
    }
