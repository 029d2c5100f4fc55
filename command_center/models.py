"""
Command Center Database Models

Durable storage for the dashboard:
- Servers and their last known status/load
- Support tickets
- Network throughput and system gauge history
- User accounts (bcrypt password hashes)
- Singleton dashboard settings

The live data refresher never writes here; it only reads servers as a
cold-start fallback.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime
import enum
import uuid

Base = declarative_base()


# ============================================================================
# ENUM DEFINITIONS
# ============================================================================

class ServerStatus(str, enum.Enum):
    """Server operational status shown on the dashboard grid"""
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"


# ============================================================================
# CORE MODEL DEFINITIONS
# ============================================================================

def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Dashboard user account"""
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_new_user_id)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)  # bcrypt hash


class Server(Base):
    """Server card shown on the infrastructure grid"""
    __tablename__ = "servers"

    id = Column(Integer, primary_key=True)
    server_id = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False, default="Unnamed Server")
    region = Column(String, nullable=False)
    status = Column(String, nullable=False)  # ServerStatus value
    load = Column(Integer, nullable=False, default=0)  # percent 0-100


class Ticket(Base):
    """Support ticket in the dashboard feed"""
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True)
    ticket_id = Column(String, unique=True, nullable=False, index=True)
    subject = Column(String, nullable=False)
    status = Column(String, nullable=False)
    priority = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class NetworkMetric(Base):
    """Inbound/outbound throughput sample"""
    __tablename__ = "network_metrics"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    inbound = Column(Float, nullable=False)
    outbound = Column(Float, nullable=False)


class SystemMetric(Base):
    """Cluster-wide gauge reading"""
    __tablename__ = "system_metrics"

    id = Column(Integer, primary_key=True)
    cpu_usage = Column(Float, nullable=False)
    memory_usage = Column(Float, nullable=False)
    active_nodes = Column(Integer, nullable=False)
    total_nodes = Column(Integer, nullable=False)
    network_throughput = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)


class Settings(Base):
    """Dashboard settings (single row)"""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    maintenance_mode = Column(Boolean, nullable=False, default=False)
    alert_email = Column(String, nullable=False, default="")
    theme = Column(String, nullable=False, default="system")
    notifications = Column(String, nullable=False, default="all")
