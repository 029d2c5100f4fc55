"""
Demo data for the Command Center store.

Wipes every table and inserts a known data set, so running it twice leaves
the same contents.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from command_center.models import NetworkMetric, Server, Settings, SystemMetric, Ticket, User
from command_center.security import hash_password

logger = logging.getLogger(__name__)

SEED_SERVERS = [
    {"server_id": "AWS-US-E-1", "name": "US East - Primary", "region": "us-east-1", "status": "healthy", "load": 45},
    {"server_id": "AWS-US-E-2", "name": "US East - Secondary", "region": "us-east-1", "status": "healthy", "load": 52},
    {"server_id": "AWS-US-W-1", "name": "US West - Core", "region": "us-west-1", "status": "warning", "load": 88},
    {"server_id": "GCP-EU-W-1", "name": "EU West - Core", "region": "eu-west-1", "status": "healthy", "load": 34},
    {"server_id": "GCP-EU-W-2", "name": "EU West - Backup", "region": "eu-west-1", "status": "maintenance", "load": 0},
    {"server_id": "AZ-ASIA-S-1", "name": "Asia South - Core", "region": "ap-south-1", "status": "critical", "load": 98},
    {"server_id": "AZ-ASIA-E-1", "name": "Asia East - Core", "region": "ap-east-1", "status": "healthy", "load": 41},
    {"server_id": "AWS-SA-E-1", "name": "South America - Core", "region": "sa-east-1", "status": "healthy", "load": 29},
]

SEED_TICKETS = [
    {"ticket_id": "TIK-4928", "subject": "VPN Connection Failure - Remote Team", "status": "open", "priority": "high"},
    {"ticket_id": "TIK-4927", "subject": "Database Latency on Node 4", "status": "in-progress", "priority": "high"},
    {"ticket_id": "TIK-4926", "subject": "New User Provisioning - Marketing", "status": "resolved", "priority": "low"},
    {"ticket_id": "TIK-4925", "subject": "License Expiry Warning - Jira", "status": "open", "priority": "medium"},
    {"ticket_id": "TIK-4924", "subject": "Email Delivery Delays", "status": "in-progress", "priority": "medium"},
    {"ticket_id": "TIK-4923", "subject": "Printer Config - 2nd Floor", "status": "resolved", "priority": "low"},
]

SEED_USERS = [
    ("admin", "admin123"),
    ("analyst", "changeme"),
]

NETWORK_HISTORY_POINTS = 21
NETWORK_HISTORY_SPACING = timedelta(minutes=15)


def seed_database(db: Session, rng: Optional[random.Random] = None) -> dict:
    """Replace all rows with the demo data set. Returns row counts per table."""
    rng = rng or random.Random()

    for model in (NetworkMetric, SystemMetric, Ticket, Server, User, Settings):
        db.execute(delete(model))

    db.add_all(Server(**row) for row in SEED_SERVERS)

    # Tickets keep the listing order above (newest first)
    now = datetime.utcnow()
    db.add_all(
        Ticket(created_at=now - timedelta(minutes=index), **row)
        for index, row in enumerate(SEED_TICKETS)
    )

    db.add_all(
        NetworkMetric(
            timestamp=now - i * NETWORK_HISTORY_SPACING,
            inbound=rng.random() * 5000 + 2000,
            outbound=rng.random() * 3000 + 1000,
        )
        for i in range(NETWORK_HISTORY_POINTS - 1, -1, -1)
    )

    db.add(SystemMetric(
        cpu_usage=42.5,
        memory_usage=12.4,
        active_nodes=84,
        total_nodes=85,
        network_throughput=1.2,
    ))

    db.add_all(User(username=name, password_hash=hash_password(password)) for name, password in SEED_USERS)

    db.add(Settings(
        maintenance_mode=False,
        alert_email="ops@example.com",
        theme="system",
        notifications="all",
    ))

    db.commit()

    counts = {
        "servers": len(SEED_SERVERS),
        "tickets": len(SEED_TICKETS),
        "network_metrics": NETWORK_HISTORY_POINTS,
        "system_metrics": 1,
        "users": len(SEED_USERS),
        "settings": 1,
    }
    logger.info(f"Database seeded: {counts}")
    return counts
