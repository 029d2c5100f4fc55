import itertools
import random
from datetime import datetime, timedelta, timezone

import pytest

from command_center.api.metrics import clamp_limit
from command_center.live.adapters import map_network_meta, map_rate_limit
from command_center.models import NetworkMetric


@pytest.fixture
def stored_network_metrics(db_session):
    start = datetime(2026, 1, 1)
    db_session.add_all(
        NetworkMetric(timestamp=start + timedelta(minutes=i), inbound=float(i), outbound=float(i))
        for i in range(120)
    )
    db_session.commit()


@pytest.mark.parametrize("raw, expected", [
    (None, 20),
    ("50", 50),
    ("150", 100),
    ("0", 1),
    ("-7", 1),
    ("abc", 20),
    ("", 20),
    ("5.7", 5),
    ("12abc", 12),
    (" 7", 7),
    ("+30", 30),
    ("-", 20),
])
def test_clamp_limit(raw, expected):
    assert clamp_limit(raw) == expected


@pytest.mark.parametrize("query, expected", [
    ("", 20),
    ("?limit=150", 100),
    ("?limit=0", 1),
    ("?limit=-3", 1),
    ("?limit=five", 20),
    ("?limit=35", 35),
    ("?limit=5.7", 5),
    ("?limit=12abc", 12),
])
def test_network_metrics_limit_from_storage(client, stored_network_metrics, query, expected):
    response = client.get(f"/api/network-metrics{query}")

    assert response.status_code == 200
    assert len(response.json()) == expected


def test_network_metrics_from_storage_are_newest_first(client, stored_network_metrics):
    rows = client.get("/api/network-metrics?limit=3").json()

    assert [r["inbound"] for r in rows] == [119.0, 118.0, 117.0]


def test_network_metrics_prefer_live_cache(client, live_cache, stored_network_metrics):
    ids = itertools.count(1)
    live_cache.replace_network_metrics(
        map_network_meta({"asn": 1}, random.Random(1), lambda: next(ids), datetime.now(timezone.utc))
    )

    assert len(client.get("/api/network-metrics?limit=150").json()) == 8
    limited = client.get("/api/network-metrics?limit=3").json()
    assert [m["id"] for m in limited] == [1, 2, 3]
    assert limited[0]["asn"] == "1"


def test_create_network_metric(client):
    response = client.post("/api/network-metrics", json={"inbound": 1200.5, "outbound": 800})

    assert response.status_code == 201
    body = response.json()
    assert body["inbound"] == 1200.5
    assert body["timestamp"]


def test_create_network_metric_validation(client):
    assert client.post("/api/network-metrics", json={"inbound": "lots"}).status_code == 400


def test_latest_system_metric_is_null_when_nothing_stored(client):
    response = client.get("/api/system-metrics/latest")

    assert response.status_code == 200
    assert response.json() is None


def test_latest_system_metric_from_storage(client):
    first = {"cpuUsage": 10, "memoryUsage": 11, "activeNodes": 3, "totalNodes": 4, "networkThroughput": 1.5}
    second = dict(first, cpuUsage=55.5)
    assert client.post("/api/system-metrics", json=first).status_code == 201
    assert client.post("/api/system-metrics", json=second).status_code == 201

    latest = client.get("/api/system-metrics/latest").json()

    assert latest["cpuUsage"] == 55.5
    assert latest["activeNodes"] == 3


def test_latest_system_metric_prefers_live_cache(client, live_cache):
    client.post("/api/system-metrics", json={
        "cpuUsage": 10, "memoryUsage": 11, "activeNodes": 3, "totalNodes": 4, "networkThroughput": 1.5,
    })
    live_cache.replace_system_metric(map_rate_limit(
        {"resources": {"core": {"remaining": 1, "limit": 4}}}, random.Random(), datetime.now(timezone.utc),
    ))

    latest = client.get("/api/system-metrics/latest").json()

    assert latest["cpuUsage"] == 25.0
    assert latest["totalNodes"] == 4


def test_create_system_metric_validation(client):
    response = client.post("/api/system-metrics", json={"cpuUsage": 10})

    assert response.status_code == 400
