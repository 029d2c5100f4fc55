"""
Command Center - operations dashboard backend.

Serves the dashboard's REST API over a small relational store and keeps a
live view of servers, network throughput and system gauges refreshed from
external sources in the background.

Responsibilities:
- Server / ticket / metric / user / settings CRUD
- Live data refresh (regions, network meta, rate-limit sources)
- Cache-first reads with storage fallback
"""
