"""
Command Center Service Launcher

Starts the Command Center API from the command_center/ package.

This service provides:
- Server, ticket, metric, user and settings REST endpoints
- Live data refresher (regions, network meta, rate limit sources every 15s)
- Cache-first reads with storage fallback

Usage:
    python scripts/run_command_center.py --host 0.0.0.0 --port 5000

Environment Variables:
    COMMAND_CENTER_API_PORT: API port (default: 5000)
    COMMAND_CENTER_BIND_HOST: Bind address (default: 0.0.0.0)
    COMMAND_CENTER_DB_URL: SQLAlchemy database URL (default: sqlite file under command_center/data/)
    COMMAND_CENTER_LIVE_REFRESH: Enable the live data refresher (default: true)
    COMMAND_CENTER_LOG_LEVEL: Log level (default: INFO)
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from command_center.config import API_PORT, BIND_HOST, DATABASE_URL, LOG_LEVEL, REFRESH_INTERVAL_SECONDS
from shared.logging_config import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Command Center API service")
    parser.add_argument("--host", default=BIND_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    parser.add_argument("--log-level", default=LOG_LEVEL)
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args()

    logger = setup_logging("command-center", level=args.log_level, log_file=args.log_file)

    logger.info("=" * 60)
    logger.info("Command Center API Service")
    logger.info("=" * 60)
    logger.info(f"API Address: {args.host}:{args.port}")
    logger.info(f"Database: {DATABASE_URL}")
    logger.info(f"Live refresh interval: {REFRESH_INTERVAL_SECONDS}s")
    logger.info("=" * 60)

    uvicorn.run("command_center.service:app", host=args.host, port=args.port, reload=False, log_config=None)


if __name__ == "__main__":
    main()
