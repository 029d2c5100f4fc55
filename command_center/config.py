import os
from pathlib import Path


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"true", "1", "yes", "on"}


def _list_env(name: str, default: str) -> list[str]:
    raw = str(os.getenv(name, default))
    return [item.strip() for item in raw.split(",") if item.strip()]


_DEFAULT_DB_PATH = Path(__file__).resolve().parent / "data" / "command_center.db"

DATABASE_URL = str(os.getenv("COMMAND_CENTER_DB_URL", f"sqlite:///{_DEFAULT_DB_PATH.as_posix()}")).strip()

API_PORT = _int_env("COMMAND_CENTER_API_PORT", 5000)
BIND_HOST = str(os.getenv("COMMAND_CENTER_BIND_HOST", "0.0.0.0")).strip()
LOG_LEVEL = str(os.getenv("COMMAND_CENTER_LOG_LEVEL", "INFO")).strip()
CORS_ORIGINS = _list_env("COMMAND_CENTER_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")

# Live data refresher
LIVE_REFRESH_ENABLED = _bool_env("COMMAND_CENTER_LIVE_REFRESH", True)
REFRESH_INTERVAL_SECONDS = _float_env("COMMAND_CENTER_REFRESH_INTERVAL_S", 15.0)
FETCH_TIMEOUT_MS = _int_env("COMMAND_CENTER_FETCH_TIMEOUT_MS", 5000)

REGIONS_URL = str(os.getenv("COMMAND_CENTER_REGIONS_URL", "https://api.llama-cloud.com/v1/regions")).strip()
NETWORK_META_URL = str(os.getenv("COMMAND_CENTER_NETWORK_META_URL", "https://speed.cloudflare.com/meta")).strip()
RATE_LIMIT_URL = str(os.getenv("COMMAND_CENTER_RATE_LIMIT_URL", "https://api.github.com/rate_limit")).strip()

# Live snapshot shaping
LIVE_SERVER_COUNT = 8
LIVE_NETWORK_SAMPLES = 8

# Network metrics read limit
NETWORK_LIMIT_DEFAULT = 20
NETWORK_LIMIT_MIN = 1
NETWORK_LIMIT_MAX = 100
