"""
Logging configuration for Command Center services.

The API launcher and the seed script both call setup_logging(). The live
refresher polls its sources every few seconds, so the per-request chatter
of the HTTP client and the access log is held at WARNING unless the
service itself runs at DEBUG.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers that emit one line per outbound poll or inbound request
NOISY_LOGGERS = ("urllib3", "uvicorn.access")


def resolve_level(level: Union[int, str]) -> int:
    """Turn "debug"/"INFO"/20 into a logging level; unknown names become INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def quiet_noisy_loggers(level: int, names: Sequence[str] = NOISY_LOGGERS) -> None:
    threshold = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in names:
        logging.getLogger(name).setLevel(threshold)


def setup_logging(
    component_name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
):
    """
    Configure logging for a Command Center component.

    Args:
        component_name: Component identifier (e.g., 'command-center', 'seed')
        level: Logging level, as a number or a name like "DEBUG"
        log_file: Optional file path for log output
    """
    level = resolve_level(level)
    format_string = f'[%(asctime)s] [{component_name.upper()}] %(levelname)s %(name)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(format_string, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)

    quiet_noisy_loggers(level)

    logger = logging.getLogger(component_name)
    logger.info(f"{component_name.upper()} logging initialized (level={logging.getLevelName(level)})")
    return logger
