import logging

import pytest

from shared.logging_config import NOISY_LOGGERS, quiet_noisy_loggers, resolve_level, setup_logging


@pytest.fixture
def restore_noisy_levels():
    saved = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.parametrize("raw, expected", [
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    (logging.ERROR, logging.ERROR),
    ("chatty", logging.INFO),
])
def test_resolve_level(raw, expected):
    assert resolve_level(raw) == expected


def test_poll_chatter_held_at_warning(restore_noisy_levels):
    quiet_noisy_loggers(logging.INFO)

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_poll_chatter_visible_when_debugging(restore_noisy_levels):
    quiet_noisy_loggers(logging.DEBUG)

    assert logging.getLogger("urllib3").level == logging.DEBUG


def test_setup_logging_writes_log_file(tmp_path, restore_noisy_levels):
    log_file = tmp_path / "logs" / "seed.log"
    root = logging.getLogger()
    before = list(root.handlers)

    logger = setup_logging("seed", level="info", log_file=str(log_file))
    try:
        assert logger.name == "seed"
        assert log_file.exists()
    finally:
        for handler in root.handlers:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
