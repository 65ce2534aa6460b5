import logging

import pytest

from triearray import config as ta_config
from triearray.logging import get_logger


def test_logger_respects_runtime_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRIEARRAY_LOG_LEVEL", "DEBUG")
    ta_config.reset_runtime_config_cache()

    logger = get_logger("tests.logging")

    assert logger.level == logging.DEBUG
    assert logger.name == "triearray.tests.logging"

    monkeypatch.delenv("TRIEARRAY_LOG_LEVEL")
    ta_config.reset_runtime_config_cache()


def test_root_logger_has_single_handler():
    ta_config.reset_runtime_config_cache()
    ta_config.runtime_config()
    ta_config.reset_runtime_config_cache()
    ta_config.runtime_config()

    assert len(logging.getLogger("triearray").handlers) == 1
    assert get_logger().name == "triearray"


def test_root_growth_logged_at_debug(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    from triearray import from_sequence

    array = from_sequence(range(4), bits=2)
    with caplog.at_level(logging.DEBUG, logger="triearray.core.persistence"):
        array.prepend(-1)

    assert any("Grew trie root" in record.getMessage() for record in caplog.records)
