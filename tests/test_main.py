"""Tests for the entry point's logging setup."""

import logging

import pytest
import structlog

from sleeper_gateway.config import Config
from sleeper_gateway.main import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.mark.parametrize("log_format", ["json", "text"])
def test_configure_logging(log_format):
    configure_logging(Config(log_level="DEBUG", log_format=log_format))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    structlog.get_logger().debug("configured", log_format=log_format)


def test_json_renderer_selected(capsys):
    configure_logging(Config(log_level="INFO", log_format="json"))

    structlog.get_logger().info("hello", league_id="league-1")
    structlog.get_logger().debug("hidden")

    out = capsys.readouterr().out
    assert '"event": "hello"' in out
    assert '"league_id": "league-1"' in out
    assert "hidden" not in out
