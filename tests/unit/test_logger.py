"""
Unit tests for logging setup.

Tests cover:
1. Subsystem loggers under the dap root
2. Reconfiguration replaces handlers
3. Console handler stream
"""

import io
import logging
import sys

import pytest

from dap.utils.logger import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture
def root():
    yield logging.getLogger(ROOT_LOGGER)
    setup_logging()


class TestLoggers:
    """Tests for logger naming and levels."""

    def test_subsystem_name(self):
        assert get_logger("cosigner").name == "dap.cosigner"

    def test_level_applied(self, root):
        setup_logging(level=logging.DEBUG)
        assert root.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in root.handlers)


class TestHandlers:
    """Tests for handler replacement."""

    def test_setup_replaces_console_handler(self, root):
        setup_logging()
        setup_logging()
        assert len(root.handlers) == 1

    def test_console_writes_to_stderr(self, root):
        setup_logging()
        assert root.handlers[0].stream is sys.stderr

    def test_set_stream_takes_effect(self, root):
        setup_logging()
        handler = root.handlers[0]
        buffer = io.StringIO()
        handler.setStream(buffer)
        assert handler.stream is buffer

        get_logger("cli").warning("rerouted")
        assert "rerouted" in buffer.getvalue()

    def test_file_handler(self, root, tmp_path):
        setup_logging(log_dir=str(tmp_path), log_to_file=True)
        get_logger("resolver").info("to file")
        for handler in root.handlers:
            handler.flush()
        assert "to file" in (tmp_path / "dap.log").read_text()
