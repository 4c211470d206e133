"""Tests for tomlcore.logger."""

import io
import logging

from tomlcore.logger import Logger


class TestLogger:
    def test_names_are_namespaced(self):
        logger = Logger({"name": "test-names", "is_enabled": False}).logger
        assert logger.name == "tomlcore.test-names"

    def test_disabled_wrapper_leaves_shared_logger_alone(self):
        stream = io.StringIO()
        enabled = Logger({"name": "test-shared", "stream": stream, "format": "%(message)s"})
        disabled = Logger({"name": "test-shared", "is_enabled": False})
        assert enabled.is_enabled and not disabled.is_enabled
        assert disabled.logger is enabled.logger
        enabled.logger.debug("still on")
        assert stream.getvalue() == "still on\n"

    def test_reenabling_reuses_handler(self):
        first = io.StringIO()
        second = io.StringIO()
        Logger({"name": "test-reuse", "stream": first})
        Logger({"name": "test-reuse", "is_enabled": False})
        logger = Logger({"name": "test-reuse", "stream": second, "format": "%(message)s"}).logger
        assert not logger.disabled
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        logger.debug("hello")
        assert second.getvalue() == "hello\n"
        assert first.getvalue() == ""
