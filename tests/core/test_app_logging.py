"""
Tests for core.logging setup.
"""
from __future__ import annotations

import logging
from pathlib import Path

from core.logging import LOG_FILE_NAME, ROOT_LOGGER_NAME, configure_logging, get_logger


class TestLogging:
    """Tests for the application logger namespace."""

    def test_get_logger_is_child_of_namespace(self):
        logger = get_logger("snss.snss_parser")
        assert logger.name == f"{ROOT_LOGGER_NAME}.snss.snss_parser"

    def test_get_logger_without_name(self):
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_configure_writes_file(self, tmp_path: Path):
        log_dir = tmp_path / "logs"
        root = configure_logging(log_dir, level=logging.DEBUG, console=False)
        try:
            get_logger("test").info("hello %s", "world")
            for handler in root.handlers:
                handler.flush()

            content = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
            assert "INFO snss_reader.test hello world" in content
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()

    def test_reconfigure_replaces_handlers(self, tmp_path: Path):
        root = configure_logging(tmp_path, console=True)
        root = configure_logging(tmp_path, console=False)
        try:
            assert len(root.handlers) == 1
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()

    def test_decoder_logs_truncation(self, caplog):
        from snss import decode_data

        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            decode_data(b"SNSS\x01\x00\x00\x00\xff\xff", "broken")

        assert any("truncated" in record.getMessage() for record in caplog.records)
