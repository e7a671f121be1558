"""
Tests for openrouter_client/logger.py

Key behaviors to verify:
1. Keyword context lands on the log record
2. Default loggers propagate to the host's logging tree
3. JSONL output is lazy and append-only
"""

import json
import logging

from openrouter_client.logger import ClientLogger, create_logger


class TestPropagation:
    """Test default (host-controlled) logging."""

    def test_kwargs_become_record_fields(self, caplog):
        logger = create_logger("retry")

        with caplog.at_level(logging.WARNING, logger="openrouter_client"):
            logger.warning("Request failed", attempt=2, status_code=503)

        record = caplog.records[-1]
        assert record.getMessage() == "Request failed"
        assert record.attempt == 2
        assert record.status_code == 503
        assert record.component == "retry"
        assert record.name == "openrouter_client.retry"


class TestJSONOutput:
    """Test file output."""

    def test_no_file_until_first_log(self, tmp_path):
        log_dir = tmp_path / "logs"

        logger = ClientLogger("transport", log_dir=log_dir)
        logger.close()

        assert not log_dir.exists()
        assert logger.log_file is None

    def test_jsonl_fields(self, tmp_path):
        log_dir = tmp_path / "logs"

        with ClientLogger("transport", log_dir=log_dir) as logger:
            logger.debug("OpenRouter API response", status_code=200, body_bytes=42, ignored="x")

        lines = (log_dir / "transport.jsonl").read_text().strip().splitlines()
        entry = json.loads(lines[-1])

        assert entry["level"] == "DEBUG"
        assert entry["message"] == "OpenRouter API response"
        assert entry["component"] == "transport"
        assert entry["status_code"] == 200
        assert entry["body_bytes"] == 42
        assert "ignored" not in entry

    def test_appends_across_loggers(self, tmp_path):
        log_dir = tmp_path / "logs"

        with ClientLogger("retry", log_dir=log_dir) as first:
            first.info("one")
        with ClientLogger("retry", log_dir=log_dir) as second:
            second.info("two")

        messages = [json.loads(line)["message"] for line in (log_dir / "retry.jsonl").read_text().splitlines()]
        assert messages == ["one", "two"]
