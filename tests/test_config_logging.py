"""
Tests for configuration and structured logging
"""

import json
import logging

from client_ledger.config import LedgerConfig, reload_config, get_config
from client_ledger.logging_config import JSONFormatter, setup_logging, log_action


class TestConfig:
    """Test environment-based configuration"""

    def test_defaults(self, monkeypatch):
        """Test built-in defaults"""
        monkeypatch.delenv("LEDGER_SNAPSHOT_DIR", raising=False)
        config = LedgerConfig()

        assert config.snapshot_dir == "./db/"
        assert config.snapshot_extension == "DAT"
        assert config.snapshot_date_format == "%d%m%Y"
        assert config.api_port == 8080
        assert config.api_prefix == "/app"

    def test_env_override(self, monkeypatch):
        """Test LEDGER_ prefixed environment variables"""
        monkeypatch.setenv("LEDGER_SNAPSHOT_DIR", "/var/lib/ledger")
        monkeypatch.setenv("LEDGER_API_PORT", "9000")

        config = reload_config()

        assert config.snapshot_dir == "/var/lib/ledger"
        assert config.api_port == 9000
        assert get_config() is config

        monkeypatch.delenv("LEDGER_SNAPSHOT_DIR")
        monkeypatch.delenv("LEDGER_API_PORT")
        reload_config()


class TestLogging:
    """Test structured log output"""

    def test_json_formatter_includes_action_fields(self):
        """Test that structured fields end up in the JSON line"""
        logger = logging.getLogger("client_ledger.test")
        record = logger.makeRecord(
            logger.name, logging.INFO, __file__, 1, "Credit applied", (), None,
            extra={"action": "credit", "resource": "abc", "extra": {"amount": "1.00"}}
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Credit applied"
        assert entry["level"] == "INFO"
        assert entry["action"] == "credit"
        assert entry["resource"] == "abc"
        assert entry["extra"] == {"amount": "1.00"}

    def test_setup_logging_and_log_action(self, capsys):
        """Test that log_action writes one JSON line through the package logger"""
        logger = setup_logging("DEBUG", "json", logger_name="client_ledger_test")

        log_action(logger, "warning", "Debit rejected", action="debit", resource="abc")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["level"] == "WARNING"
        assert entry["action"] == "debit"
        assert len(logger.handlers) == 1

    def test_text_format(self, capsys):
        """Test the human readable format"""
        logger = setup_logging("INFO", "text", logger_name="client_ledger_text")

        logger.info("hello")

        assert "| INFO     | client_ledger_text | hello" in capsys.readouterr().err
