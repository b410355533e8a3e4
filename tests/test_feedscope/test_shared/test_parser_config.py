"""Tests for shared configuration, diagnostics and logging."""

import logging

import pytest

from feedscope.shared import (
    ContentMode,
    CorrelationLogger,
    DiagnosticCode,
    DiagnosticEntry,
    DiagnosticLog,
    DiagnosticSeverity,
    FeedParserConfig,
    get_logger,
)


class TestFeedParserConfig:
    """Test FeedParserConfig validation and presets."""

    def test_defaults(self):
        """Test default configuration values."""
        config = FeedParserConfig()
        assert config.content_mode is ContentMode.OWNED
        assert config.decode_entities is True
        assert config.collect_diagnostics is True
        assert config.max_diagnostics == 1000
        assert config.correlation_id is None

    def test_zero_copy_preset(self):
        """Test the borrowed-content preset."""
        assert FeedParserConfig.zero_copy().content_mode is ContentMode.BORROWED
        assert FeedParserConfig.default() == FeedParserConfig()

    def test_content_mode_from_string(self):
        """Test that string content modes are coerced."""
        config = FeedParserConfig(content_mode="Borrowed")
        assert config.content_mode is ContentMode.BORROWED

    def test_invalid_content_mode(self):
        """Test that unknown content modes raise ValueError."""
        with pytest.raises(ValueError, match="content_mode must be one of"):
            FeedParserConfig(content_mode="shared")

    def test_negative_max_diagnostics(self):
        """Test that a negative diagnostic cap raises ValueError."""
        with pytest.raises(ValueError, match="max_diagnostics must be >= 0"):
            FeedParserConfig(max_diagnostics=-1)

    def test_dict_round_trip_ignores_unknown_keys(self):
        """Test to_dict/from_dict and tolerance of unknown keys."""
        config = FeedParserConfig(content_mode=ContentMode.BORROWED, correlation_id="abc")
        data = config.to_dict()
        assert data["content_mode"] == "borrowed"

        data["unknown_option"] = 42
        assert FeedParserConfig.from_dict(data) == config


class TestDiagnostics:
    """Test diagnostic entries and the bounded log."""

    def _entry(self, severity=DiagnosticSeverity.WARNING, code=DiagnosticCode.MALFORMED_TOKEN):
        return DiagnosticEntry(
            severity=severity,
            code=code,
            message="Skipped malformed markup",
            component="scope_iterator",
            position={"line": 1, "column": 5, "offset": 4},
        )

    def test_entry_requires_message(self):
        """Test that empty messages are rejected."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(
                severity=DiagnosticSeverity.INFO,
                code=DiagnosticCode.STRAY_TEXT,
                message="",
                component="scope_iterator",
            )

    def test_entry_to_dict(self):
        """Test JSON-friendly conversion."""
        data = self._entry().to_dict()
        assert data["severity"] == "WARNING"
        assert data["code"] == "malformed_token"
        assert data["position"] == {"line": 1, "column": 5, "offset": 4}

    def test_log_filters(self):
        """Test filtering by severity and code."""
        log = DiagnosticLog()
        log.add(self._entry())
        log.add(self._entry(DiagnosticSeverity.INFO, DiagnosticCode.STRAY_END_TAG))

        assert len(log) == 2
        assert log.has_warnings
        assert len(log.by_severity(DiagnosticSeverity.INFO)) == 1
        assert [e.code for e in log.by_code(DiagnosticCode.STRAY_END_TAG)] == [
            DiagnosticCode.STRAY_END_TAG
        ]

    def test_log_is_bounded(self):
        """Test that entries past the cap are counted as dropped."""
        log = DiagnosticLog(max_entries=1)
        log.add(self._entry())
        log.add(self._entry())
        assert len(log) == 1
        assert log.dropped == 1

    def test_info_only_log_has_no_warnings(self):
        """Test has_warnings ignores informational entries."""
        log = DiagnosticLog()
        log.add(self._entry(DiagnosticSeverity.INFO, DiagnosticCode.STRAY_TEXT))
        assert not log.has_warnings


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_get_logger(self):
        """Test logger construction and default component."""
        logger = get_logger("feedscope.scope.iterators", "doc-1")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "iterators"
        assert logger.correlation_id == "doc-1"

    def test_extras_attached(self, caplog):
        """Test that component and correlation ID reach the log record."""
        logger = get_logger("feedscope.test", "doc-2", "rss")
        with caplog.at_level(logging.WARNING, logger="feedscope.test"):
            logger.warning("Recovered", extra={"offset": 10})

        record = caplog.records[-1]
        assert record.component == "rss"
        assert record.correlation_id == "doc-2"
        assert record.offset == 10

    def test_is_debug_enabled(self, caplog):
        """Test debug level detection."""
        logger = get_logger("feedscope.debugcheck")
        with caplog.at_level(logging.DEBUG, logger="feedscope.debugcheck"):
            assert logger.is_debug_enabled()
