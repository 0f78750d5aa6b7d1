"""Tests for correlation-aware logging."""

import logging

from sgml_composer.markup import MarkupNode
from sgml_composer.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test the correlation logger wrapper."""

    def test_component_defaults_to_module_name(self) -> None:
        """Test the component is derived from the logger name."""
        logger = get_logger("sgml_composer.markup.node")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "node"
        assert logger.correlation_id is None

    def test_records_carry_correlation_fields(self, caplog) -> None:
        """Test every record gets component and correlation ID."""
        logger = get_logger("sgml_composer.test", "req-1", "tester")

        with caplog.at_level(logging.INFO, logger="sgml_composer.test"):
            logger.info("hello", extra={"node": "p"})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tester"
        assert record.correlation_id == "req-1"
        assert record.node == "p"


def test_flush_logs_debug_record(caplog) -> None:
    """Test flushing a node emits a structured debug record."""
    with caplog.at_level(logging.DEBUG, logger="sgml_composer.markup.node"):
        MarkupNode("p", "hello").flush(True)

    record = next(r for r in caplog.records if r.getMessage() == "Flushed markup")
    assert record.component == "markup_node"
    assert record.node == "p"
    assert record.characters == len("<p>hello</p>")
