"""
Unit tests for utility helpers.
"""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from schema_simplify.schema import simplify
from schema_simplify.schema.types import RecordSchema, StringSchema
from schema_simplify.utils import setup_logging


class TestSetupLogging:
    """Test logging configuration."""

    def teardown_method(self):
        logger = logging.getLogger("schema_simplify")
        for handler in list(logger.handlers):
            if isinstance(handler, RichHandler):
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_level_and_handler(self):
        """Test that the package logger gets the level and one Rich handler."""
        logger = setup_logging("DEBUG")

        assert logger.name == "schema_simplify"
        assert logger.level == logging.DEBUG
        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1

    def test_repeated_setup_replaces_handler(self):
        """Test that calling setup twice does not stack handlers."""
        setup_logging()
        logger = setup_logging(logging.INFO)

        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_diagnostics_reach_console(self):
        """Test that default-sink diagnostics are written to the console."""
        buffer = io.StringIO()
        setup_logging(console=Console(file=buffer, width=200))

        simplify(RecordSchema(StringSchema()))

        assert "RecordSchema converted to empty object" in buffer.getvalue()
