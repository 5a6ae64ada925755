"""
Tests for logging setup.
"""

import logging

from doctrack.infrastructure.logging_config import ColoredFormatter, setup_logging


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_file_handler_gets_debug(self, tmp_path):
        log_file = tmp_path / "logs" / "doctrack.log"
        setup_logging(level=logging.WARNING, log_file=log_file)

        logging.getLogger("doctrack.test").debug("debug line")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "debug line" in log_file.read_text(encoding="utf-8")

    def test_console_level(self):
        setup_logging(level=logging.ERROR)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        console = [h for h in root.handlers if type(h) is logging.StreamHandler]
        assert [h.level for h in console] == [logging.ERROR]

    def test_openpyxl_quieted(self):
        setup_logging()
        assert logging.getLogger("openpyxl").level == logging.WARNING


class TestColoredFormatter:
    """Test cases for ColoredFormatter."""

    def record(self):
        return logging.LogRecord("doctrack.x", logging.ERROR, __file__, 1, "boom", None, None)

    def test_colors_applied_and_restored(self):
        formatter = ColoredFormatter("%(levelname)s %(name)s %(message)s", use_colors=True)
        record = self.record()
        text = formatter.format(record)
        assert "\033[" in text
        assert "boom" in text
        assert record.levelname == "ERROR"
        assert record.name == "doctrack.x"

    def test_plain_when_disabled(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s", use_colors=False)
        assert formatter.format(self.record()) == "ERROR boom"
