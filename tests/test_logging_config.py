"""Tests for logging setup."""

import logging

import pytest

from git_activity.logging_config import ROOT_LOGGER, apply_verbosity, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the project and library loggers back after each test."""
    names = (ROOT_LOGGER, "matplotlib")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    logging.basicConfig(force=True)


class TestSetupLogging:
    """Levels chosen from --verbose and --quiet."""

    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.ERROR),
        ],
    )
    def test_levels(self, verbose, quiet, level):
        """Quiet wins over verbose."""
        logger = setup_logging(verbose=verbose, quiet=quiet)
        assert logger.name == ROOT_LOGGER
        assert logger.level == level

    def test_library_loggers_stay_at_warning(self):
        """matplotlib does not follow --verbose."""
        setup_logging(verbose=True)
        assert logging.getLogger("matplotlib").level == logging.WARNING

    def test_log_file(self, tmp_path):
        """Records are appended to the log file."""
        path = tmp_path / "run.log"
        setup_logging(log_file=str(path))
        get_logger("activity.analyzer").warning("slow repository %s", "foo")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "git_activity.activity.analyzer - WARNING - slow repository foo" in path.read_text()

    def test_apply_verbosity(self):
        """A verbosity setting from config adjusts the level afterwards."""
        setup_logging()
        assert apply_verbosity("verbose").level == logging.DEBUG
        assert apply_verbosity("quiet").level == logging.ERROR


class TestGetLogger:
    """Logger names under git_activity."""

    def test_prefixes_short_names(self):
        """Short names are placed under the project logger."""
        assert get_logger("charts").name == "git_activity.charts"

    def test_module_names_pass_through(self):
        """__name__ of project modules is used as is."""
        assert get_logger("git_activity.config").name == "git_activity.config"

    def test_root(self):
        """No name gives the project logger."""
        assert get_logger().name == ROOT_LOGGER
