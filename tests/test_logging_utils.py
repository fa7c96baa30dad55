"""
test_logging_utils.py
---------------------
Unit tests for svgscene.logging_utils
"""

import logging

import pytest
from colorama import Fore

from svgscene.logging_utils import LOGGER_NAME, ColorFormatter, configure_logging


@pytest.fixture
def clean_logger(monkeypatch):
  # Keep colorama from rewrapping sys.stdout for the rest of the session.
  monkeypatch.setattr("svgscene.logging_utils.colorama_init", lambda **kwargs: None)
  logger = logging.getLogger("svgscene.test")
  yield logger
  for h in list(logger.handlers):
    h.close()
    logger.removeHandler(h)


def test_console_only(clean_logger):
  assert configure_logging(logging.DEBUG, name=clean_logger.name) is None
  assert clean_logger.level == logging.DEBUG
  assert len(clean_logger.handlers) == 1
  assert isinstance(clean_logger.handlers[0].formatter, ColorFormatter)


def test_file_log(clean_logger, tmp_path):
  path = configure_logging(logging.INFO, log_dir=tmp_path / "logs", name=clean_logger.name, run_prefix="clock")
  clean_logger.warning("hello from the test")
  for h in clean_logger.handlers:
    h.flush()
  assert path.parent == tmp_path / "logs"
  assert path.name.startswith("clock_PID")
  text = path.read_text()
  assert "Logging initialized" in text
  assert "[WARNING] hello from the test" in text


def test_reconfigure_replaces_handlers(clean_logger):
  configure_logging(name=clean_logger.name)
  configure_logging(name=clean_logger.name)
  assert len(clean_logger.handlers) == 1


def test_color_formatter():
  record = logging.LogRecord(LOGGER_NAME, logging.ERROR, __file__, 1, "boom %d", (7,), None)
  out = ColorFormatter(datefmt="%H:%M:%S").format(record)
  assert f"[{LOGGER_NAME}]" in out
  assert Fore.RED in out
  assert out.endswith("boom 7")
