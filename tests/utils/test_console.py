"""
Tests for the console proxy and logging helpers.
"""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from auto_unwrap.utils import console as console_mod
from auto_unwrap.utils.console import (
  get_console,
  log_error,
  log_info,
  log_success,
  logger,
  reset_console,
  set_console,
  set_log_level,
)


def test_set_console_redirects_logging(captured_console):
  set_log_level(logging.INFO)
  log_info("hello")
  log_success("done")
  log_error("broken")

  output = captured_console.getvalue()
  for word in ["hello", "done", "broken"]:
    assert word in output
  assert "SUCCESS" in output


def test_level_filters(captured_console):
  set_log_level(logging.ERROR)
  log_info("hidden")
  log_error("shown")

  output = captured_console.getvalue()
  assert "hidden" not in output
  assert "shown" in output


def test_single_rich_handler_after_swaps():
  buf = io.StringIO()
  set_console(Console(file=buf))
  set_console(Console(file=buf))
  try:
    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.propagate is False
  finally:
    reset_console()


def test_proxy_print_and_getattr(captured_console):
  console_mod.console.print("plain text")
  assert "plain text" in captured_console.getvalue()
  assert console_mod.console.width == get_console().width
