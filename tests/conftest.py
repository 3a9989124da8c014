"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Token construction helpers shared by the core tests.
- Console capture for log assertions.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'auto_unwrap' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from auto_unwrap.utils.console import reset_console, set_console


@pytest.fixture
def captured_console():
  """
  Redirects package logging to an in-memory Rich console.

  Yields:
      io.StringIO: The buffer receiving rendered log output.
  """
  buf = io.StringIO()
  set_console(Console(file=buf, force_terminal=False, width=200))
  yield buf
  reset_console()
