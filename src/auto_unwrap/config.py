"""
Runtime Configuration Store.

Settings for the engine facade. The token-to-token core takes no
configuration; these options only control tracing, logging verbosity and
whether failures are re-raised or reported in the result.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from auto_unwrap.utils.console import SUCCESS_LEVEL_NUM

_LEVEL_NAMES = ("DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  trace: bool = Field(False, description="If True, record trace events for every rewrite decision.")
  log_level: str = Field("WARNING", description="Minimum level for engine log messages.")
  strict_mode: bool = Field(True, description="If True, re-raise failures. If False, report them in the result.")

  @field_validator("log_level")
  @classmethod
  def validate_log_level(cls, v: str) -> str:
    """
    Ensures the level is a known logging level name.

    Args:
        v (str): The raw level name.

    Returns:
        str: The normalized (uppercase) level name.

    Raises:
        ValueError: If the level is not recognised.
    """
    v_clean = v.upper().strip()
    if v_clean not in _LEVEL_NAMES:
      raise ValueError(f"Unknown log level: '{v}'. Supported levels: {list(_LEVEL_NAMES)}")
    return v_clean

  @property
  def log_level_num(self) -> int:
    """
    Resolves the configured level name to its numeric value.

    Returns:
        int: The logging level number.
    """
    if self.log_level == "SUCCESS":
      return SUCCESS_LEVEL_NUM
    return logging.getLevelName(self.log_level)

  @classmethod
  def load(
    cls,
    trace: Optional[bool] = None,
    log_level: Optional[str] = None,
    strict_mode: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Args:
        trace (Optional[bool]): Override for tracing.
        log_level (Optional[str]): Override for the log level.
        strict_mode (Optional[bool]): Override for strict mode.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    overrides = {"trace": trace, "log_level": log_level, "strict_mode": strict_mode}
    merged = {**toml_config, **{k: v for k, v in overrides.items() if v is not None}}
    known = {k: v for k, v in merged.items() if k in cls.model_fields}
    return cls(**known)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      section = tool_section.get("auto_unwrap", {}) if isinstance(tool_section, dict) else {}
      if not isinstance(section, dict):
        return {}, parent
      return section, parent

  return {}, None
