"""
Orchestration Engine for Unwrap Rewrites.

This module provides the `UnwrapEngine`, a driver around the pure token core.
A run consists of:

1.  **Lexing**: source text is tokenized into a token tree (`run` only).
2.  **Rewriting**: the Entry Adapter rewrites the item's trailing body.
3.  **Rendering**: the resulting tokens are rendered to canonical text.

Unlike the core functions, the engine logs its progress and, depending on
`RuntimeConfig.strict_mode`, either re-raises failures or records them in the
returned `ConversionResult`.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from rich.markup import escape

from auto_unwrap.config import RuntimeConfig
from auto_unwrap.core.adapter import auto_unwrap
from auto_unwrap.core.errors import AutoUnwrapError
from auto_unwrap.core.lexer import parse_token_tree
from auto_unwrap.core.tokens import TokenSequence, render
from auto_unwrap.core.tracer import TraceLogger
from auto_unwrap.utils.console import log_error, log_info, log_success, set_log_level


class ConversionResult(BaseModel):
  """
  Structured result of a single item rewrite.
  """

  code: str = Field(default="", description="The rewritten item, rendered as text.")
  errors: List[str] = Field(default_factory=list, description="Error messages encountered.")
  success: bool = Field(default=True, description="True if the item was rewritten without failures.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="A log of internal trace events.")

  @property
  def has_errors(self) -> bool:
    """
    Returns True if any errors were recorded during the rewrite.

    Returns:
        bool: True if errors list is non-empty.
    """
    return len(self.errors) > 0


class UnwrapEngine:
  """
  Runs the unwrap rewrite on one item at a time.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration. Defaults
            to `RuntimeConfig()` (no tracing, strict).
    """
    self.config = config or RuntimeConfig()
    set_log_level(self.config.log_level_num)

  @classmethod
  def from_pyproject(cls, search_path: Optional[Path] = None, **overrides: Any) -> "UnwrapEngine":
    """
    Builds an engine from the `[tool.auto_unwrap]` table of the nearest pyproject.toml.

    Args:
        search_path (Path, optional): Directory to start searching from. Defaults to the cwd.
        **overrides: Explicit `RuntimeConfig.load` arguments (trace, log_level, strict_mode).

    Returns:
        UnwrapEngine: An engine using the resolved configuration.
    """
    config = RuntimeConfig.load(search_path=search_path, **overrides)
    engine = cls(config)
    log_info(f"Loaded configuration: trace={config.trace}, strict_mode={config.strict_mode}")
    return engine

  def run(self, code: str) -> ConversionResult:
    """
    Lexes, rewrites and renders a single item given as source text.

    Args:
        code (str): Source of one item, e.g. `fn f() -> i32 { x? }`.

    Returns:
        ConversionResult: The rendered output, or the recorded failure.

    Raises:
        AutoUnwrapError: On failure, if `strict_mode` is enabled.
    """
    tracer = TraceLogger() if self.config.trace else None
    if tracer:
      tracer.start_phase("Lexing")
    try:
      item = parse_token_tree(code)
    except AutoUnwrapError as e:
      return self._fail(e, tracer)
    if tracer:
      tracer.end_phase()

    return self._rewrite(item, tracer)

  def run_tokens(self, item: TokenSequence) -> ConversionResult:
    """
    Rewrites and renders an already tokenized item.

    Args:
        item (TokenSequence): The item's token tree.

    Returns:
        ConversionResult: The rendered output, or the recorded failure.
    """
    tracer = TraceLogger() if self.config.trace else None
    return self._rewrite(item, tracer)

  def _rewrite(self, item: TokenSequence, tracer: Optional[TraceLogger]) -> ConversionResult:
    if tracer:
      tracer.start_phase("Rewriting", "Substituting '?' in item body")
    try:
      tokens = auto_unwrap([], item, tracer)
    except AutoUnwrapError as e:
      return self._fail(e, tracer)
    if tracer:
      tracer.end_phase()

    code = render(tokens)
    log_success(f"Rewrote item: {escape(code)}")
    return ConversionResult(code=code, trace_events=tracer.export() if tracer else [])

  def _fail(self, error: AutoUnwrapError, tracer: Optional[TraceLogger]) -> ConversionResult:
    message = f"{type(error).__name__}: {error}"
    if tracer:
      tracer.close_phases()
    log_error(escape(message))
    if self.config.strict_mode:
      raise error
    return ConversionResult(success=False, errors=[message], trace_events=tracer.export() if tracer else [])
