"""
Rewrite Trace Logger.

Records the step-by-step decisions of the rewriter. It captures:
1. Lifecycle Phases (Lexing, Rewriting, Rendering).
2. Substitutions (`?` replaced by `.unwrap()`).
3. Directive handling (skip directive consumed, suppression lifted, plain `#`).

The output is a structured list of event dictionaries suitable for JSON serialization.
A tracer is owned by a single engine run and is never shared between runs.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  SUBSTITUTION = "substitution"
  DIRECTIVE = "directive"
  SUPPRESSION_LIFTED = "suppression_lifted"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records rewrite events for debugging and reporting.
  Injected into the rewriter by the engine when tracing is enabled.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g., 'Rewriting body'). Returns Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def close_phases(self):
    """Ends every open phase, innermost first."""
    while self._active_phases:
      self.end_phase()

  def log_substitution(self, depth: int):
    self._log_simple(TraceEventType.SUBSTITUTION, "Replaced '?' with '.unwrap()'", {"depth": depth})

  def log_directive(self, depth: int):
    self._log_simple(TraceEventType.DIRECTIVE, "Skip directive found, suppressing", {"depth": depth})

  def log_suppression_lifted(self, depth: int, body: str):
    """Logs a brace group passed through verbatim at the end of a suppressed span."""
    self._log_simple(
      TraceEventType.SUPPRESSION_LIFTED,
      "Suppressed block passed through",
      {"depth": depth, "body": body},
    )

  def log_inspection(self, node_str: str, outcome: str, detail: str = ""):
    """Logs a decision point where no change occurred."""
    self._log_simple(TraceEventType.INSPECTION, f"Inspecting '{node_str}'", {"outcome": outcome, "detail": detail})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
