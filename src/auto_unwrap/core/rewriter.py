"""
Unwrap Rewrite Engine.

Recursive traversal that replaces every unwrap-request operator (`?`) with the
explicit expression `.unwrap()`, descending into nested groups.

The traversal is a two-state machine:

- **ACTIVE** (initial): `?` is substituted, groups are rewritten recursively,
  and `#[skip_auto_unwrap]` switches to SUPPRESSED (the directive itself is
  dropped from the output).
- **SUPPRESSED**: every token is emitted verbatim without recursion. The next
  brace-delimited group is also emitted verbatim and switches back to ACTIVE.
  No other token (including `;`) ends suppression.

The state is passed in and returned explicitly, so each call is a pure
function of its arguments. Every recursive call starts ACTIVE and owns its own
output list.
"""

from enum import Enum
from typing import List, Optional, Tuple

from auto_unwrap.core.directive import TokenCursor, match_skip_directive
from auto_unwrap.core.tokens import (
  ANNOTATION_MARKER,
  UNWRAP_REQUEST,
  Delimiter,
  Group,
  Leaf,
  Token,
  TokenSequence,
  group,
  ident,
  is_group,
  punct,
  render,
)
from auto_unwrap.core.tracer import TraceLogger


class RewriteState(str, Enum):
  """Traversal state of a single `rewrite_tokens` call."""

  ACTIVE = "active"
  SUPPRESSED = "suppressed"


def unwrap_expression() -> List[Token]:
  """Returns the three tokens `.`, `unwrap`, `()` that replace a `?`."""
  return [punct("."), ident("unwrap"), group(Delimiter.PARENTHESIS)]


def rewrite_tokens(
  tokens: TokenSequence,
  state: RewriteState = RewriteState.ACTIVE,
  tracer: Optional[TraceLogger] = None,
  depth: int = 0,
) -> Tuple[List[Token], RewriteState]:
  """
  Rewrites a token sequence.

  Args:
      tokens: The input sequence. It is not modified.
      state: The state the traversal starts in.
      tracer: Optional trace logger receiving one event per decision.
      depth: Group nesting depth, used for trace metadata only.

  Returns:
      Tuple[List[Token], RewriteState]: The new sequence and the state the
      traversal ended in.

  Raises:
      MalformedInput: If the sequence ends right after a `#` while ACTIVE.
  """
  out: List[Token] = []
  cursor = TokenCursor(tokens)

  for token in cursor:
    if state == RewriteState.SUPPRESSED:
      out.append(token)
      if is_group(token, Delimiter.BRACE):
        if tracer:
          tracer.log_suppression_lifted(depth, str(token))
        state = RewriteState.ACTIVE
      continue

    if isinstance(token, Group):
      children, _ = rewrite_tokens(token.children, RewriteState.ACTIVE, tracer, depth + 1)
      out.append(Group(token.delimiter, tuple(children)))
    elif isinstance(token, Leaf) and token.is_punct(UNWRAP_REQUEST):
      if tracer:
        tracer.log_substitution(depth)
      out.extend(unwrap_expression())
    elif isinstance(token, Leaf) and token.is_punct(ANNOTATION_MARKER):
      if match_skip_directive(cursor):
        if tracer:
          tracer.log_directive(depth)
        state = RewriteState.SUPPRESSED
      else:
        if tracer:
          tracer.log_inspection(ANNOTATION_MARKER, "kept", render([cursor.peek()]))
        out.append(token)
    else:
      out.append(token)

  return out, state


def rewrite_body(tokens: TokenSequence, tracer: Optional[TraceLogger] = None) -> List[Token]:
  """
  Rewrites the children of an item body, starting ACTIVE.

  A suppression still open at the end of the body has nothing left to cover
  and is discarded.
  """
  out, _ = rewrite_tokens(tokens, RewriteState.ACTIVE, tracer)
  return out
