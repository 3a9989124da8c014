"""
Item Entry Adapter.

Applies the rewriter to an annotated item (e.g. `fn f() -> i32 { ... }`). The
signature tokens are copied untouched; only the trailing brace-delimited body
is rewritten.
"""

from typing import List, Optional, Tuple

from auto_unwrap.core.errors import InvalidItemShape
from auto_unwrap.core.rewriter import rewrite_body
from auto_unwrap.core.tokens import Delimiter, Group, Token, TokenSequence, is_group
from auto_unwrap.core.tracer import TraceLogger


def split_item(item: TokenSequence) -> Tuple[List[Token], Group]:
  """
  Splits an item into its prefix and its trailing body group.

  Args:
      item: Full token sequence of the annotated item.

  Returns:
      Tuple[List[Token], Group]: The prefix tokens and the brace body.

  Raises:
      InvalidItemShape: If the item is empty or does not end in a brace group.
  """
  if not item:
    raise InvalidItemShape("No/Invalid function body: item has no tokens")

  body = item[-1]
  if not is_group(body, Delimiter.BRACE):
    raise InvalidItemShape(f"No/Invalid function body: item ends with '{body}' instead of a brace-delimited block")

  return list(item[:-1]), body


def auto_unwrap(args: TokenSequence, item: TokenSequence, tracer: Optional[TraceLogger] = None) -> List[Token]:
  """
  Replaces every `?` in an item's body with `.unwrap()`.

  Args:
      args: The attribute's own argument tokens. Ignored.
      item: The annotated item's tokens.
      tracer: Optional trace logger.

  Returns:
      List[Token]: The prefix unchanged, followed by the rewritten body group.
  """
  prefix, body = split_item(item)
  children = rewrite_body(body.children, tracer)
  return [*prefix, Group(Delimiter.BRACE, tuple(children))]
