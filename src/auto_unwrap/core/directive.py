"""
Skip Directive Detection.

Recognises the `#[skip_auto_unwrap]` directive inside a token stream. The
rewriter calls `match_skip_directive` right after reading a `#` token; the
detector looks at the following token and only consumes it when it is the
directive group.
"""

from typing import Optional

from auto_unwrap.core.errors import MalformedInput
from auto_unwrap.core.tokens import Delimiter, Token, TokenSequence, is_group, render

SKIP_DIRECTIVE = "skip_auto_unwrap"


class TokenCursor:
  """
  Forward-only cursor over a token sequence with one token of lookahead.

  Attributes:
      tokens: The underlying (immutable) sequence.
      pos: Index of the next token to be returned by `next()`.
  """

  def __init__(self, tokens: TokenSequence) -> None:
    self.tokens = tokens
    self.pos = 0

  def peek(self) -> Optional[Token]:
    if self.pos >= len(self.tokens):
      return None
    return self.tokens[self.pos]

  def next(self) -> Optional[Token]:
    token = self.peek()
    if token is not None:
      self.pos += 1
    return token

  def __iter__(self) -> "TokenCursor":
    return self

  def __next__(self) -> Token:
    token = self.next()
    if token is None:
      raise StopIteration
    return token


def is_skip_directive(token: Token) -> bool:
  """
  Checks whether a token is the `[skip_auto_unwrap]` directive group.

  The bracket group's content must render to exactly the reserved identifier;
  case, prefixes and extra tokens all cause a mismatch.
  """
  return is_group(token, Delimiter.BRACKET) and render(token.children) == SKIP_DIRECTIVE


def match_skip_directive(cursor: TokenCursor) -> bool:
  """
  Consumes a skip directive following an annotation marker, if present.

  Args:
      cursor: Cursor positioned just after a `#` punctuation token.

  Returns:
      bool: True if the directive group was found and consumed. On False the
      lookahead token is left in place for normal processing.

  Raises:
      MalformedInput: If the stream ends right after the annotation marker.
  """
  lookahead = cursor.peek()
  if lookahead is None:
    raise MalformedInput("Token stream ends immediately after annotation marker '#'")

  if is_skip_directive(lookahead):
    cursor.next()
    return True
  return False
