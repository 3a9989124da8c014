"""
Token Tree Model.

Defines the hierarchical token representation consumed and produced by the
rewriter. A token is either a `Leaf` (identifier, punctuation, literal) or a
`Group` (a delimiter plus an ordered tuple of child tokens).

Tokens are frozen dataclasses with tuple children, so an input sequence can be
shared freely between the original item and the rewritten output. Each node
implements `__str__` to emit its canonical text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union


class TokenKind(str, Enum):
  """Enumeration of leaf token classes."""

  IDENTIFIER = "IDENTIFIER"
  PUNCTUATION = "PUNCTUATION"
  LITERAL = "LITERAL"


class Delimiter(str, Enum):
  """Enumeration of group delimiters."""

  PARENTHESIS = "PARENTHESIS"
  BRACKET = "BRACKET"
  BRACE = "BRACE"
  NONE = "NONE"


# Open/close text per delimiter. NONE groups are invisible.
DELIMITER_PAIRS = {
  Delimiter.PARENTHESIS: ("(", ")"),
  Delimiter.BRACKET: ("[", "]"),
  Delimiter.BRACE: ("{", "}"),
  Delimiter.NONE: ("", ""),
}

UNWRAP_REQUEST = "?"
ANNOTATION_MARKER = "#"


@dataclass(frozen=True)
class Leaf:
  """
  An atomic lexical unit.

  Attributes:
      kind: The leaf class (identifier, punctuation or literal).
      text: The raw source text of the token (e.g. "x", "?", '"abc"').
  """

  kind: TokenKind
  text: str

  def is_punct(self, text: str) -> bool:
    """Returns True if this is a punctuation leaf with the given text."""
    return self.kind == TokenKind.PUNCTUATION and self.text == text

  def __str__(self) -> str:
    return self.text


@dataclass(frozen=True)
class Group:
  """
  A delimited sequence of tokens.

  Attributes:
      delimiter: The enclosing bracket kind.
      children: The ordered inner tokens.
  """

  delimiter: Delimiter
  children: Tuple["Token", ...] = ()

  def __str__(self) -> str:
    return render((self,))


Token = Union[Leaf, Group]
TokenSequence = Sequence[Token]


def ident(text: str) -> Leaf:
  return Leaf(TokenKind.IDENTIFIER, text)


def punct(text: str) -> Leaf:
  return Leaf(TokenKind.PUNCTUATION, text)


def literal(text: str) -> Leaf:
  return Leaf(TokenKind.LITERAL, text)


def group(delimiter: Delimiter, *children: Token) -> Group:
  return Group(delimiter, tuple(children))


def is_group(token: Token, delimiter: Delimiter) -> bool:
  """Returns True if `token` is a Group with the given delimiter."""
  return isinstance(token, Group) and token.delimiter == delimiter


def render(tokens: Iterable[Token]) -> str:
  """
  Produces the canonical text of a token sequence.

  Tokens are separated by single spaces. Parenthesis and bracket groups render
  tightly (`(a b)`, `[a]`), brace groups are padded (`{ a b }`), empty groups
  render as their bare delimiters and NONE groups as their content.

  Args:
      tokens: The sequence to render.

  Returns:
      str: The rendered text.
  """
  # Frames of (pending children, rendered parts, enclosing group)
  stack: List[Tuple[Iterator[Token], List[str], Optional[Group]]] = [(iter(tokens), [], None)]

  while True:
    children, parts, enclosing = stack[-1]
    token = next(children, None)
    if isinstance(token, Leaf):
      parts.append(token.text)
    elif isinstance(token, Group):
      stack.append((iter(token.children), [], token))
    else:
      stack.pop()
      inner = " ".join(p for p in parts if p)
      if enclosing is None:
        return inner
      stack[-1][1].append(_wrap(enclosing.delimiter, inner))


def _wrap(delimiter: Delimiter, inner: str) -> str:
  open_text, close_text = DELIMITER_PAIRS[delimiter]
  if delimiter == Delimiter.BRACE and inner:
    return f"{open_text} {inner} {close_text}"
  return f"{open_text}{inner}{close_text}"
