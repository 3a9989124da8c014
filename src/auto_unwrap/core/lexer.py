"""
Rust Source Tokenizer.

Provides a Regex-based Lexer (`RustLexer`) that decomposes Rust-like source text
into a flat stream of `LexToken` objects, and `parse_token_tree`, which folds the
delimiter tokens of that stream into nested `Group`s.

Comments and whitespace are discarded. Multi-character operators (`::`, `->`,
`..=`) are kept as single punctuation tokens, but `?` and `#` are always
emitted on their own so the rewriter can recognise them.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generator, List, Tuple

from auto_unwrap.core.errors import TokenizeError
from auto_unwrap.core.tokens import Delimiter, Group, Leaf, Token, TokenKind


class LexKind(Enum):
  """Enumeration of flat lexer token types."""

  IDENTIFIER = auto()  # foo, r#type, 'a (lifetime)
  LITERAL = auto()  # "abc", r#"x"#, b'a', 'c', 42u8, 1.5e3
  PUNCTUATION = auto()  # ?, #, ::, ->
  OPEN = auto()  # ( [ {
  CLOSE = auto()  # ) ] }


@dataclass
class LexToken:
  """
  Represents a flat lexical unit.

  Attributes:
      kind: The type of token.
      value: The raw string value.
      line: Line number in source (1-based).
      column: Column number in source (1-based).
  """

  kind: LexKind
  value: str
  line: int
  column: int


_OPEN_DELIMITERS = {"(": Delimiter.PARENTHESIS, "[": Delimiter.BRACKET, "{": Delimiter.BRACE}
_CLOSE_DELIMITERS = {")": Delimiter.PARENTHESIS, "]": Delimiter.BRACKET, "}": Delimiter.BRACE}

_MULTI_CHAR_PUNCT = [
  "<<=",
  ">>=",
  "...",
  "..=",
  "::",
  "->",
  "=>",
  "==",
  "!=",
  "<=",
  ">=",
  "&&",
  "||",
  "..",
  "+=",
  "-=",
  "*=",
  "/=",
  "%=",
  "^=",
  "&=",
  "|=",
  "<<",
  ">>",
]


class RustLexer:
  """
  Regex-based Lexer for Rust-like token streams.
  """

  # Order matters: raw/byte strings before identifiers, chars before lifetimes.
  PATTERNS = [
    (LexKind.LITERAL, r'b?r(?P<hashes>#*)".*?"(?P=hashes)'),
    (LexKind.LITERAL, r'b?"(?:[^"\\]|\\.)*"'),
    (LexKind.LITERAL, r"b?'(?:[^'\\\n]|\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]{1,6}\}|.))'"),
    (LexKind.IDENTIFIER, r"'[^\W\d]\w*"),
    (LexKind.LITERAL, r"0[xob][0-9a-fA-F_]+(?:[iu](?:8|16|32|64|128|size))?"),
    (LexKind.LITERAL, r"\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?[\d_]+)?(?:[^\W\d]\w*)?"),
    (LexKind.IDENTIFIER, r"(?:r#)?[^\W\d]\w*"),
    (LexKind.OPEN, r"[(\[{]"),
    (LexKind.CLOSE, r"[)\]}]"),
    (LexKind.PUNCTUATION, "|".join(re.escape(p) for p in _MULTI_CHAR_PUNCT)),
    (LexKind.PUNCTUATION, r"[=<>!~+\-*/%^&|@.,;:#$?]"),
  ]

  def __init__(self) -> None:
    """Initializes the lexer with compiled patterns."""
    self.regex_pairs = [(kind, re.compile(pattern, re.DOTALL)) for kind, pattern in self.PATTERNS]

  def tokenize(self, text: str) -> Generator[LexToken, None, None]:
    """
    Tokenizes the input string.

    Args:
        text: Raw source code.

    Yields:
        LexToken objects.

    Raises:
        TokenizeError: If an unrecognized character sequence or an
            unterminated block comment is encountered.
    """
    pos = 0
    line_num = 1
    line_start = 0
    length = len(text)

    while pos < length:
      skipped = self._skip_trivia(text, pos, line_num, line_start)
      if skipped != pos:
        consumed = text[pos:skipped]
        newlines = consumed.count("\n")
        if newlines:
          line_num += newlines
          line_start = pos + consumed.rfind("\n") + 1
        pos = skipped
        continue

      for kind, regex in self.regex_pairs:
        match = regex.match(text, pos)
        if match:
          val = match.group(0)
          yield LexToken(kind, val, line_num, pos - line_start + 1)

          # String literals may span lines
          newlines = val.count("\n")
          if newlines:
            line_num += newlines
            line_start = pos + val.rfind("\n") + 1
          pos += len(val)
          break
      else:
        snippet = text[pos : min(pos + 10, length)]
        raise TokenizeError(f"Illegal character sequence '{snippet}'", line_num, pos - line_start + 1)

  @staticmethod
  def _skip_trivia(text: str, pos: int, line_num: int, line_start: int) -> int:
    """Returns the position after any whitespace or comment starting at `pos`."""
    if text[pos].isspace():
      end = pos
      while end < len(text) and text[end].isspace():
        end += 1
      return end

    if text.startswith("//", pos):
      end = text.find("\n", pos)
      return len(text) if end == -1 else end

    if text.startswith("/*", pos):
      # Rust block comments nest
      depth = 0
      end = pos
      while end < len(text):
        if text.startswith("/*", end):
          depth += 1
          end += 2
        elif text.startswith("*/", end):
          depth -= 1
          end += 2
          if depth == 0:
            return end
        else:
          end += 1
      raise TokenizeError("Unterminated block comment", line_num, pos - line_start + 1)

    return pos


_LEAF_KINDS = {
  LexKind.IDENTIFIER: TokenKind.IDENTIFIER,
  LexKind.LITERAL: TokenKind.LITERAL,
  LexKind.PUNCTUATION: TokenKind.PUNCTUATION,
}


def parse_token_tree(text: str) -> List[Token]:
  """
  Tokenizes source text and nests delimited spans into Groups.

  Args:
      text: Raw source code.

  Returns:
      List[Token]: The top-level token sequence.

  Raises:
      TokenizeError: On illegal characters or unbalanced delimiters.
  """
  root: List[Token] = []
  # Each frame: (delimiter, children, opening token)
  stack: List[Tuple[Delimiter, List[Token], LexToken]] = []
  current = root

  for tok in RustLexer().tokenize(text):
    if tok.kind == LexKind.OPEN:
      children: List[Token] = []
      stack.append((_OPEN_DELIMITERS[tok.value], children, tok))
      current = children
    elif tok.kind == LexKind.CLOSE:
      if not stack:
        raise TokenizeError(f"Unexpected closing delimiter '{tok.value}'", tok.line, tok.column)
      delimiter, children, opener = stack.pop()
      if _CLOSE_DELIMITERS[tok.value] != delimiter:
        raise TokenizeError(
          f"Mismatched closing delimiter '{tok.value}' for '{opener.value}' opened at line {opener.line}",
          tok.line,
          tok.column,
        )
      current = stack[-1][1] if stack else root
      current.append(Group(delimiter, tuple(children)))
    else:
      current.append(Leaf(_LEAF_KINDS[tok.kind], tok.value))

  if stack:
    _, _, opener = stack[-1]
    raise TokenizeError(f"Unclosed delimiter '{opener.value}'", opener.line, opener.column)

  return root
