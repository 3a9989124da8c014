"""
Exception Hierarchy.

All failures of the transform are fatal precondition violations. They are
raised synchronously with no partial output so the calling build fails loudly.
"""


class AutoUnwrapError(Exception):
  """Base class for all errors raised by the package."""


class MalformedInput(AutoUnwrapError):
  """Raised when a token stream ends immediately after an annotation marker."""


class InvalidItemShape(AutoUnwrapError):
  """Raised when an item is empty or does not end in a brace-delimited body."""


class TokenizeError(AutoUnwrapError, ValueError):
  """
  Raised when source text cannot be turned into a token tree.

  Attributes:
      line: 1-based line of the offending text.
      column: 1-based column of the offending text.
  """

  def __init__(self, message: str, line: int, column: int) -> None:
    super().__init__(f"{message} at line {line}, col {column}")
    self.line = line
    self.column = column
