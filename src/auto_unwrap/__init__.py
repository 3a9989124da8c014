"""
auto-unwrap Package.

A token-tree rewriter that replaces every `?` operator in a function body with
an explicit `.unwrap()` call. Spans can be protected with `#[skip_auto_unwrap]`,
which leaves everything up to and including the next brace-delimited block
untouched.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import auto_unwrap
    print(auto_unwrap.expand("fn f() -> i32 { return x?; }"))
    # fn f () -> i32 { return x . unwrap () ; }

Token Level
^^^^^^^^^^^

.. code-block:: python

    from auto_unwrap import auto_unwrap, parse_token_tree, render

    item = parse_token_tree("fn f() { let y = x?; }")
    print(render(auto_unwrap([], item)))
"""

from auto_unwrap.config import RuntimeConfig
from auto_unwrap.core.adapter import auto_unwrap
from auto_unwrap.core.engine import ConversionResult, UnwrapEngine
from auto_unwrap.core.errors import AutoUnwrapError, InvalidItemShape, MalformedInput, TokenizeError
from auto_unwrap.core.lexer import parse_token_tree
from auto_unwrap.core.tokens import render

__version__ = "0.1.0"


def expand(code: str) -> str:
  """
  Rewrites a single item given as source text.

  Args:
      code (str): Source of one item ending in a brace-delimited body.

  Returns:
      str: The rewritten item in canonical token rendering.

  Raises:
      TokenizeError: If the source cannot be tokenized.
      MalformedInput: If a body ends right after a `#`.
      InvalidItemShape: If the item does not end in a brace-delimited body.
  """
  item = parse_token_tree(code)
  return render(auto_unwrap([], item))


__all__ = [
  "expand",
  "auto_unwrap",
  "parse_token_tree",
  "render",
  "RuntimeConfig",
  "UnwrapEngine",
  "ConversionResult",
  "AutoUnwrapError",
  "MalformedInput",
  "InvalidItemShape",
  "TokenizeError",
  "__version__",
]
