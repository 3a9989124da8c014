"""
Tests for the Token Tree Model.

Verifies:
1. Leaf and Group construction helpers.
2. Canonical rendering of leaves and each delimiter kind.
3. Immutability of tokens.
"""

import dataclasses

import pytest

from auto_unwrap.core.tokens import (
  Delimiter,
  Group,
  Leaf,
  TokenKind,
  group,
  ident,
  is_group,
  literal,
  punct,
  render,
)


def test_leaf_helpers():
  assert ident("x") == Leaf(TokenKind.IDENTIFIER, "x")
  assert punct("?") == Leaf(TokenKind.PUNCTUATION, "?")
  assert literal('"s"') == Leaf(TokenKind.LITERAL, '"s"')


def test_is_punct_requires_punctuation_kind():
  assert punct("?").is_punct("?")
  assert not punct("#").is_punct("?")
  # A literal with the same text is not an operator
  assert not literal("?").is_punct("?")


def test_group_helper_builds_tuple_children():
  g = group(Delimiter.PARENTHESIS, ident("a"), punct(","), ident("b"))
  assert isinstance(g.children, tuple)
  assert len(g.children) == 3
  assert is_group(g, Delimiter.PARENTHESIS)
  assert not is_group(g, Delimiter.BRACE)
  assert not is_group(ident("a"), Delimiter.PARENTHESIS)


def test_render_delimiters():
  assert str(group(Delimiter.PARENTHESIS)) == "()"
  assert str(group(Delimiter.PARENTHESIS, ident("x"))) == "(x)"
  assert str(group(Delimiter.BRACKET, ident("skip_auto_unwrap"))) == "[skip_auto_unwrap]"
  assert str(group(Delimiter.BRACE)) == "{}"
  assert str(group(Delimiter.BRACE, ident("x"), punct(";"))) == "{ x ; }"
  assert str(group(Delimiter.NONE, ident("a"), ident("b"))) == "a b"


def test_render_sequence():
  tokens = [ident("return"), ident("x"), punct("."), ident("unwrap"), group(Delimiter.PARENTHESIS), punct(";")]
  assert render(tokens) == "return x . unwrap () ;"


def test_render_skips_empty_invisible_groups():
  assert render([ident("a"), group(Delimiter.NONE), ident("b")]) == "a b"


def test_tokens_are_frozen():
  leaf = ident("x")
  with pytest.raises(dataclasses.FrozenInstanceError):
    leaf.text = "y"

  g = group(Delimiter.BRACE, leaf)
  with pytest.raises(dataclasses.FrozenInstanceError):
    g.children = ()


def test_tokens_compare_structurally():
  a = group(Delimiter.BRACE, ident("x"), group(Delimiter.PARENTHESIS, punct("?")))
  b = Group(Delimiter.BRACE, (ident("x"), Group(Delimiter.PARENTHESIS, (punct("?"),))))
  assert a == b
  assert hash(a) == hash(b)


def nested_parens(depth: int):
  token = ident("x")
  for _ in range(depth):
    token = group(Delimiter.PARENTHESIS, token)
  return token


def test_render_deeply_nested_groups():
  token = nested_parens(500)
  assert render([token]) == "(" * 500 + "x" + ")" * 500
  assert str(group(Delimiter.BRACE, token)).startswith("{ ((")
