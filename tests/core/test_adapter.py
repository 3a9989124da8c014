"""
Tests for the Item Entry Adapter.

Verifies:
1. Signature tokens pass through untouched, even if they contain `?`.
2. Only the trailing brace body is rewritten.
3. InvalidItemShape / MalformedInput preconditions.
"""

import pytest

from auto_unwrap.core.adapter import auto_unwrap, split_item
from auto_unwrap.core.errors import InvalidItemShape, MalformedInput
from auto_unwrap.core.lexer import parse_token_tree
from auto_unwrap.core.tokens import Delimiter, Group, group, ident, punct, render


def test_scenario_return_statement():
  item = parse_token_tree("fn fn_1() -> i32 { return x?; }")
  out = auto_unwrap([], item)

  assert out[:-1] == item[:-1]
  assert out[-1] == group(
    Delimiter.BRACE,
    ident("return"),
    ident("x"),
    punct("."),
    ident("unwrap"),
    group(Delimiter.PARENTHESIS),
    punct(";"),
  )


def test_prefix_is_not_rewritten():
  item = [ident("weird"), punct("?"), group(Delimiter.PARENTHESIS, punct("?")), group(Delimiter.BRACE, punct("?"))]
  out = auto_unwrap([], item)

  assert out[:3] == item[:3]
  assert render(out) == "weird ? (?) { . unwrap () }"


def test_attribute_args_are_ignored():
  item = parse_token_tree("fn f() { a? }")
  assert auto_unwrap(parse_token_tree("anything ? #"), item) == auto_unwrap([], item)


def test_body_only_item():
  out = auto_unwrap([], [group(Delimiter.BRACE)])
  assert out == [Group(Delimiter.BRACE, ())]


def test_split_item():
  item = parse_token_tree("pub fn g(x: u8) { x }")
  prefix, body = split_item(item)
  assert render(prefix) == "pub fn g (x : u8)"
  assert body.delimiter == Delimiter.BRACE


def test_empty_item_raises():
  with pytest.raises(InvalidItemShape):
    auto_unwrap([], [])


def test_parenthesis_body_raises():
  item = parse_token_tree("fn f (x?)")
  with pytest.raises(InvalidItemShape):
    auto_unwrap([], item)


def test_leaf_body_raises():
  with pytest.raises(InvalidItemShape):
    auto_unwrap([], parse_token_tree("fn f() { } ;"))


def test_marker_at_end_of_body_raises():
  item = [ident("fn"), ident("f"), group(Delimiter.PARENTHESIS), group(Delimiter.BRACE, ident("x"), punct("#"))]
  with pytest.raises(MalformedInput):
    auto_unwrap([], item)


def test_trailing_marker_is_invalid_shape():
  # A `#` after the body means the item does not end in a brace group.
  with pytest.raises(InvalidItemShape):
    auto_unwrap([], parse_token_tree("fn f() { } #"))
