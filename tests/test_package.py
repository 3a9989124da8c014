"""
End-to-end tests for the package facade (`auto_unwrap.expand`).
"""

import pytest

import auto_unwrap
from auto_unwrap import InvalidItemShape, MalformedInput, TokenizeError, expand


def test_expand_return():
  assert expand("fn fn_1() -> i32 { return x?; }") == "fn fn_1 () -> i32 { return x . unwrap () ; }"


def test_expand_ignores_question_mark_in_string():
  code = """
  fn fn_1() -> i32 {
      let s = "does it detect this question mark? (no)";
      println!("{}", s);
      let x: Result<i32, ()> = Ok(23);
      return x?; // gets replaced with x.unwrap();
  }
  """
  out = expand(code)
  assert '"does it detect this question mark? (no)"' in out
  assert "return x . unwrap () ;" in out
  assert "gets replaced" not in out


def test_expand_skip_closure():
  code = """
  fn fn_2() {
      #[skip_auto_unwrap]
      let closure = || -> Result<u32, f32> {
          let err: Result<u32, f32> = Err(2.0);
          assert_eq!(err?, err.unwrap());
          Ok(2)
      };
      assert_eq!(closure(), Err(2.0));
      let v = maybe()?;
  }
  """
  out = expand(code)
  assert "assert_eq ! (err ? , err . unwrap ())" in out
  assert "let v = maybe () . unwrap () ;" in out
  assert "skip_auto_unwrap" not in out


def test_expand_keeps_signature_and_outer_attributes():
  out = expand("#[inline] pub fn f<'a>(x: &'a str) -> Option<&'a str> { Some(x)? }")
  assert out.startswith("# [inline] pub fn f < 'a > (x : & 'a str) -> Option < & 'a str >")
  assert out.endswith("{ Some (x) . unwrap () }")


def test_expand_idempotent():
  once = expand("fn f() { a?.b()?; }")
  assert expand(once) == once


def test_expand_unbalanced_source():
  with pytest.raises(TokenizeError):
    expand("fn f() { x")


def test_expand_structural_errors():
  with pytest.raises(MalformedInput):
    expand("fn f() { x # }")
  with pytest.raises(InvalidItemShape):
    expand("fn f(x?)")


def test_public_api():
  assert auto_unwrap.__version__
  for name in auto_unwrap.__all__:
    assert hasattr(auto_unwrap, name)


def test_expand_deeply_nested_body():
  depth = 500
  out = expand("fn f() {" + "(" * depth + "x?" + ")" * depth + "}")
  assert out == "fn f () { " + "(" * depth + "x . unwrap ()" + ")" * depth + " }"
