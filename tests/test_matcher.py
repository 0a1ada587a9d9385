import pytest

from jsminerr.internals.parser import parse_to_ast
from jsminerr.semantics.ast import Call, Name
from jsminerr.semantics.passes.const_eval import fold_string
from jsminerr.semantics.passes.minerr.matcher import CurriedForm, DirectForm, match_call


def expr_of(src: str):
    return parse_to_ast(src + ";").body[0].expr


def match(src: str):
    call = expr_of(src)
    assert isinstance(call, Call)
    return match_call(call, "minErr", "MinErr")


@pytest.mark.parametrize("src", ["'a' + 'b' + 'c'", "'ab' + 'c'", "'abc'", "'a' + ('b' + 'c')"])
def test_folding_is_associative(src):
    assert fold_string(expr_of(src)) == "abc"


@pytest.mark.parametrize("src", ["x", "'a' + x", "1 + 'a'", "'a' - 'b'", "f('a')", "42"])
def test_non_constant_expressions_do_not_fold(src):
    assert fold_string(expr_of(src)) is None


def test_direct_form():
    m = match("fooMinErr('c', 'm', a, b)")
    assert isinstance(m, DirectForm)
    assert m.namespace == "foo"
    assert fold_string(m.code) == "c"
    assert fold_string(m.message) == "m"
    assert [t.id for t in m.trailing] == ["a", "b"]


def test_direct_form_keeps_namespace_casing():
    assert match("$HttpMinErr('c', 'm')").namespace == "$Http"


def test_curried_form():
    m = match("minErr('ng')('c', 'm')")
    assert isinstance(m, CurriedForm)
    assert m.namespace == "ng"
    assert m.trailing == []


@pytest.mark.parametrize("src", [
    "MinErr('c', 'm')",
    "fooMinErr('c')",
    "fooMinErr()",
    "foominerr('c', 'm')",
    "minErr('ng')",
    "minErr('ng')('c')",
    "minErr(ns)('c', 'm')",
    "minErr('a', 'b')('c', 'm')",
    "other('ng')('c', 'm')",
    "a.fooMinErr('c', 'm')",
])
def test_not_a_match(src):
    assert match(src) is None


def test_callee_node_is_kept():
    call = expr_of("fooMinErr('c', 'm')")
    m = match_call(call, "minErr", "MinErr")
    assert m.call is call
    assert isinstance(call.callee, Name)
