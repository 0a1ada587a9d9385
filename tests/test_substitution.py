import pytest

from jsminerr.semantics.ast import FuncDecl, RegExpLit
from jsminerr.semantics.passes.minerr import PassState
from jsminerr.semantics.passes.minerr.substitution import (
    DefinitionCollector, ReplacementError, parse_replacement,
)
from jsminerr.internals.parser import parse_to_ast

from conftest import normalize, run_pass

DEFINITION = "function minErr(module) {\n  console.log('This should be ripped out.'); }"


def test_definition_is_substituted():
    run = run_pass(DEFINITION, replacement="function minErr(module) {\n  return module + 42; }")
    assert run.result.ok
    assert run.code == normalize("function minErr(module) {\n return module + 42; }")
    assert run.reporter.items == []


def test_substitution_preserves_regular_expressions():
    replacement = "function minErr(module) {\nreturn new RegExp(module + '\\\\d+'); }"
    run = run_pass(DEFINITION, replacement=replacement)
    assert run.code == normalize("function minErr(module) {\n return new RegExp(module + '\\\\d+'); }")


def test_substitution_keeps_regex_literal_nodes():
    replacement = "function minErr(module) { return /^(\\d+)\\/x/g.test(module); }"
    run = run_pass(DEFINITION, replacement=replacement)
    decl = run.result.program.body[0]
    assert isinstance(decl, FuncDecl)
    assert "/^(\\d+)\\/x/g" in run.code


def test_nested_definition_is_substituted_in_place():
    src = "(function () {\n  function minErr(module) { return module; }\n  minErr('a')('b', 'c');\n})();"
    run = run_pass(src, replacement="function minErr(m) { return m + 1; }")
    assert run.code == normalize(
        "(function () {\n  function minErr(m) { return m + 1; }\n  minErr('a')('b');\n})();"
    )
    assert run.json == '{"a":{"b":"c"}}'


def test_definition_without_replacement_is_left_alone():
    run = run_pass(DEFINITION)
    assert run.code == normalize(DEFINITION)
    assert run.reporter.items == []


def test_multiple_definitions_warn_once_and_substitute_nothing():
    src = (
        "(function () {\n"
        "  function minErr(module) {\n"
        "    return module + 42; }\n"
        "})();\n"
        "(function () {\n"
        "  function minErr(module) {\n"
        "    return module + 9001; }\n"
        "})();"
    )
    for replacement in (None, "function minErr(module) { return 0; }"):
        run = run_pass(src, replacement=replacement)
        assert run.result.ok
        assert run.code == normalize(src)
        assert run.reporter.codes() == ["CW4003"]
        assert run.reporter.warnings[0].span.line == 6


@pytest.mark.parametrize("replacement", [
    "var minErr = 1;",
    "function minErr(a) {} function other() {}",
    "function other(module) { return module; }",
    "function minErr(module) { return module +; }",
])
def test_invalid_replacement_aborts(replacement):
    run = run_pass(DEFINITION, replacement=replacement)
    assert run.result.state == PassState.ABORTED
    assert run.reporter.codes() == ["CE4004"]
    assert run.json == ""


def test_parse_replacement_returns_the_declaration():
    decl = parse_replacement("function minErr(module) { return /a+/i; }", "minErr")
    assert decl.name == "minErr"
    assert [p.name for p in decl.params] == ["module"]
    ret = decl.body.stmts[0]
    assert isinstance(ret.value, RegExpLit)
    assert (ret.value.pattern, ret.value.flags) == ("a+", "i")


def test_parse_replacement_rejects_expressions():
    with pytest.raises(ReplacementError):
        parse_replacement("minErr;", "minErr")


def test_definition_collector_on_its_own():
    program = parse_to_ast(
        "function minErr() {}\nfunction f() { function minErr() {} }\nvar minErr2 = function minErr() {};"
    )
    collector = DefinitionCollector("minErr")
    collector.visit(program)
    assert len(collector.sites) == 2
    assert collector.sites[0] is program.body[0]


def test_invalid_replacement_is_reported_at_the_declaration():
    run = run_pass("x;\n" + DEFINITION, replacement="var minErr = 1;")
    span = run.result.error.span
    assert span is not None
    assert (span.line, span.col) == (2, 1)


@pytest.mark.parametrize("replacement", ["var minErr = 1;", "function minErr(m) { return m +; }"])
def test_replacement_is_ignored_without_a_definition(replacement):
    run = run_pass("aMinErr('x', 'm');", replacement=replacement)
    assert run.result.state == PassState.COMPLETED
    assert run.code == normalize("aMinErr('x');")
    assert run.json == '{"a":{"x":"m"}}'
    assert run.reporter.items == []


@pytest.mark.parametrize("replacement", ["var minErr = 1;", "function minErr(m) { return m +; }"])
def test_replacement_is_not_parsed_with_multiple_definitions(replacement):
    src = (
        "(function () { function minErr(m) { return m; } })();\n"
        "(function () { function minErr(m) { return m + 1; } })();\n"
        "aMinErr('x', 'm');"
    )
    run = run_pass(src, replacement=replacement)
    assert run.result.state == PassState.COMPLETED
    assert run.reporter.codes() == ["CW4003"]
    assert run.json == '{"a":{"x":"m"}}'
