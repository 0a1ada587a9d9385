import json

import pytest

from jsminerr.semantics.passes.minerr import PassState

from conftest import normalize, run_pass


def test_extracts_template_and_removes_message():
    run = run_pass("testMinErr('test1', 'This is a {0}', test);")
    assert run.result.ok
    assert run.code == normalize("testMinErr('test1', test);")
    assert run.json == '{"test":{"test1":"This is a {0}"}}'
    assert run.reporter.items == []


def test_direct_and_curried_forms_share_a_namespace():
    run = run_pass(
        "testMinErr('test1', 'This is a {0}', test);\n"
        "minErr('test')('test2', 'The answer is {0}', 42);"
    )
    assert run.code == normalize(
        "testMinErr('test1', test);\n"
        "minErr('test')('test2', 42);"
    )
    assert run.json == '{"test":{"test1":"This is a {0}","test2":"The answer is {0}"}}'


def test_multiple_namespaces_keep_first_seen_order():
    run = run_pass(
        "fooMinErr('one', 'Too many {0}', 'hippies');\n"
        "barMinErr('one', 'Not enough {0}', 'mojo');\n"
        "fooMinErr('three', 'The answer is {0}', 42);"
    )
    assert run.code == normalize(
        "fooMinErr('one', 'hippies');\n"
        "barMinErr('one', 'mojo');\n"
        "fooMinErr('three', 42);"
    )
    assert run.json == ('{"foo":{"one":"Too many {0}","three":"The answer is {0}"},'
                        '"bar":{"one":"Not enough {0}"}}')


def test_two_namespaces_example():
    run = run_pass("testMinErr('t1','Msg {0}',x); barMinErr('t2','Other',y);")
    assert run.code == normalize("testMinErr('t1',x); barMinErr('t2',y);")
    assert run.json == '{"test":{"t1":"Msg {0}"},"bar":{"t2":"Other"}}'


def test_repeated_code_overwrites_template_in_place():
    run = run_pass(
        "aMinErr('x', 'first');\n"
        "aMinErr('y', 'other');\n"
        "aMinErr('x', 'second');"
    )
    assert json.loads(run.json) == {"a": {"x": "second", "y": "other"}}
    assert run.json == '{"a":{"x":"second","y":"other"}}'


def test_throw_new_error_is_left_alone_with_one_warning():
    src = "throw new Error(testMinErr('test1', 'This is a {0}', test));"
    run = run_pass(src)
    assert run.result.ok
    assert run.code == normalize(src)
    assert run.reporter.codes() == ["CW4002"]
    assert run.json == "{}"


def test_throw_error_call_without_new_is_also_misuse():
    src = "throw Error(testMinErr('test1', 'This is a {0}', test));"
    run = run_pass(src)
    assert run.code == normalize(src)
    assert run.reporter.codes() == ["CW4002"]


def test_minerr_result_thrown_directly_is_extracted():
    run = run_pass("throw testMinErr('t', 'Bad {0}', x);")
    assert run.code == normalize("throw testMinErr('t', x);")
    assert run.reporter.items == []


@pytest.mark.parametrize("src", [
    "for (var i = 0; i < baz; i++) { console.log('Hi there!'); }\n42 - foo;",
    "(function () {\nvar fooMinErr = minErr('foo');\nreturn fooMinErr; })();",
    "MinErr('code', 'no namespace');",
    "fooMinErr('only code');",
    "minErr(ns)('code', 'namespace is not constant');",
    "obj.fooMinErr('code', 'not a plain identifier');",
])
def test_code_without_minerr_calls_is_unchanged(src):
    run = run_pass(src)
    assert run.result.ok
    assert run.code == normalize(src)
    assert run.result.table.is_empty
    assert run.json == "{}"
    assert run.reporter.items == []


def test_extracts_from_nested_call_expressions():
    run = run_pass(
        "function doIt (testMinErr) {\n"
        "  (function (foo) {\n"
        "    testMinErr('nest', 'This {0} should be extracted', foo);\n"
        "  })('test'); }"
    )
    assert run.code == normalize(
        "function doIt (testMinErr) {\n"
        "(function (foo) {\n"
        "  testMinErr('nest', foo);\n"
        "})('test'); }"
    )
    assert run.json == '{"test":{"nest":"This {0} should be extracted"}}'


def test_inner_call_is_recorded_before_outer_call():
    run = run_pass("outerMinErr('o', 'outer', innerMinErr('i', 'inner'));")
    assert run.code == normalize("outerMinErr('o', innerMinErr('i'));")
    assert run.json == '{"inner":{"i":"inner"},"outer":{"o":"outer"}}'


def test_concatenated_message_is_folded():
    run = run_pass("testMinErr('test', 'This is' + ' a very long ' + 'string.');")
    assert run.code == normalize("testMinErr('test');")
    assert run.json == '{"test":{"test":"This is a very long string."}}'


def test_concatenated_code_is_folded_but_kept_at_call_site():
    run = run_pass("testMinErr('test' + 'foo', 'This is a {0}', test);")
    assert run.code == normalize("testMinErr('test' + 'foo', test);")
    assert run.json == '{"test":{"testfoo":"This is a {0}"}}'


def test_concatenated_curried_namespace_is_folded():
    run = run_pass("minErr('te' + 'st')('c', 'm');")
    assert run.code == normalize("minErr('te' + 'st')('c');")
    assert run.json == '{"test":{"c":"m"}}'


@pytest.mark.parametrize("src,role", [
    ("(function (foo) {\n  testMinErr('test', foo, 42);\n})('O{0}ps!');", "message"),
    ("(function (foo) {\n  testMinErr(foo, 'The answer is {0}', 42);\n})('oops');", "code"),
    ("testMinErr('a', 'Count: ' + 42);", "message"),
])
def test_non_constant_argument_aborts(src, role):
    run = run_pass(src)
    assert run.result.state == PassState.ABORTED
    assert not run.result.ok
    assert run.json == ""
    assert run.reporter.codes() == ["CE4001"]
    assert run.result.error is run.reporter.errors[0]
    assert f"minErr {role}" in run.result.error.message


def test_abort_discards_valid_calls_elsewhere():
    run = run_pass(
        "fooMinErr('ok', 'Fine');\n"
        "fooMinErr('bad', message);"
    )
    assert run.result.state == PassState.ABORTED
    assert run.json == ""


def test_unsupported_expression_diagnostic_points_at_argument():
    run = run_pass("x;\ntestMinErr('a', msg);")
    span = run.result.error.span
    assert span is not None
    assert (span.line, span.col) == (2, 17)


def test_rerunning_on_rewritten_output_changes_nothing():
    first = run_pass("aMinErr('one', 'First');\nminErr('b')('two', 'Second');")
    second = run_pass(first.code)
    assert second.result.ok
    assert second.code == first.code
    assert second.json == "{}"


def test_interleaved_namespaces():
    run = run_pass(
        "aMinErr('2', 'a2'); bMinErr('1', 'b1'); aMinErr('1', 'a1'); bMinErr('2', 'b2');"
    )
    assert run.json == '{"a":{"2":"a2","1":"a1"},"b":{"1":"b1","2":"b2"}}'


def test_custom_factory_and_suffix():
    from jsminerr.config import MinerrConfig
    config = MinerrConfig(factory_name="makeErr", suffix="Err")
    run = run_pass("fooErr('c', 'm', x); makeErr('bar')('d', 'n');", config=config)
    assert run.code == normalize("fooErr('c', x); makeErr('bar')('d');")
    assert run.json == '{"foo":{"c":"m"},"bar":{"d":"n"}}'


def test_pass_instance_runs_once():
    from jsminerr.internals.parser import parse_to_ast
    from jsminerr.internals.report import Reporter
    from jsminerr.semantics.passes.minerr import MinerrPass

    p = MinerrPass(Reporter())
    p.run(parse_to_ast("x;"))
    with pytest.raises(RuntimeError):
        p.run(parse_to_ast("x;"))


def test_rerunning_with_pass_through_arguments_reads_them_as_messages():
    first = run_pass("testMinErr('t1', 'Msg {0}', x);")
    assert first.code == normalize("testMinErr('t1', x);")
    second = run_pass(first.code)
    assert second.result.state == PassState.ABORTED
    assert second.reporter.codes() == ["CE4001"]
    assert second.json == ""


def test_surrogate_pair_escape_is_one_code_point():
    run = run_pass("aMinErr('x', 'smile \\uD83D\\uDE00');")
    assert run.result.table.as_dict() == {"a": {"x": "smile \U0001F600"}}
    assert run.json.encode("utf-8") == '{"a":{"x":"smile \U0001F600"}}'.encode("utf-8")


def test_surrogate_pair_split_across_concatenation():
    run = run_pass("aMinErr('x', 'smile \\uD83D' + '\\uDE00');")
    assert run.result.table.as_dict() == {"a": {"x": "smile \U0001F600"}}
