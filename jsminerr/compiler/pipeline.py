"""Parse, extract, print."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from jsminerr.backend.printer import print_program
from jsminerr.config import MinerrConfig
from jsminerr.internals.parse_errors import handle_parse_exception
from jsminerr.internals.parser import parse_to_ast
from jsminerr.internals.report import Reporter
from jsminerr.semantics.passes.minerr import MinerrPass, PassResult


@dataclass
class CompileOutcome:
    """Result of one run over a source text.

    `code` is the rewritten JavaScript, or None when parsing failed or the
    pass aborted. `result` is None when parsing failed.
    """
    code: Optional[str]
    result: Optional[PassResult]
    reporter: Reporter


def run_minerr(source: str, config: Optional[MinerrConfig] = None,
               output: Optional[TextIO] = None, filename: str = "<input>") -> CompileOutcome:
    """Run the minErr pass over JavaScript source text.

    Args:
        source: JavaScript source.
        config: Pass configuration (defaults when None).
        output: Stream that receives the extracted templates as JSON.
            Written only when the pass completes.
        filename: Name used in diagnostics.
    """
    reporter = Reporter(source=source, filename=filename)
    try:
        program = parse_to_ast(source)
    except Exception as e:
        if handle_parse_exception(e, reporter):
            return CompileOutcome(None, None, reporter)
        raise

    result = MinerrPass(reporter, config, output).run(program)
    if not result.ok:
        return CompileOutcome(None, result, reporter)
    return CompileOutcome(print_program(result.program), result, reporter)


def exit_status(reporter: Reporter) -> int:
    """Exit code (0=success, 1=warnings, 2=errors)."""
    if reporter.has_errors:
        return 2
    if reporter.has_warnings:
        return 1
    return 0
