import io
from dataclasses import dataclass
from typing import Optional

from jsminerr.backend.printer import print_program
from jsminerr.config import MinerrConfig
from jsminerr.internals.parser import parse_to_ast
from jsminerr.internals.report import Reporter
from jsminerr.semantics.passes.minerr import MinerrPass, PassResult


@dataclass
class PassRun:
    result: PassResult
    code: str
    json: str
    reporter: Reporter


def normalize(src: str) -> str:
    """Canonical printed form of a JavaScript snippet."""
    return print_program(parse_to_ast(src))


def run_pass(src: str, replacement: Optional[str] = None, config: Optional[MinerrConfig] = None) -> PassRun:
    reporter = Reporter(source=src)
    out = io.StringIO()
    program = parse_to_ast(src)
    result = MinerrPass(reporter, config, out, replacement=replacement).run(program)
    return PassRun(result, print_program(result.program), out.getvalue(), reporter)
