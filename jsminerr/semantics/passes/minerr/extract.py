# semantics/passes/minerr/extract.py
"""minErr extraction pass.

Walks the program once, post-order, so the calls nested inside another
call's arguments are handled before the call that contains them. For every
minErr call:

1. The code and message arguments must fold to constant strings. If either
   does not, CE4001 is reported and the whole run is aborted.
2. A call thrown through `throw new Error(...)` is reported (CW4002) and left
   as written.
3. Otherwise the template is recorded in the extraction table and the call is
   replaced by the same call without its message argument.

Factory declarations are collected during the same walk and substituted
afterwards (CW4003 when there is more than one). The replacement text is
only parsed when there is exactly one declaration to replace.

The table is written to the output only when the run completes. An aborted
run never writes anything.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from jsminerr.backend.printer import print_node
from jsminerr.config import MinerrConfig
from jsminerr.internals import errors as er
from jsminerr.internals.report import Diagnostic, Reporter
from jsminerr.semantics.ast import Call, Expr, FuncDecl, Node, Program
from jsminerr.semantics.error_reporter import PassErrorReporter
from jsminerr.semantics.passes.const_eval import fold_string
from jsminerr.semantics.passes.minerr.matcher import match_call
from jsminerr.semantics.passes.minerr.registry import ExtractedEntry, ExtractionTable
from jsminerr.semantics.passes.minerr.rewriter import strip_message, is_thrown_error_argument
from jsminerr.semantics.passes.minerr.substitution import (
    DefinitionCollector, ReplacementError, parse_replacement, substitute,
)
from jsminerr.semantics.visitors import NodeTransformer


class PassState(str, Enum):
    RUNNING = "running"
    ABORTED = "aborted"
    COMPLETED = "completed"


@dataclass
class PassResult:
    state: PassState
    program: Program
    table: ExtractionTable
    error: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.state == PassState.COMPLETED


class MinerrAbort(Exception):
    """Raised inside the walk on a fatal diagnostic; caught by MinerrPass.run."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


class MinerrPass(NodeTransformer):
    def __init__(self, reporter: Reporter, config: Optional[MinerrConfig] = None,
                 output: Optional[TextIO] = None, replacement: Optional[str] = None) -> None:
        super().__init__()
        self.reporter = reporter
        self.err = PassErrorReporter(reporter)
        self.config = config or MinerrConfig()
        self.output = output
        self.replacement = replacement if replacement is not None else self.config.replacement_source()
        self.table = ExtractionTable()
        self.definitions = DefinitionCollector(self.config.factory_name)
        self.state = PassState.RUNNING

    def run(self, program: Program) -> PassResult:
        """Rewrite `program` in place and write the table to the output on success."""
        if self.state != PassState.RUNNING:
            raise RuntimeError("a MinerrPass instance runs only once")
        try:
            self.visit(program)
            self._substitute_definition(program)
        except MinerrAbort as abort:
            self.state = PassState.ABORTED
            return PassResult(self.state, program, self.table, abort.diagnostic)

        self.state = PassState.COMPLETED
        if self.output is not None:
            self.table.write(self.output)
        return PassResult(self.state, program, self.table)

    def _fatal(self, error_msg: er.ErrorMessage, node: Optional[Node], **kwargs) -> None:
        raise MinerrAbort(self.err.emit(error_msg, node.loc if node is not None else None, **kwargs))

    # === Walk ===

    def visit_funcdecl(self, node: FuncDecl) -> Node:
        self.definitions.consider(node)
        return self.generic_visit(node)

    def visit_call(self, node: Call) -> Node:
        self.generic_visit(node)

        match = match_call(node, self.config.factory_name, self.config.suffix)
        if match is None:
            return node

        code = self._fold(match.code, "code")
        template = self._fold(match.message, "message")

        if is_thrown_error_argument(node, self.parents):
            self.err.emit(er.ERR.CW4002, node.loc, callee=print_node(node.callee))
            return node

        self.table.record(ExtractedEntry(match.namespace, code, template))
        return strip_message(match)

    def _fold(self, expr: Expr, role: str) -> str:
        value = fold_string(expr)
        if value is None:
            self._fatal(er.ERR.CE4001, expr, role=role, expr=print_node(expr))
        return value

    # === Factory declaration ===

    def _substitute_definition(self, program: Program) -> None:
        """Swap the factory declaration for the replacement.

        Only a single unambiguous declaration is replaced, and the replacement
        text is parsed only then. With no declaration nothing happens; with
        several, CW4003 is reported and none is touched.
        """
        sites = self.definitions.sites
        if len(sites) > 1:
            self.err.emit(er.ERR.CW4003, sites[1].loc, name=self.config.factory_name, count=len(sites))
            return
        if len(sites) == 0 or self.replacement is None:
            return

        site = sites[0]
        try:
            replacement = parse_replacement(self.replacement, self.config.factory_name)
        except ReplacementError as e:
            self._fatal(er.ERR.CE4004, site, name=self.config.factory_name, detail=str(e))
        if not substitute(program, site, replacement):
            er.raise_internal_error("CE0002", name=site.name)
