"""Replacement of the minErr factory's own declaration.

The factory declaration (`function minErr(module) { ... }`) carries the
development-time message formatting. A production build can swap it for a
smaller implementation supplied as source text. The text is parsed once and
spliced in as a tree, so its contents (regular expressions, escapes) reach the
output exactly as parsed.
"""
from __future__ import annotations
from typing import List

from lark import UnexpectedInput

from jsminerr.semantics.ast import FuncDecl, Program
from jsminerr.semantics.ast_builder import JsSyntaxError
from jsminerr.semantics.visitors import RecursiveVisitor, NodeReplacer


class ReplacementError(Exception):
    """The replacement source is not a single declaration of the factory."""


class DefinitionCollector(RecursiveVisitor):
    """Collect every function declaration named after the factory, in source order.

    The minErr pass calls `consider` from its own traversal; running the
    collector on its own walks the whole program.
    """

    def __init__(self, factory_name: str) -> None:
        super().__init__()
        self.factory_name = factory_name
        self.sites: List[FuncDecl] = []

    def consider(self, node: FuncDecl) -> None:
        if node.name == self.factory_name:
            self.sites.append(node)

    def visit_funcdecl(self, node: FuncDecl) -> None:
        self.consider(node)
        self.generic_visit(node)


def parse_replacement(source: str, factory_name: str) -> FuncDecl:
    """Parse the replacement source into the declaration that will be spliced in.

    Raises:
        ReplacementError: the source does not parse, or it is anything other
            than exactly one function declaration named `factory_name`.
    """
    from jsminerr.internals.parser import parse_to_ast, improve_parse_error

    try:
        program = parse_to_ast(source)
    except UnexpectedInput as e:
        raise ReplacementError(improve_parse_error(e)) from e
    except JsSyntaxError as e:
        raise ReplacementError(str(e)) from e

    if len(program.body) != 1 or not isinstance(program.body[0], FuncDecl):
        raise ReplacementError(
            f"expected exactly one function declaration, found {len(program.body)} statement(s)")
    decl = program.body[0]
    if decl.name != factory_name:
        raise ReplacementError(f"the replacement declares '{decl.name}' instead of '{factory_name}'")
    return decl


def substitute(program: Program, site: FuncDecl, replacement: FuncDecl) -> bool:
    """Put `replacement` where `site` is in `program`. Returns False if `site` was not found."""
    replacer = NodeReplacer(site, replacement)
    replacer.visit(program)
    return replacer.replaced
