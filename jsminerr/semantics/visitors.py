"""
AST Visitor Pattern implementation for jsminerr.

This module provides base visitor classes for traversing and processing AST
nodes using the Visitor Pattern, so passes do not need long isinstance chains.

Usage:
    1. Subclass NodeVisitor[T] for visitors that return values
    2. Subclass RecursiveVisitor for analysis passes (void return)
    3. Subclass NodeTransformer for AST rewrites

Example:
    class CallCounter(RecursiveVisitor):
        def __init__(self):
            super().__init__()
            self.count = 0

        def visit_call(self, node: Call) -> None:
            self.count += 1
            self.generic_visit(node)  # Continue into callee and arguments

    counter = CallCounter()
    counter.visit(program)

Children are discovered from dataclass fields, so a new node type only has to
be declared in semantics.ast to be walked.
"""
from __future__ import annotations
from abc import ABC
from dataclasses import fields
from typing import Iterator, List, Optional, Tuple, TypeVar, Generic

from jsminerr.semantics.ast import Node

T = TypeVar('T')


def iter_fields(node: Node) -> Iterator[Tuple[str, object]]:
    """Yield (name, value) for every dataclass field except the span."""
    for f in fields(node):
        if f.name == "loc" or f.name.endswith("_span"):
            continue
        yield f.name, getattr(node, f.name)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield direct child nodes in source order."""
    for _, value in iter_fields(node):
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


class NodeVisitor(ABC, Generic[T]):
    """
    Abstract base class for AST node visitors.

    Uses dynamic method dispatch: a node of class `Call` is routed to
    `visit_call`, falling back to `generic_visit`.
    """

    def visit(self, node: Node) -> T:
        method_name = f'visit_{type(node).__name__.lower()}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> T:
        """
        Default visitor that raises an error.
        Subclasses should either implement specific visit_* methods
        or override this to provide default behavior.
        """
        raise NotImplementedError(
            f"Visitor {self.__class__.__name__} doesn't handle {type(node).__name__}"
        )


class RecursiveVisitor(NodeVisitor[None]):
    """
    Base class for visitors that walk the entire AST without changing it.

    `parents` holds the chain of enclosing nodes of the node being visited,
    innermost last.
    """

    def __init__(self) -> None:
        self.parents: List[Node] = []

    def generic_visit(self, node: Node) -> None:
        self.parents.append(node)
        try:
            for child in iter_child_nodes(node):
                self.visit(child)
        finally:
            self.parents.pop()


class NodeTransformer(NodeVisitor[Node]):
    """
    Base class for visitors that rewrite the AST.

    `generic_visit` visits every child first and stores whatever the child's
    visit method returned back into the same field or list slot, then returns
    the node itself. A visit_* method that wants post-order behaviour calls
    `self.generic_visit(node)` first and then returns either the node or a
    replacement for it.

    While the children of a node are visited, that node is on top of
    `parents`.
    """

    def __init__(self) -> None:
        self.parents: List[Node] = []

    @property
    def parent(self) -> Optional[Node]:
        return self.parents[-1] if self.parents else None

    def generic_visit(self, node: Node) -> Node:
        self.parents.append(node)
        try:
            for name, value in iter_fields(node):
                if isinstance(value, Node):
                    new_value = self.visit(value)
                    if new_value is not value:
                        setattr(node, name, new_value)
                elif isinstance(value, list):
                    for i, item in enumerate(value):
                        if isinstance(item, Node):
                            new_item = self.visit(item)
                            if new_item is not item:
                                value[i] = new_item
        finally:
            self.parents.pop()
        return node


class NodeReplacer(NodeTransformer):
    """Swap one node, found by identity, for another."""

    def __init__(self, old: Node, new: Node) -> None:
        super().__init__()
        self.old = old
        self.new = new
        self.replaced = False

    def visit(self, node: Node) -> Node:
        if node is self.old:
            self.replaced = True
            return self.new
        return super().visit(node)
