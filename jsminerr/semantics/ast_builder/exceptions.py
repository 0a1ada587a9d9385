"""Custom exceptions for AST building errors."""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from jsminerr.internals.report import Span


class JsSyntaxError(Exception):
    """The parse tree matched the grammar but is not valid JavaScript."""
    def __init__(self, message: str, span: Optional['Span'] = None):
        super().__init__(message)
        self.span = span


class InvalidAssignmentTarget(JsSyntaxError):
    """Assignment or ++/-- applied to something that is not a name, member or index."""
    def __init__(self, target: str, span: Optional['Span'] = None):
        super().__init__(f"invalid assignment target '{target}'", span)
        self.target = target
