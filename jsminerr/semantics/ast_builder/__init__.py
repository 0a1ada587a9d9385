"""
AST Builder module for jsminerr.

Exports:
    ASTBuilder: Main class for building typed AST from Lark parse trees
    Exceptions: Custom exceptions for AST building errors
"""
# Main ASTBuilder class
from jsminerr.semantics.ast_builder.builder import ASTBuilder

# Exception classes
from jsminerr.semantics.ast_builder.exceptions import (
    JsSyntaxError,
    InvalidAssignmentTarget,
)

__all__ = [
    'ASTBuilder',
    'JsSyntaxError',
    'InvalidAssignmentTarget',
]
