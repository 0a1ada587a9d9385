# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from jsminerr.internals.report import Diagnostic, Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL  = "general"
    SYNTAX   = "syntax"
    MINERR   = "minerr"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> Diagnostic:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        return r.error(em.code, text, span)
    return r.warn(em.code, text, span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for an internal error.

    Internal errors indicate a bug in jsminerr itself (an AST shape the
    builder or printer does not know), never a problem in the input program.
    """
    _get(code)
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors - CE0xxx range
_add(ErrorMessage("CE0001", Severity.ERROR,
    "unknown AST node '{node}'",
    Category.INTERNAL, "The builder or printer met a node it does not handle (bug)."))

_add(ErrorMessage("CE0002", Severity.ERROR,
    "collected declaration of '{name}' is not reachable from the program",
    Category.INTERNAL, "Definition substitution lost track of the declaration it collected (bug)."))

# Syntax - CE2xxx range
_add(ErrorMessage("CE2001", Severity.ERROR,
    "syntax error: {detail}",
    Category.SYNTAX, "The source is not part of the supported JavaScript subset."))

_add(ErrorMessage("CE2002", Severity.ERROR,
    "invalid assignment target '{target}'",
    Category.SYNTAX, "Only names, member and index expressions can be assigned to."))

# minErr extraction - CE4xxx / CW4xxx range
_add(ErrorMessage("CE4001", Severity.ERROR,
    "unsupported string expression for minErr {role}: {expr} is not a string literal "
    "or a concatenation of string literals",
    Category.MINERR,
    "minErr codes and message templates must be compile-time constant strings so "
    "they can be moved out of the compiled output. The whole run is aborted."))

_add(ErrorMessage("CW4002", Severity.WARNING,
    "throw new Error(...) is not how minErr errors are created: {callee}(...) "
    "already returns an error object",
    Category.MINERR,
    "The call is left untouched and its template is not extracted."))

_add(ErrorMessage("CW4003", Severity.WARNING,
    "multiple '{name}' definitions found ({count}); none of them is substituted",
    Category.MINERR,
    "The replacement definition is only spliced in when exactly one declaration exists."))

_add(ErrorMessage("CE4004", Severity.ERROR,
    "invalid '{name}' replacement: {detail}",
    Category.MINERR,
    "The replacement source must parse to exactly one function declaration."))
