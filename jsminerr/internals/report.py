from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Any

from lark import Token

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None

def span_of(t: Any) -> Optional[Span]:
    """Source span of a Lark tree (via its meta) or token."""
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", True):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        if line is not None and col is not None:
            end_line = getattr(t, "end_line", None)
            end_col = getattr(t, "end_column", None)
            return Span(line, col, end_line or line, end_col or col)
    return None


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]) -> Diagnostic:
        d = Diagnostic("error", code, msg, span, filename=self.filename)
        self.items.append(d)
        return d

    def warn(self, code: str, msg: str, span: Optional[Span]) -> Diagnostic:
        d = Diagnostic("warning", code, msg, span, filename=self.filename)
        self.items.append(d)
        return d

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == "error"]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == "warning"]

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/caret
        use_unicode → draw the snippet with │ / ╰ guides instead of ASCII
        """
        out: List[str] = []
        src_lines = self.source.splitlines() if self.source else None

        for d in self.items:
            filename = d.filename or self.filename
            loc = f"{filename}:{d.span.line}:{d.span.col}" if d.span else filename
            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                tint = C.RED if d.kind == "error" else C.YELLOW
                head = (f"{C.CYAN}{loc}{C.RESET}: {C.BOLD}{tint}{d.kind}{C.RESET} "
                        f"[{C.DIM}{d.code}{C.RESET}]: {message}")
            else:
                tint = ""
                head = f"{loc}: {d.kind} [{d.code}]: {message}"
            out.append(head)

            if d.span is None or src_lines is None:
                continue
            line_idx = d.span.line - 1
            if not 0 <= line_idx < len(src_lines):
                continue
            line_text = src_lines[line_idx]
            start = max(1, d.span.col)
            # Underline the rest of the line when the span continues past it
            end = d.span.end_col if d.span.end_line == d.span.line else len(line_text) + 1
            width = max(1, end - start)

            bar, corner, mark = ("│", "╰", "┯") if use_unicode else ("|", "`", "^")
            caret = " " * (start - 1) + mark + ("~" * (width - 1) if width > 1 else "")
            if use_color:
                out.append(f"  {C.GRAY}{bar}{C.RESET} {line_text}")
                out.append(f"  {C.GRAY}{corner}{C.RESET} {tint}{caret}{C.RESET}")
            else:
                out.append(f"  {bar} {line_text}")
                out.append(f"  {corner} {caret}")

        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        Unicode guides are auto-enabled for TTY unless NO_UNICODE or TERM=dumb.
        """
        import os, sys
        stream = stream or sys.stderr
        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"

        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)
        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
