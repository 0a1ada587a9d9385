"""
Error emission helper for semantic passes.

Binds a Reporter so passes can write

    self.err.emit(er.ERR.CW4002, span, callee="fooMinErr")

instead of threading `self.reporter` through every `er.emit` call.
"""

from typing import Optional
from jsminerr.internals.report import Diagnostic, Span, Reporter
from jsminerr.internals import errors as er


class PassErrorReporter:
    """Thin wrapper for error emission in semantic passes.

    Example:
        >>> class MyPass:
        >>>     def __init__(self, reporter: Reporter):
        >>>         self.reporter = reporter
        >>>         self.err = PassErrorReporter(reporter)
        >>>
        >>>     def check(self, call):
        >>>         self.err.emit(er.ERR.CW4002, call.loc, callee="fooMinErr")
    """

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def emit(self, error_msg: er.ErrorMessage, span: Optional[Span], **kwargs) -> Diagnostic:
        """Emit an error or warning and return the recorded diagnostic.

        Args:
            error_msg: The catalog entry (e.g., er.ERR.CE4001)
            span: Source location span (None when the node has no position)
            **kwargs: Format parameters for the message text
        """
        return er.emit(self.reporter, error_msg, span, **kwargs)
