"""minErr template extraction.

Public API:
- MinerrPass: the pass itself (semantics.passes.minerr.extract)
- PassResult / PassState: outcome of one run
- ExtractionTable / ExtractedEntry: the extracted templates
- match_call / DirectForm / CurriedForm: call-site recognition
"""
from jsminerr.semantics.passes.minerr.extract import MinerrPass, PassResult, PassState
from jsminerr.semantics.passes.minerr.matcher import CurriedForm, DirectForm, MinerrCall, match_call
from jsminerr.semantics.passes.minerr.registry import ExtractedEntry, ExtractionTable

__all__ = [
    "MinerrPass", "PassResult", "PassState",
    "CurriedForm", "DirectForm", "MinerrCall", "match_call",
    "ExtractedEntry", "ExtractionTable",
]
