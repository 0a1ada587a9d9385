"""Extraction table: namespace -> code -> message template."""
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Dict, Iterator, TextIO


@dataclass(frozen=True)
class ExtractedEntry:
    namespace: str
    code: str
    template: str


class ExtractionTable:
    """Ordered two-level table of extracted templates.

    Namespaces and codes keep the position of their first occurrence.
    Recording an existing (namespace, code) pair again replaces the template
    in place.

    The table is written at most once; a second `write` is a bug in the caller.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[str, str]] = {}
        self._written = False

    def record(self, entry: ExtractedEntry) -> None:
        self._entries.setdefault(entry.namespace, {})[entry.code] = entry.template

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def written(self) -> bool:
        return self._written

    def __iter__(self) -> Iterator[ExtractedEntry]:
        for namespace, codes in self._entries.items():
            for code, template in codes.items():
                yield ExtractedEntry(namespace, code, template)

    def __len__(self) -> int:
        return sum(len(codes) for codes in self._entries.values())

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        """Copy of the table as nested plain dicts."""
        return {ns: dict(codes) for ns, codes in self._entries.items()}

    def to_json(self) -> str:
        return json.dumps(self._entries, separators=(",", ":"), ensure_ascii=False)

    def write(self, sink: TextIO) -> None:
        if self._written:
            raise RuntimeError("extraction table has already been written")
        sink.write(self.to_json())
        self._written = True
