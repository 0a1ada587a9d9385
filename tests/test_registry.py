import io

import pytest

from jsminerr.semantics.passes.minerr.registry import ExtractedEntry, ExtractionTable


def test_empty_table():
    table = ExtractionTable()
    assert table.is_empty
    assert len(table) == 0
    assert table.to_json() == "{}"


def test_entries_keep_first_seen_order():
    table = ExtractionTable()
    table.record(ExtractedEntry("b", "2", "b2"))
    table.record(ExtractedEntry("a", "1", "a1"))
    table.record(ExtractedEntry("b", "1", "b1"))
    table.record(ExtractedEntry("b", "2", "b2 again"))
    assert list(table) == [
        ExtractedEntry("b", "2", "b2 again"),
        ExtractedEntry("b", "1", "b1"),
        ExtractedEntry("a", "1", "a1"),
    ]
    assert table.as_dict() == {"b": {"2": "b2 again", "1": "b1"}, "a": {"1": "a1"}}
    assert len(table) == 3


def test_json_is_compact_and_keeps_unicode():
    table = ExtractionTable()
    table.record(ExtractedEntry("ns", "c", 'Fehler "{0}" – ü'))
    assert table.to_json() == '{"ns":{"c":"Fehler \\"{0}\\" – ü"}}'


def test_write_happens_once():
    table = ExtractionTable()
    table.record(ExtractedEntry("ns", "c", "m"))
    out = io.StringIO()
    table.write(out)
    assert out.getvalue() == '{"ns":{"c":"m"}}'
    assert table.written
    with pytest.raises(RuntimeError):
        table.write(out)


def test_entries_are_immutable():
    entry = ExtractedEntry("ns", "c", "m")
    with pytest.raises(AttributeError):
        entry.code = "d"


def test_astral_characters_are_written_as_utf8():
    table = ExtractionTable()
    table.record(ExtractedEntry("ns", "c", "\U0001F600"))
    out = io.StringIO()
    table.write(out)
    assert out.getvalue().encode("utf-8") == b'{"ns":{"c":"\xf0\x9f\x98\x80"}}'
