"""
Tests for the DHF model: parsing, wire round-trip and format errors.
"""

import pytest

from timetravel.core import Action, Document, DocumentFormatError, HistoryEntry, Segment, SegmentType

from .fixtures import C1, C3, entry, make_document, scenario_document


def test_segment_from_dict_with_history():
    seg = Segment.from_dict({
        "type": "modified",
        "text": "B",
        "history": [entry(C1, "added", text="A"), entry(C3, "modified", after="B")],
    })

    assert seg.type == SegmentType.MODIFIED
    assert seg.type == "modified"
    assert seg.has_history
    assert [h.action for h in seg.history] == [Action.ADDED, Action.MODIFIED]
    assert seg.change is None


def test_unknown_segment_type_rejected():
    with pytest.raises(DocumentFormatError, match="segment type"):
        Segment.from_dict({"type": "moved", "text": "x"})


def test_unknown_action_rejected():
    with pytest.raises(DocumentFormatError, match="action"):
        HistoryEntry.from_dict({"commit": C1, "action": "renamed"})


def test_document_requires_commits_and_content():
    with pytest.raises(DocumentFormatError, match="commits"):
        Document.from_dict({"content": []})
    with pytest.raises(DocumentFormatError, match="content"):
        Document.from_dict({"commits": []})
    with pytest.raises(DocumentFormatError):
        Document.from_dict(["not", "an", "object"])


def test_to_dict_omits_absent_optionals():
    doc = scenario_document()
    data = doc.to_dict()

    assert "document" not in data
    assert "summary" not in data
    assert data["content"][0] == {"type": "unchanged", "text": "# Title\n"}
    assert data["content"][2] == {"type": "added", "text": "new line", "change": {"commit": "c2"}}


def test_document_round_trip_preserves_value():
    doc = scenario_document()

    assert Document.from_dict(doc.to_dict()) == doc


def test_resolved_text_prefers_after_then_text():
    assert HistoryEntry(commit=C1, action=Action.MODIFIED, after="a", text="t").resolved_text() == "a"
    assert HistoryEntry(commit=C1, action=Action.ADDED, text="t").resolved_text() == "t"
    assert HistoryEntry(commit=C1, action=Action.ADDED, after="", text="t").resolved_text() == ""
    assert HistoryEntry(commit=C1, action=Action.ADDED).resolved_text() is None


def test_commit_index_and_latest():
    doc = make_document([], commit_ids=["x", "y", "z"])

    assert doc.commit_index("y") == 1
    assert doc.commit_index("nope") == -1
    assert doc.latest_commit.id == "z"
    assert make_document([], commit_ids=[]).latest_commit is None


@pytest.mark.parametrize("text", [None, 5, ["a"]])
def test_segment_text_must_be_string(text):
    with pytest.raises(DocumentFormatError, match="'text' must be a string"):
        Segment.from_dict({"type": "unchanged", "text": text})


def test_history_entry_text_fields_must_be_strings():
    with pytest.raises(DocumentFormatError, match="'after' must be a string"):
        HistoryEntry.from_dict(entry(C1, "modified", after=5))
    with pytest.raises(DocumentFormatError, match="'before' must be a string"):
        HistoryEntry.from_dict(entry(C1, "modified", before=["A"], after="B"))


def test_history_entry_optional_text_accepts_null():
    h = HistoryEntry.from_dict(entry(C1, "added", text="A", before=None, after=None))

    assert h.before is None
    assert h.after is None
    assert h.resolved_text() == "A"


@pytest.mark.parametrize("commit_id", [123, None, {"id": C1}])
def test_change_commit_must_be_string(commit_id):
    with pytest.raises(DocumentFormatError, match="change"):
        Segment.from_dict({"type": "added", "text": "x", "change": {"commit": commit_id}})


def test_commit_id_must_be_string():
    with pytest.raises(DocumentFormatError, match="'id' must be a string"):
        Document.from_dict({"commits": [{"id": 7}], "content": []})


@pytest.mark.parametrize("offset", ["abc", None, [1], True])
def test_modification_offset_must_be_integer(offset):
    with pytest.raises(DocumentFormatError, match="'offset' must be an integer"):
        Segment.from_dict({
            "type": "modified",
            "text": "b",
            "change": {"commit": C1, "modifications": [{"offset": offset, "old": "a", "new": "b"}]},
        })


def test_numeric_string_offset_is_accepted():
    seg = Segment.from_dict({
        "type": "modified",
        "text": "b",
        "change": {"commit": C1, "modifications": [{"offset": "4", "old": "a", "new": "b"}]},
    })

    assert seg.change.modifications[0].offset == 4
