"""
Tests for query helpers.
"""

from timetravel.load import load_document
from timetravel.query import (
    get_commit,
    list_commit_ids,
    resolve_commit_id,
    search_across_versions,
    segments_touched_by,
    touch_counts,
)

from .fixtures import C1, C2, C3, SAMPLE_PATH, make_document, scenario_document


def test_list_and_get_commit():
    doc = scenario_document()

    assert list_commit_ids(doc) == [C1, C2, C3]
    assert get_commit(doc, C2).message == "commit c2"
    assert get_commit(doc, "nope") is None


def test_resolve_commit_id():
    doc = load_document(SAMPLE_PATH)

    assert resolve_commit_id(doc, "h7i8j9k") == "h7i8j9k"
    assert resolve_commit_id(doc, "h7i") == "h7i8j9k"
    assert resolve_commit_id(doc, "HEAD") == "a1b2c3d"
    assert resolve_commit_id(doc, "latest") == "a1b2c3d"
    assert resolve_commit_id(doc, "zzz") is None


def test_resolve_ambiguous_prefix():
    doc = make_document([], commit_ids=["abc1", "abc2"])

    assert resolve_commit_id(doc, "abc") is None
    assert resolve_commit_id(make_document([], commit_ids=[]), "HEAD") is None


def test_segments_touched_by():
    doc = scenario_document()

    assert segments_touched_by(doc, C1) == [1]
    assert segments_touched_by(doc, C3) == [1, 3]
    assert touch_counts(doc) == {C1: 1, C2: 1, C3: 2}


def test_search_across_versions():
    doc = scenario_document()

    hits = search_across_versions(doc, "a")

    # Segment 1 reads "B" now; "A" survives in its history and change.before.
    sources = [(h.segment_index, h.source, h.commit) for h in hits]
    assert (1, "history", C1) in sources
    assert (1, "before", C3) in sources
    assert (1, "current", C3) not in sources


def test_search_current_text_attributes_commit():
    doc = load_document(SAMPLE_PATH)

    hits = search_across_versions(doc, "ALPHA")

    assert len(hits) == 1
    assert hits[0].source == "current"
    assert hits[0].commit == "k9l0m1n"
    assert hits[0].author == "carol"


def test_search_blank_query():
    assert search_across_versions(scenario_document(), "   ") == []
