"""
Tests for injected tracing hooks.
"""

import logging
import threading

from timetravel.reconstruct import LoggingTracer, NullTracer, ReconstructionTracer, SegmentDecision, reconstruct_at
from timetravel.reconstruct.tracing import tracer_from_env

from .fixtures import C1, C2, C3, entry, make_document, scenario_document


class RecordingTracer(ReconstructionTracer):
    def __init__(self):
        self.events = []

    def on_start(self, target_commit_id, commit_index, total_commits):
        self.events.append(("start", target_commit_id, commit_index, total_commits))

    def on_unknown_commit(self, target_commit_id):
        self.events.append(("unknown", target_commit_id))

    def on_segment(self, index, segment, decision, entry=None):
        self.events.append(("segment", index, decision))

    def on_text_fallback(self, index, segment, entry):
        self.events.append(("fallback", index, entry.commit))

    def on_finish(self, target_commit_id, kept, total, is_historical):
        self.events.append(("finish", kept, total, is_historical))


def test_tracer_sees_every_segment_decision():
    tracer = RecordingTracer()

    reconstruct_at(scenario_document(), C2, tracer=tracer)

    assert tracer.events == [
        ("start", C2, 1, 3),
        ("segment", 0, SegmentDecision.UNCHANGED),
        ("segment", 1, SegmentDecision.PROJECTED),
        ("segment", 2, SegmentDecision.INCLUDED),
        ("segment", 3, SegmentDecision.NOT_YET_PRESENT),
        ("finish", 3, 4, True),
    ]


def test_tracer_reports_deleted_and_malformed():
    tracer = RecordingTracer()
    doc = make_document([
        {"type": "deleted", "text": "x", "change": {"commit": C1}},
        {"type": "modified", "text": "y"},
    ])

    reconstruct_at(doc, C3, tracer=tracer)

    decisions = [e[2] for e in tracer.events if e[0] == "segment"]
    assert decisions == [SegmentDecision.DELETED, SegmentDecision.MALFORMED]


def test_tracer_reports_text_fallback():
    tracer = RecordingTracer()
    doc = make_document([{"type": "added", "text": "current", "history": [entry(C1, "added")]}])

    reconstruct_at(doc, C1, tracer=tracer)

    assert ("fallback", 0, C1) in tracer.events


def test_tracer_reports_unknown_commit():
    tracer = RecordingTracer()

    reconstruct_at(scenario_document(), "nope", tracer=tracer)

    assert tracer.events == [("unknown", "nope")]


def test_tracing_does_not_change_result():
    doc = scenario_document()

    assert reconstruct_at(doc, C2, tracer=RecordingTracer()) == reconstruct_at(doc, C2)


def test_logging_tracer_emits_debug_records(caplog):
    caplog.set_level(logging.DEBUG, logger="timetravel.trace")

    reconstruct_at(scenario_document(), C2, tracer=LoggingTracer(document_name="README.md"))

    messages = [r.getMessage() for r in caplog.records if r.name == "timetravel.trace"]
    assert messages[0] == "reconstruction started"
    assert "segment projected" in messages
    assert messages[-1] == "reconstruction finished"
    assert all(r.trace_id == "README.md@c2" for r in caplog.records if r.name == "timetravel.trace")


def test_tracer_from_env(monkeypatch):
    monkeypatch.delenv("DHF_TRACE", raising=False)
    assert isinstance(tracer_from_env(), NullTracer)

    monkeypatch.setenv("DHF_TRACE", "true")
    assert isinstance(tracer_from_env("doc"), LoggingTracer)

    monkeypatch.setenv("DHF_TRACE", "0")
    assert isinstance(tracer_from_env(), NullTracer)


def test_shared_logging_tracer_keeps_trace_ids_per_thread(caplog):
    """One LoggingTracer serving concurrent reconstructions tags each record with its own commit."""
    caplog.set_level(logging.DEBUG, logger="timetravel.trace")
    doc = scenario_document()
    tracer = LoggingTracer(document_name="README.md")
    targets = [C1, C2, C3] * 4
    barrier = threading.Barrier(len(targets))

    def run(target):
        barrier.wait()
        for _ in range(20):
            reconstruct_at(doc, target, tracer=tracer)

    threads = [threading.Thread(target=run, args=(t,)) for t in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    by_thread = {}
    for record in caplog.records:
        if record.name == "timetravel.trace":
            by_thread.setdefault(record.thread, set()).add(record.trace_id)

    assert len(by_thread) == len(targets)
    for trace_ids in by_thread.values():
        assert len(trace_ids) == 1
    assert {ids.pop() for ids in by_thread.values()} == {f"README.md@{c}" for c in (C1, C2, C3)}
