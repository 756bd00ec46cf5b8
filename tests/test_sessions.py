from __future__ import annotations

import json
import math
import os
from datetime import datetime, timedelta, timezone

import pytest

from interview_prompts.datetime_utils import MonotonicClock
from interview_prompts.errors import InvalidScoreError, SessionNotFoundError
from interview_prompts.sessions import (
    JsonFileSessionStore,
    MemorySessionStore,
    Session,
    is_valid_session,
)


def _record(**overrides):
    data = {"id": "s1", "date": "2026-01-01T00:00:00.000000+00:00", "templateId": "t1", "level": "senior"}
    data.update(overrides)
    return data


class TestValidity:
    def test_minimal_record_is_valid(self):
        assert is_valid_session(_record())

    def test_optional_fields(self):
        assert is_valid_session(_record(score=8.5, notes="good"))
        assert is_valid_session(_record(score=0))

    @pytest.mark.parametrize(
        "record",
        [
            None,
            [],
            "s1",
            _record(id=""),
            _record(date=5),
            _record(templateId=""),
            _record(level="lead"),
            _record(score=None),
            _record(score=True),
            _record(score="8"),
            _record(notes=3),
        ],
    )
    def test_invalid_records(self, record):
        assert not is_valid_session(record)

    def test_non_finite_score_rejected(self):
        assert not is_valid_session(_record(score=float("nan")))
        assert not is_valid_session(_record(score=float("inf")))
        assert not is_valid_session(_record(score=10**400))


class TestJsonFileSessionStore:
    def test_missing_file_is_empty(self, file_store):
        assert file_store.list() == []

    def test_blank_file_is_empty(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("  \n", encoding="utf-8")
        assert file_store.list() == []

    def test_create_then_list_puts_new_record_first(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(
            json.dumps([_record(id="old", date="2000-01-01T00:00:00.000000+00:00")]), encoding="utf-8"
        )
        created = file_store.create("t1", "senior")
        sessions = file_store.list()
        assert sessions[0].id == created.id
        assert sessions[0].score is None
        assert [s.id for s in sessions] == [created.id, "old"]

    def test_persisted_file_is_pretty_json(self, file_store, store_path):
        created = file_store.create("t1", "junior")
        raw = store_path.read_text(encoding="utf-8")
        assert raw.endswith("\n")
        assert "\n  {" in raw
        assert json.loads(raw) == [created.to_dict()]
        assert "score" not in json.loads(raw)[0]

    def test_no_temp_files_left_behind(self, file_store, store_path):
        file_store.create("t1", "senior")
        file_store.create("t1", "junior")
        assert list(store_path.parent.glob("*.tmp")) == []

    def test_update_score_and_notes(self, file_store):
        created = file_store.create("t1", "senior")
        updated = file_store.update_score(created.id, 8.5, "good")
        assert updated.score == 8.5
        assert updated.notes == "good"
        first = file_store.list()[0]
        assert first.score == 8.5
        assert first.notes == "good"

    def test_update_without_notes_keeps_previous_notes(self, file_store):
        created = file_store.create("t1", "senior")
        file_store.update_score(created.id, 4, "first pass")
        file_store.update_score(created.id, 6)
        session = file_store.get(created.id)
        assert session.score == 6
        assert session.notes == "first pass"

    @pytest.mark.parametrize("score", [-1, 10.01, 11, math.nan, math.inf, -math.inf, True, "8", None])
    def test_invalid_score_never_mutates(self, file_store, store_path, score):
        created = file_store.create("t1", "senior")
        before = store_path.read_bytes()
        with pytest.raises(InvalidScoreError):
            file_store.update_score(created.id, score)
        assert store_path.read_bytes() == before

    def test_boundary_scores_accepted(self, file_store):
        created = file_store.create("t1", "senior")
        assert file_store.update_score(created.id, 0).score == 0
        assert file_store.update_score(created.id, 10).score == 10

    def test_unknown_id_leaves_file_unchanged(self, file_store, store_path):
        file_store.create("t1", "senior")
        before = store_path.read_bytes()
        with pytest.raises(SessionNotFoundError):
            file_store.update_score("does-not-exist", 5)
        assert store_path.read_bytes() == before

    def test_round_trip_many_sessions(self, file_store, store_path):
        created = [file_store.create("t1", level) for level in ("junior", "middle", "senior", "junior")]
        file_store.update_score(created[1].id, 7, "ok")
        reread = JsonFileSessionStore(store_path).list()

        def key(s: Session):
            return (s.id, s.template_id, s.level, s.score, s.notes)

        expected = {key(s) for s in created[:1] + created[2:]} | {(created[1].id, "t1", "middle", 7, "ok")}
        assert {key(s) for s in reread} == expected
        assert len(reread) == 4

    def test_corrupt_json_reads_as_empty(self, file_store, store_path, caplog):
        file_store.create("t1", "senior")
        store_path.write_text("[{broken", encoding="utf-8")
        assert file_store.list() == []
        assert any("not valid JSON" in rec.getMessage() for rec in caplog.records)

    def test_non_array_top_level_reads_as_empty(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"sessions": [_record()]}), encoding="utf-8")
        assert file_store.list() == []

    def test_oversized_integer_literal_reads_as_empty(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        huge = "1" + "0" * 5000
        store_path.write_text(
            f'[{{"id": "s1", "date": "2026-01-01T00:00:00.000000+00:00", '
            f'"templateId": "t1", "level": "senior", "score": {huge}}}]',
            encoding="utf-8",
        )
        assert file_store.list() == []

    def test_update_score_rejects_oversized_integer(self, file_store, store_path):
        created = file_store.create("t1", "senior")
        before = store_path.read_bytes()
        with pytest.raises(InvalidScoreError):
            file_store.update_score(created.id, 10**400)
        assert store_path.read_bytes() == before

    def test_invalid_bytes_read_as_empty(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"\xff\xfe\x00[")
        assert file_store.list() == []

    def test_invalid_elements_dropped_valid_kept(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        records = [
            _record(id="good", score=3),
            _record(id="bad-level", level="staff"),
            {"id": "no-date"},
            _record(id="null-score", score=None),
            _record(id="huge-score", score=10**400),
            42,
        ]
        store_path.write_text(json.dumps(records), encoding="utf-8")
        assert [s.id for s in file_store.list()] == ["good"]

    def test_create_after_corruption_starts_fresh(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("garbage", encoding="utf-8")
        created = file_store.create("t1", "senior")
        assert json.loads(store_path.read_text(encoding="utf-8")) == [created.to_dict()]

    def test_list_sorts_descending_and_is_stable(self, file_store, store_path):
        store_path.parent.mkdir(parents=True)
        same = "2026-02-01T00:00:00.000000+00:00"
        records = [
            _record(id="a", date="2026-01-01T00:00:00.000000+00:00"),
            _record(id="b", date=same),
            _record(id="c", date="2026-03-01T00:00:00.000000+00:00"),
            _record(id="d", date=same),
        ]
        store_path.write_text(json.dumps(records), encoding="utf-8")
        assert [s.id for s in file_store.list()] == ["c", "b", "d", "a"]

    def test_write_failure_propagates_and_cleans_up(self, file_store, store_path, monkeypatch):
        file_store.create("t1", "senior")
        before = store_path.read_bytes()

        def boom(src, dst):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "replace", boom)
        with pytest.raises(PermissionError):
            file_store.create("t1", "junior")
        assert store_path.read_bytes() == before
        assert list(store_path.parent.glob("*.tmp")) == []

    def test_timestamps_never_go_backwards(self, store_path):
        start = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
        ticks = iter([start, start - timedelta(seconds=30), start + timedelta(seconds=1)])
        store = JsonFileSessionStore(store_path, clock=MonotonicClock(source=lambda: next(ticks)))
        dates = [store.create("t1", "senior").date for _ in range(3)]
        assert dates == sorted(dates)
        assert dates[0] == dates[1]

    def test_ids_are_unique(self, file_store):
        ids = {file_store.create("t1", "senior").id for _ in range(20)}
        assert len(ids) == 20

    def test_create_does_not_validate_template(self, file_store):
        session = file_store.create("unknown-template", "middle")
        assert file_store.get(session.id).template_id == "unknown-template"

    def test_clear(self, file_store):
        file_store.create("t1", "senior")
        file_store.create("t1", "junior")
        assert file_store.clear() == 2
        assert file_store.list() == []


class TestMemorySessionStore:
    def test_same_contract(self):
        store = MemorySessionStore()
        created = store.create("t1", "senior")
        assert store.list()[0].id == created.id
        with pytest.raises(InvalidScoreError):
            store.update_score(created.id, 11)
        with pytest.raises(SessionNotFoundError):
            store.update_score("missing", 5)
        store.update_score(created.id, 8.5, "good")
        first = store.list()[0]
        assert (first.score, first.notes) == (8.5, "good")

    def test_returns_copies(self):
        store = MemorySessionStore()
        created = store.create("t1", "senior")
        created.score = 9
        store.list()[0].notes = "mutated"
        session = store.get(created.id)
        assert session.score is None
        assert session.notes is None

    def test_clear(self):
        store = MemorySessionStore()
        store.create("t1", "senior")
        assert store.clear() == 1
        assert store.list() == []
