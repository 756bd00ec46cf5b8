"""
Session records and their storage.

`JsonFileSessionStore` keeps every session in one pretty-printed JSON array.
Each mutation re-reads the file, applies the change, writes the whole list to a
fresh temp file in the same directory and renames it over the canonical path,
so readers never see a partially written file. Nothing serializes writers
across processes: two processes mutating at once can lose an update.

A file that cannot be parsed, or whose top level is not an array, reads as an
empty store. Elements that fail `is_valid_session` are dropped on load.
"""

from __future__ import annotations

import json
import logging
import math
import os
import threading
import time
import uuid
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import LEVELS, MAX_SCORE, MIN_SCORE
from .datetime_utils import MonotonicClock
from .errors import InvalidScoreError, SessionNotFoundError
from .resources import ensure_parent_dir

logger = logging.getLogger(__name__)


@dataclass
class Session:
    id: str
    date: str
    template_id: str
    level: str
    score: Optional[float] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "templateId": self.template_id,
            "level": self.level,
        }
        if self.score is not None:
            data["score"] = self.score
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(
            id=data["id"],
            date=data["date"],
            template_id=data["templateId"],
            level=data["level"],
            score=data.get("score"),
            notes=data.get("notes"),
        )


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_finite_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


def is_valid_session(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    if not (_non_empty_str(value.get("id")) and _non_empty_str(value.get("date"))):
        return False
    if not _non_empty_str(value.get("templateId")):
        return False
    if value.get("level") not in LEVELS:
        return False
    if "score" in value and not _is_finite_number(value["score"]):
        return False
    if "notes" in value and not isinstance(value["notes"], str):
        return False
    return True


def validate_score(score: Any) -> float:
    if not _is_finite_number(score) or score < MIN_SCORE or score > MAX_SCORE:
        raise InvalidScoreError(f"score must be a finite number between {MIN_SCORE:g} and {MAX_SCORE:g}")
    return score


def sort_sessions(sessions: List[Session]) -> List[Session]:
    """Most recent first; equal dates keep their stored order."""
    return sorted(sessions, key=lambda s: s.date, reverse=True)


def _new_session(clock: MonotonicClock, template_id: str, level: str) -> Session:
    return Session(id=str(uuid.uuid4()), date=clock.isoformat(), template_id=template_id, level=level)


class JsonFileSessionStore:
    def __init__(self, path: Union[str, Path], clock: Optional[MonotonicClock] = None):
        self.path = Path(path)
        self._clock = clock or MonotonicClock()
        self._lock = threading.Lock()

    def _read(self) -> List[Session]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError:
            logger.warning("session store %s is not valid UTF-8; treating as empty", self.path)
            return []
        if not raw.strip():
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("session store %s is not valid JSON; treating as empty", self.path)
            return []
        if not isinstance(parsed, list):
            logger.warning("session store %s does not hold a JSON array; treating as empty", self.path)
            return []
        return [Session.from_dict(item) for item in parsed if is_valid_session(item)]

    def _write(self, sessions: List[Session]) -> None:
        ensure_parent_dir(self.path)
        tmp = self.path.with_name(f"{self.path.stem}.{os.getpid()}.{time.time_ns()}.tmp")
        payload = json.dumps([s.to_dict() for s in sessions], indent=2, ensure_ascii=False) + "\n"
        try:
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def list(self) -> List[Session]:
        return sort_sessions(self._read())

    def get(self, session_id: str) -> Optional[Session]:
        for session in self._read():
            if session.id == session_id:
                return session
        return None

    def create(self, template_id: str, level: str) -> Session:
        with self._lock:
            session = _new_session(self._clock, template_id, level)
            sessions = self._read()
            sessions.append(session)
            self._write(sessions)
        return replace(session)

    def update_score(self, session_id: str, score: float, notes: Optional[str] = None) -> Session:
        validate_score(score)
        with self._lock:
            sessions = self._read()
            session = next((s for s in sessions if s.id == session_id), None)
            if session is None:
                raise SessionNotFoundError(f"session not found: {session_id}")
            session.score = score
            if notes is not None:
                session.notes = notes
            self._write(sessions)
        return replace(session)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._read())
            self._write([])
        return removed


class MemorySessionStore:
    """In-process store with the same contract as `JsonFileSessionStore`."""

    def __init__(self, clock: Optional[MonotonicClock] = None):
        self._clock = clock or MonotonicClock()
        self._sessions: List[Session] = []
        self._lock = threading.Lock()

    def list(self) -> List[Session]:
        with self._lock:
            return sort_sessions([replace(s) for s in self._sessions])

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            for session in self._sessions:
                if session.id == session_id:
                    return replace(session)
        return None

    def create(self, template_id: str, level: str) -> Session:
        with self._lock:
            session = _new_session(self._clock, template_id, level)
            self._sessions.append(session)
            return replace(session)

    def update_score(self, session_id: str, score: float, notes: Optional[str] = None) -> Session:
        validate_score(score)
        with self._lock:
            session = next((s for s in self._sessions if s.id == session_id), None)
            if session is None:
                raise SessionNotFoundError(f"session not found: {session_id}")
            session.score = score
            if notes is not None:
                session.notes = notes
            return replace(session)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._sessions)
            self._sessions = []
        return removed


SessionStore = Union[JsonFileSessionStore, MemorySessionStore]
