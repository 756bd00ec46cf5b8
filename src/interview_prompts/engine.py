from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .composer import ComposeRequest, compose_prompt
from .config import InterviewConfig, load_config
from .constants import DEFAULT_SESSIONS_PATH, SESSIONS_PATH_ENV
from .logging import log_json
from .sessions import JsonFileSessionStore, Session, SessionStore


@dataclass(frozen=True)
class GenerateResult:
    prompt: str
    session: Optional[Session] = None


def resolve_sessions_path(path: Union[str, Path, None] = None) -> Path:
    raw = path or os.getenv(SESSIONS_PATH_ENV) or DEFAULT_SESSIONS_PATH
    return Path(os.path.expanduser(str(raw))).resolve()


@dataclass
class InterviewEngine:
    config: InterviewConfig
    store: SessionStore

    @classmethod
    def from_env(
        cls,
        *,
        config_path: Union[str, Path, None] = None,
        sessions_path: Union[str, Path, None] = None,
    ) -> "InterviewEngine":
        config = load_config(config_path)
        return cls(config=config, store=JsonFileSessionStore(resolve_sessions_path(sessions_path)))

    def list_templates(self) -> List[Dict[str, Any]]:
        return [tpl.summary() for tpl in self.config.templates]

    def generate(self, request: ComposeRequest, *, persist_session: bool = True) -> GenerateResult:
        prompt = compose_prompt(self.config, request)
        log_json(logging.INFO, "prompt_generated", template_id=request.template_id, candidate_level=request.level)
        if not persist_session:
            return GenerateResult(prompt=prompt)
        session = self.store.create(request.template_id, request.level)
        log_json(logging.INFO, "session_created", session_id=session.id, template_id=session.template_id)
        return GenerateResult(prompt=prompt, session=session)

    def evaluate(self, session_id: str, score: float, notes: Optional[str] = None) -> Session:
        session = self.store.update_score(session_id, score, notes)
        log_json(logging.INFO, "session_evaluated", session_id=session_id, score=score)
        return session

    def list_sessions(self) -> List[Session]:
        return self.store.list()
