from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from interview_prompts.config import InterviewConfig
from interview_prompts.sessions import JsonFileSessionStore

BASE_DOC: Dict[str, Any] = {
    "version": "test-1",
    "defaults": {
        "companyBar": "FAANG-level company",
        "stack": ["TypeScript", "React"],
        "language": "en",
        "followUps": 3,
        "include": ["idealAnswer", "commonMistakes", "scoringRubric"],
        "simulation": True,
        "timeboxedMinutes": 20,
    },
    "templates": [
        {
            "id": "t1",
            "title": "Async JavaScript",
            "levels": ["junior", "senior"],
            "focus": ["promises", "event loop"],
            "questionStyles": ["predict the output"],
            "constraints": ["No frameworks"],
        },
        {
            "id": "t2",
            "title": "Browser Rendering",
            "levels": ["middle"],
            "focus": ["layout", "paint"],
            "questionStyles": ["scenario"],
            "promptOverrides": {
                "followUps": 1,
                "include": ["idealAnswer", "edgeCases", "rolloutPlan"],
                "plainLanguage": True,
                "goodAnswerCriteria": ["Mentions the critical rendering path"],
            },
        },
    ],
}


@pytest.fixture
def config_doc() -> Dict[str, Any]:
    return copy.deepcopy(BASE_DOC)


@pytest.fixture
def config(config_doc) -> InterviewConfig:
    return InterviewConfig.from_dict(config_doc)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "sessions.json"


@pytest.fixture
def file_store(store_path) -> JsonFileSessionStore:
    return JsonFileSessionStore(store_path)
