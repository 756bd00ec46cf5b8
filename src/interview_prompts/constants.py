from __future__ import annotations

from typing import Tuple

CONFIG_PATH_ENV = "INTERVIEW_PROMPTS_CONFIG"
SESSIONS_PATH_ENV = "INTERVIEW_PROMPTS_SESSIONS"
HOST_ENV = "INTERVIEW_PROMPTS_HOST"
PORT_ENV = "INTERVIEW_PROMPTS_PORT"

DEFAULT_SESSIONS_PATH = "data/sessions.json"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4174

DEFAULT_CONFIG_FILENAME = "interviews.default.json"
CONFIG_SCHEMA_FILENAME = "interviews.schema.json"

LEVELS: Tuple[str, ...] = ("junior", "middle", "senior")

# Order here is the order bullets appear under OUTPUT FORMAT.
INCLUDE_SECTIONS: Tuple[str, ...] = (
    "idealAnswer",
    "commonMistakes",
    "edgeCases",
    "tradeOffs",
    "seniorVsMiddle",
    "scoringRubric",
    "measurementPlan",
    "rolloutPlan",
    "securityConsiderations",
)

MIN_SCORE = 0.0
MAX_SCORE = 10.0
