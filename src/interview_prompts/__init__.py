"""
interview-prompts - template-driven interview prompts with a JSON session log.
"""

__version__ = "0.1.0"

from .composer import ComposeMode, ComposeRequest, compose_prompt
from .config import InterviewConfig, Template, load_config
from .engine import GenerateResult, InterviewEngine
from .errors import (
    InterviewConfigError,
    InterviewPromptError,
    InterviewValidationError,
    InvalidScoreError,
    SessionNotFoundError,
    UnknownTemplateError,
    UnsupportedLevelError,
)
from .scorer import Evaluation, basic_score_evaluation
from .sessions import JsonFileSessionStore, MemorySessionStore, Session, is_valid_session

__all__ = [
    "ComposeMode",
    "ComposeRequest",
    "compose_prompt",
    "InterviewConfig",
    "Template",
    "load_config",
    "GenerateResult",
    "InterviewEngine",
    "InterviewConfigError",
    "InterviewPromptError",
    "InterviewValidationError",
    "InvalidScoreError",
    "SessionNotFoundError",
    "UnknownTemplateError",
    "UnsupportedLevelError",
    "Evaluation",
    "basic_score_evaluation",
    "JsonFileSessionStore",
    "MemorySessionStore",
    "Session",
    "is_valid_session",
]
