"""
Interview configuration: templates and defaults.

A configuration document is JSON (camelCase keys). It is validated against the
bundled JSON Schema and then converted into frozen dataclasses, so a loaded
`InterviewConfig` is never mutated at runtime.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .constants import CONFIG_PATH_ENV
from .errors import InterviewConfigError, UnknownTemplateError
from .resources import load_config_schema, load_default_config_doc
from .schema import validate_doc


@dataclass(frozen=True)
class PromptOverrides:
    follow_ups: Optional[int] = None
    include: Optional[Tuple[str, ...]] = None
    plain_language: bool = False
    good_answer_criteria: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptOverrides":
        include = data.get("include")
        return cls(
            follow_ups=data.get("followUps"),
            include=tuple(include) if include is not None else None,
            plain_language=bool(data.get("plainLanguage", False)),
            good_answer_criteria=tuple(data.get("goodAnswerCriteria") or ()),
        )


@dataclass(frozen=True)
class Template:
    id: str
    title: str
    levels: Tuple[str, ...]
    focus: Tuple[str, ...]
    question_styles: Tuple[str, ...]
    constraints: Tuple[str, ...] = ()
    overrides: Optional[PromptOverrides] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        overrides = data.get("promptOverrides")
        return cls(
            id=data["id"],
            title=data["title"],
            levels=tuple(data["levels"]),
            focus=tuple(data["focus"]),
            question_styles=tuple(data["questionStyles"]),
            constraints=tuple(data.get("constraints") or ()),
            overrides=PromptOverrides.from_dict(overrides) if overrides is not None else None,
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "levels": list(self.levels),
            "focus": list(self.focus),
        }


@dataclass(frozen=True)
class Defaults:
    company_bar: str
    stack: Tuple[str, ...]
    language: str
    follow_ups: int
    include: Tuple[str, ...]
    simulation: bool
    timeboxed_minutes: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Defaults":
        return cls(
            company_bar=data["companyBar"],
            stack=tuple(data["stack"]),
            language=data["language"],
            follow_ups=data["followUps"],
            include=tuple(data["include"]),
            simulation=data["simulation"],
            timeboxed_minutes=data["timeboxedMinutes"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companyBar": self.company_bar,
            "stack": list(self.stack),
            "language": self.language,
            "followUps": self.follow_ups,
            "include": list(self.include),
            "simulation": self.simulation,
            "timeboxedMinutes": self.timeboxed_minutes,
        }


@dataclass(frozen=True)
class InterviewConfig:
    version: str
    defaults: Defaults
    templates: Tuple[Template, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, doc: Any) -> "InterviewConfig":
        result = validate_doc(doc, load_config_schema())
        if not result.ok:
            raise InterviewConfigError("config invalid: " + "; ".join(result.errors))
        templates = tuple(Template.from_dict(t) for t in doc["templates"])
        seen = set()
        for tpl in templates:
            if tpl.id in seen:
                raise InterviewConfigError(f"duplicate template id: {tpl.id}")
            seen.add(tpl.id)
        return cls(
            version=doc["version"],
            defaults=Defaults.from_dict(doc["defaults"]),
            templates=templates,
        )

    def find_template(self, template_id: str) -> Optional[Template]:
        for tpl in self.templates:
            if tpl.id == template_id:
                return tpl
        return None

    def get_template(self, template_id: str) -> Template:
        tpl = self.find_template(template_id)
        if tpl is None:
            raise UnknownTemplateError(f"unknown template: {template_id}")
        return tpl


def load_config(path: Union[str, Path, None] = None) -> InterviewConfig:
    """
    Load and validate a configuration document.

    Resolution order: explicit `path`, then `$INTERVIEW_PROMPTS_CONFIG`, then the
    configuration bundled with the package.
    """
    raw = path or os.getenv(CONFIG_PATH_ENV)
    if not raw:
        return InterviewConfig.from_dict(load_default_config_doc())
    config_path = Path(os.path.expanduser(str(raw)))
    try:
        doc = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise InterviewConfigError(f"missing config file: {config_path}") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InterviewConfigError(f"invalid JSON in {config_path}: {exc}") from exc
    return InterviewConfig.from_dict(doc)
