from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .config import InterviewConfig
from .constants import INCLUDE_SECTIONS
from .errors import UnsupportedLevelError

_SECTION_BULLETS = {
    "commonMistakes": "- Common mistakes",
    "edgeCases": "- Edge cases",
    "tradeOffs": "- Trade-offs",
    "seniorVsMiddle": "- What differentiates Senior vs Middle answer",
    "scoringRubric": "- Scoring rubric (0-10) with criteria: correctness, depth, clarity, trade-offs, practicality",
    "measurementPlan": "- Measurement plan (what, how, success criteria)",
    "rolloutPlan": "- Rollout plan (flags, canary, rollback)",
    "securityConsiderations": "- Security considerations (when relevant)",
}


@dataclass(frozen=True)
class ComposeMode:
    simulation: Optional[bool] = None
    english: Optional[bool] = None
    timeboxed_minutes: Optional[int] = None


@dataclass(frozen=True)
class ComposeRequest:
    template_id: str
    level: str
    stack: Optional[Sequence[str]] = None
    focus_boost: Optional[Sequence[str]] = None
    extra_context: Optional[str] = None
    mode: ComposeMode = field(default_factory=ComposeMode)


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def compose_prompt(config: InterviewConfig, request: ComposeRequest) -> str:
    tpl = config.get_template(request.template_id)
    if request.level not in tpl.levels:
        raise UnsupportedLevelError(f'template "{tpl.id}" does not support level "{request.level}"')

    defaults = config.defaults
    overrides = tpl.overrides
    mode = request.mode

    stack = list(request.stack) if request.stack is not None else list(defaults.stack)
    simulation = mode.simulation if mode.simulation is not None else defaults.simulation
    timeboxed = mode.timeboxed_minutes if mode.timeboxed_minutes is not None else defaults.timeboxed_minutes
    english = bool(mode.english)

    follow_ups = defaults.follow_ups
    include = defaults.include
    plain_language = False
    criteria: Sequence[str] = ()
    if overrides is not None:
        if overrides.follow_ups is not None:
            follow_ups = overrides.follow_ups
        if overrides.include is not None:
            include = overrides.include
        plain_language = overrides.plain_language
        criteria = overrides.good_answer_criteria

    focus = _unique([*tpl.focus, *(request.focus_boost or [])])
    extra_context = (request.extra_context or "").strip()

    lines: List[str] = []

    lines += ["ROLE:", f"You are a senior frontend interviewer at a {defaults.company_bar}."]

    lines += [
        "",
        "CONTEXT:",
        f"Candidate level: {request.level}",
        f"Stack: {' + '.join(stack)}",
        f"Interview module: {tpl.title}",
        f"Focus: {', '.join(focus)}",
        f"Question styles: {', '.join(tpl.question_styles)}",
    ]
    if extra_context:
        lines.append(f"Extra context: {extra_context}")

    lines += [
        "",
        "TASK:",
        f"Run a realistic interview segment. Ask 1 main question and {follow_ups} "
        "follow-up questions, progressively harder.",
    ]

    if tpl.constraints:
        lines += ["", "CONSTRAINTS:", *(f"- {c}" for c in tpl.constraints)]

    if criteria:
        lines += ["", "GOOD ANSWER CRITERIA:", *(f"- {c}" for c in criteria)]

    lines += ["", "MODE:", f"- Timebox: {timeboxed} minutes"]
    if simulation:
        lines.append("- Simulation: DO NOT provide the answer immediately. Wait for my response.")
    else:
        lines.append("- Provide both questions and ideal answers immediately.")
    if english:
        lines.append(
            "- Conduct the interview in English and after my reply correct my English "
            "and suggest more native phrasing."
        )
    elif defaults.language == "ru":
        lines.append("- Speak Russian unless I answer in English.")
    if plain_language:
        lines.append("- Use plain language: explain jargon and keep sentences short.")

    lines += ["", "OUTPUT FORMAT:", "1) Main question", f"2) Follow-ups ({follow_ups})"]
    if simulation:
        lines += ["3) Wait for my answer", "4) Evaluate my answer strictly like a real interviewer"]
    elif "idealAnswer" in include:
        lines.append("3) Ideal answer (structured)")

    for section in INCLUDE_SECTIONS:
        bullet = _SECTION_BULLETS.get(section)
        if bullet and section in include:
            lines.append(bullet)

    return "\n".join(lines)
