from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from .composer import ComposeMode, ComposeRequest
from .constants import DEFAULT_HOST, DEFAULT_PORT, HOST_ENV, LEVELS, PORT_ENV
from .engine import InterviewEngine
from .errors import InterviewPromptError
from .http_service import run_server
from .logging import configure_logging
from .scorer import basic_score_evaluation


def _csv(s: str) -> List[str]:
    return [part.strip() for part in s.split(",") if part.strip()]


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("expected a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="interview-prompts")
    parser.add_argument("--config", default=None, help="Interview config JSON (defaults to $INTERVIEW_PROMPTS_CONFIG)")
    parser.add_argument("--sessions", default=None, help="Session store path (defaults to $INTERVIEW_PROMPTS_SESSIONS)")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate", help="Compose an interview prompt and start a session")
    p_gen.add_argument("--template", required=True, help="Template id")
    p_gen.add_argument("--level", required=True, choices=LEVELS)
    p_gen.add_argument("--stack", type=_csv, default=None, help="Comma-separated stack override")
    p_gen.add_argument("--focus", type=_csv, default=None, help="Comma-separated focus topics to add")
    p_gen.add_argument("--context", default=None, help="Extra context about your project or company")
    mode = p_gen.add_mutually_exclusive_group()
    mode.add_argument("--simulation", dest="simulation", action="store_const", const=True, default=None)
    mode.add_argument("--direct", dest="simulation", action="store_const", const=False)
    p_gen.add_argument("--timebox", type=_positive_int, default=None, help="Timebox in minutes")
    p_gen.add_argument("--english", action="store_true", help="Interview in English with language corrections")
    p_gen.add_argument("--no-session", action="store_true", help="Do not record a session")

    p_eval = sub.add_parser("evaluate", help="Record a score for an existing session")
    p_eval.add_argument("--session", required=True, help="Session id")
    p_eval.add_argument("--score", required=True, type=float, help="Score between 0 and 10")
    p_eval.add_argument("--notes", default=None)

    sub.add_parser("templates", help="List configured templates and their levels")
    sub.add_parser("sessions", help="Print recorded sessions, most recent first")

    p_score = sub.add_parser("score", help="Heuristically score an answer")
    src = p_score.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", default=None)
    src.add_argument("--file", default=None, type=Path)

    p_serve = sub.add_parser("serve", help="Run the local HTTP API")
    p_serve.add_argument("--host", default=os.getenv(HOST_ENV, DEFAULT_HOST))
    p_serve.add_argument("--port", type=int, default=int(os.getenv(PORT_ENV, DEFAULT_PORT)))

    return parser


def _run(args: argparse.Namespace) -> int:
    if args.cmd == "score":
        if args.text is not None:
            text = args.text
        else:
            try:
                text = args.file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
                return 1
        print(json.dumps(basic_score_evaluation(text).to_dict(), indent=2, ensure_ascii=False))
        return 0

    engine = InterviewEngine.from_env(config_path=args.config, sessions_path=args.sessions)

    if args.cmd == "generate":
        request = ComposeRequest(
            template_id=args.template,
            level=args.level,
            stack=args.stack,
            focus_boost=args.focus,
            extra_context=args.context,
            mode=ComposeMode(
                simulation=args.simulation,
                english=args.english or None,
                timeboxed_minutes=args.timebox,
            ),
        )
        result = engine.generate(request, persist_session=not args.no_session)
        print(result.prompt)
        if result.session is not None:
            print(f"session: {result.session.id}", file=sys.stderr)
        return 0

    if args.cmd == "evaluate":
        session = engine.evaluate(args.session, args.score, args.notes)
        print(json.dumps(session.to_dict(), indent=2, ensure_ascii=False))
        return 0

    if args.cmd == "templates":
        for tpl in engine.list_templates():
            print(f"{tpl['id']}\t{tpl['title']}\t{','.join(tpl['levels'])}")
        return 0

    if args.cmd == "sessions":
        print(json.dumps([s.to_dict() for s in engine.list_sessions()], indent=2, ensure_ascii=False))
        return 0

    if args.cmd == "serve":
        run_server(engine, host=args.host, port=args.port)
        return 0

    raise AssertionError("unreachable")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        return _run(args)
    except InterviewPromptError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
