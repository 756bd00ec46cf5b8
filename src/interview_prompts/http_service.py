from __future__ import annotations

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from .composer import ComposeMode, ComposeRequest
from .constants import LEVELS
from .engine import InterviewEngine
from .errors import InterviewPromptError, SessionNotFoundError
from .logging import log_json


class _BadRequest(Exception):
    pass


def make_server(engine: InterviewEngine, *, host: str, port: int) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), _make_handler(engine))


def run_server(engine: InterviewEngine, *, host: str, port: int) -> None:
    server = make_server(engine, host=host, port=port)
    log_json(logging.INFO, "http_server_started", host=host, port=server.server_address[1])
    try:
        server.serve_forever()
    finally:
        server.server_close()


def _optional(body: Dict[str, Any], key: str, kind: type, label: str) -> Any:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise _BadRequest(f"{key} must be {label}")
    return value


def _optional_str_list(body: Dict[str, Any], key: str) -> Optional[List[str]]:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _BadRequest(f"{key} must be an array of strings")
    return value


def _generate_request(body: Dict[str, Any]) -> ComposeRequest:
    template_id = body.get("templateId")
    level = body.get("level")
    if not isinstance(template_id, str) or not template_id or level not in LEVELS:
        raise _BadRequest("templateId and valid level are required")
    timeboxed = _optional(body, "timeboxedMinutes", int, "an integer")
    if timeboxed is not None and timeboxed < 1:
        raise _BadRequest("timeboxedMinutes must be a positive integer")
    return ComposeRequest(
        template_id=template_id,
        level=level,
        stack=_optional_str_list(body, "stack"),
        focus_boost=_optional_str_list(body, "focusBoost"),
        extra_context=_optional(body, "extraContext", str, "a string"),
        mode=ComposeMode(
            simulation=_optional(body, "simulation", bool, "a boolean"),
            english=_optional(body, "english", bool, "a boolean"),
            timeboxed_minutes=timeboxed,
        ),
    )


def _make_handler(engine: InterviewEngine):
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            path = urlparse(self.path).path
            if path == "/healthz":
                self._json({"ok": True})
                return
            if path == "/api/templates":
                self._json(
                    {
                        "defaults": engine.config.defaults.to_dict(),
                        "templates": engine.list_templates(),
                    }
                )
                return
            if path == "/api/sessions":
                self._json({"sessions": [s.to_dict() for s in engine.list_sessions()]})
                return
            self._error("not found", status=HTTPStatus.NOT_FOUND)

        def do_POST(self) -> None:  # noqa: N802
            path = urlparse(self.path).path
            if path not in ("/api/generate", "/api/evaluate"):
                self._error("not found", status=HTTPStatus.NOT_FOUND)
                return
            try:
                body = self._read_json()
                if path == "/api/generate":
                    self._generate(body)
                else:
                    self._evaluate(body)
            except _BadRequest as exc:
                self._error(str(exc), status=HTTPStatus.BAD_REQUEST)
            except SessionNotFoundError as exc:
                self._error(str(exc), status=HTTPStatus.NOT_FOUND)
            except InterviewPromptError as exc:
                self._error(str(exc), status=HTTPStatus.BAD_REQUEST)

        def _generate(self, body: Dict[str, Any]) -> None:
            request = _generate_request(body)
            persist = _optional(body, "persistSession", bool, "a boolean")
            result = engine.generate(request, persist_session=True if persist is None else persist)
            self._json(
                {
                    "prompt": result.prompt,
                    "sessionId": result.session.id if result.session else None,
                    "createdAt": result.session.date if result.session else None,
                }
            )

        def _evaluate(self, body: Dict[str, Any]) -> None:
            session_id = body.get("sessionId")
            if not isinstance(session_id, str) or not session_id:
                raise _BadRequest("sessionId is required")
            notes = _optional(body, "notes", str, "a string")
            session = engine.evaluate(session_id, body.get("score"), notes)
            self._json({"ok": True, "session": session.to_dict()})

        def _read_json(self) -> Dict[str, Any]:
            try:
                length = int(self.headers.get("Content-Length") or "0")
            except ValueError:
                length = 0
            raw = self.rfile.read(length) if length else b""
            if not raw.strip():
                return {}
            try:
                obj = json.loads(raw.decode("utf-8"))
            except ValueError as exc:
                # also covers UnicodeDecodeError and over-long integer literals
                raise _BadRequest("invalid JSON body") from exc
            if not isinstance(obj, dict):
                raise _BadRequest("expected a JSON object")
            return obj

        def _error(self, message: str, *, status: int) -> None:
            self._json({"ok": False, "error": message}, status=status)

        def _json(self, data: Dict[str, Any], *, status: int = 200) -> None:
            payload = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args) -> None:  # noqa: A003
            log_json(logging.DEBUG, "http_request", client=self.client_address[0], line=format % args)

    return Handler
