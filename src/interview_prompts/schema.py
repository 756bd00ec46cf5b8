from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .errors import InterviewConfigError


@dataclass(frozen=True)
class SchemaValidationResult:
    ok: bool
    errors: List[str]


def validate_doc(doc: Any, schema: Dict[str, Any]) -> SchemaValidationResult:
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as exc:
        raise InterviewConfigError(f"invalid config schema: {exc.message}") from exc
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    if errors:
        rendered = []
        for e in errors:
            path = "/" + "/".join(str(p) for p in e.path) if e.path else "/"
            rendered.append(f"{path}: {e.message}")
        return SchemaValidationResult(ok=False, errors=rendered)
    return SchemaValidationResult(ok=True, errors=[])
