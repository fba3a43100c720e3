"""Tolerant extraction of an AnalysisResult from free-form model output.

The model is asked for JSON but nothing guarantees it. Precedence:

1. the span from the first ``{`` to the last ``}`` parses as a JSON object:
   use its fields, with per-field defaults for anything missing or blank;
2. otherwise degrade to prose: the whole response becomes the summary.

``parse_analysis_response`` never raises.
"""

import json
from typing import Any

from docanalyzer.analysis.models import (
    NO_SUMMARY,
    NOT_DETECTED,
    SEE_SUMMARY,
    AnalysisResult,
)
from docanalyzer.logging.logger import Log

_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "summary": ("summary",),
    "author": ("author",),
    "entity": ("entity",),
    "key_info": ("keyInfo", "key_info"),
}

# Deeper nesting is rendered as compact JSON.
_MAX_RENDER_DEPTH = 8


def parse_analysis_response(text: str) -> AnalysisResult:
    data = _extract_json_object(text)
    if data is None:
        Log.warning("Analysis response has no JSON object, using prose fallback")
        return _prose_fallback(text)
    try:
        return AnalysisResult(
            summary=_field(data, "summary", NO_SUMMARY),
            author=_field(data, "author", NOT_DETECTED),
            entity=_field(data, "entity", NOT_DETECTED),
            key_info=_field(data, "key_info", SEE_SUMMARY),
        )
    except (RecursionError, ValueError, TypeError) as exc:
        Log.warning(f"Analysis response fields not renderable ({exc}), using prose fallback")
        return _prose_fallback(text)


def _extract_json_object(text: str) -> dict[str, Any] | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        parsed = json.loads(text[start : end + 1])
    except (json.JSONDecodeError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def _prose_fallback(text: str) -> AnalysisResult:
    return AnalysisResult(
        summary=text if text.strip() else NO_SUMMARY,
        author=NOT_DETECTED,
        entity=NOT_DETECTED,
        key_info=SEE_SUMMARY,
        degraded=True,
    )


def _field(data: dict[str, Any], name: str, default: str) -> str:
    for key in _FIELD_ALIASES[name]:
        rendered = _render(data.get(key))
        if rendered:
            return rendered
    return default


def _render(value: Any, depth: int = 0) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if depth >= _MAX_RENDER_DEPTH and isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        parts = []
        for item in value:
            rendered = _render(item, depth + 1)
            if rendered:
                parts.append(rendered)
        return "; ".join(parts)
    if isinstance(value, dict):
        parts = []
        for key, item in value.items():
            rendered = _render(item, depth + 1)
            if rendered:
                parts.append(f"{key}: {rendered}")
        return "; ".join(parts)
    return str(value)
