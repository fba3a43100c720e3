import re

from docanalyzer.analysis.models import NOT_DETECTED, SEE_SUMMARY, AnalysisResult

_AUTHOR_RE = re.compile(r"^Author:[ \t]*([^\n]*)", re.IGNORECASE | re.MULTILINE)
_ENTITY_RE = re.compile(r"^Entity:[ \t]*([^\n]*)", re.IGNORECASE | re.MULTILINE)
_KEY_INFO_RE = re.compile(r"^Key Info:[ \t]*(.*)\Z", re.IGNORECASE | re.MULTILINE | re.DOTALL)


def format_extracted_text(result: AnalysisResult) -> str:
    """Flatten author/entity/key info into the documents.extracted_text column."""
    return f"Author: {result.author}\nEntity: {result.entity}\nKey Info: {result.key_info}"


def parse_extracted_text(text: str | None) -> tuple[str, str, str]:
    """Read (author, entity, key_info) back from an extracted_text value."""
    text = text or ""
    return (
        _match(_AUTHOR_RE, text, NOT_DETECTED),
        _match(_ENTITY_RE, text, NOT_DETECTED),
        _match(_KEY_INFO_RE, text, SEE_SUMMARY),
    )


def _match(pattern: re.Pattern[str], text: str, default: str) -> str:
    match = pattern.search(text)
    if match is None:
        return default
    return match.group(1).strip() or default
