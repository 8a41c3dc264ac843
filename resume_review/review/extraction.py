"""Pulls the structured JSON block and the rewritten document out of raw
analyzer responses.

Rewritten-document boundary rules:
1. If an "Optimized Resume:" or "Optimized Document:" delimiter line is
   present, everything after it is the rewritten document.
2. Otherwise the response with the JSON block removed is used.
These rules are a best-effort contract over free-form model output.
"""

import json
import re

from resume_review.review.exceptions import MalformedAnalyzerResponseError

_DELIMITER_RE = re.compile(
    r"^[ \t#*]*optimi[sz]ed[ \t]+(?:resume|document)[ \t*]*(?::[ \t*]*|$)",
    re.IGNORECASE | re.MULTILINE,
)
_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*$", re.MULTILINE)


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence, if the whole text is fenced."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned


def find_json_object(raw: str) -> tuple[dict[str, object], int, int]:
    """Locate the first decodable JSON object in `raw`.

    Returns:
        The decoded object and its (start, end) offsets in `raw`.

    Raises:
        MalformedAnalyzerResponseError: if no JSON object can be decoded.
    """
    decoder = json.JSONDecoder()
    start = raw.find("{")
    while start != -1:
        try:
            parsed, end = decoder.raw_decode(raw, start)
        except json.JSONDecodeError:
            start = raw.find("{", start + 1)
            continue
        if isinstance(parsed, dict):
            return parsed, start, end
        start = raw.find("{", end)
    raise MalformedAnalyzerResponseError("No JSON object found in analyzer response")


def parse_json_response(raw: str) -> dict[str, object]:
    """Parse a response that should consist of a single JSON object."""
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        parsed, _, _ = find_json_object(cleaned)
    if not isinstance(parsed, dict):
        raise MalformedAnalyzerResponseError("JSON response must be an object")
    return parsed


def split_integration_response(raw: str) -> tuple[dict[str, object], str | None]:
    """Split a final-integration response into (structured result, rewritten text)."""
    structured, start, end = find_json_object(raw)

    match = _DELIMITER_RE.search(raw)
    if match is not None:
        tail = raw[match.end():]
        if match.start() < start:
            # JSON block trails the document; keep only what precedes it.
            tail = raw[match.end():start]
        rewritten = _clean_document(tail)
    else:
        rewritten = _clean_document(raw[:start] + raw[end:])

    return structured, rewritten or None


def _clean_document(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()
