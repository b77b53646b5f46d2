"""
Recovery of structured data from free-form model output.

Models wrap JSON in markdown fences, add prose around it, emit raw newlines
inside string values and leave trailing commas. ``sanitize_json`` turns such
text into valid JSON text when possible; ``sanitize_content`` cleans
individual string fields after parsing.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from loguru import logger

from skillpath.exceptions import StructuralError
from skillpath.models import CodeExample

_OPENING_FENCE_RE = re.compile(r"\A\s*```[\w+-]*[ \t]*(?:\n|\Z)")
_CLOSING_FENCE_RE = re.compile(r"\n?[ \t]*```\s*\Z")
# C0/C1 control characters, keeping \t \n \r for the newline pass
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n|\t")
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.?)", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"(?<![:\"'\\])//[^\n]*")
_BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_\-]*)\s*:")

_VALID_ESCAPES = set('"\\/bfnrt')


def _strip_fences(text: str) -> str:
    """Remove an opening fence line and a closing fence; inner text is untouched."""
    text = _OPENING_FENCE_RE.sub("", text, count=1)
    return _CLOSING_FENCE_RE.sub("", text, count=1)


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number: {name}")


def loads_strict(text: str) -> Any:
    """``json.loads`` that rejects NaN, Infinity and floats that overflow."""
    return json.loads(text, parse_float=_finite_float, parse_constant=_reject_constant)


def _extract_span(text: str) -> str | None:
    """Greedy span from the first opening bracket to the last matching closer."""
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        return None
    start = min(starts)
    closer = "}" if text[start] == "{" else "]"
    end = text.rfind(closer)
    if end <= start:
        return None
    return text[start : end + 1]


def _repair_escape(match: re.Match) -> str:
    sequence = match.group(1)
    if sequence.startswith("u") and len(sequence) == 5:
        return match.group(0)
    if sequence and sequence in _VALID_ESCAPES:
        return match.group(0)
    return "\\\\" + sequence


def _is_json(text: str) -> bool:
    try:
        loads_strict(text)
        return True
    except ValueError:
        return False


def _clean_span(span: str) -> str:
    cleaned = _CONTROL_RE.sub("", span)
    cleaned = _NEWLINE_RE.sub(" ", cleaned)
    cleaned = _ESCAPE_RE.sub(_repair_escape, cleaned)
    cleaned = _TRAILING_COMMA_RE.sub(r"\1", cleaned)
    return cleaned.strip()


def _aggressive_pass(text: str) -> str | None:
    relaxed = _BLOCK_COMMENT_RE.sub("", text)
    relaxed = _LINE_COMMENT_RE.sub("", relaxed)
    relaxed = _BARE_KEY_RE.sub(r'\1"\2":', relaxed)
    relaxed = _TRAILING_COMMA_RE.sub(r"\1", relaxed)
    span = _extract_span(relaxed)
    if span is None:
        return None
    return _clean_span(span)


def sanitize_json(raw: str) -> str:
    """
    Best-effort extraction of valid JSON text from model output.

    Never raises. Returns the original text unchanged when neither the
    standard nor the aggressive pass yields parseable JSON, so the caller's
    validator rejects it and triggers a retry.
    """
    if not isinstance(raw, str) or not raw.strip():
        return raw
    if _is_json(raw):
        return raw

    span = _extract_span(raw)
    if span is not None and _is_json(span):
        return span

    unfenced = _strip_fences(raw)
    span = _extract_span(unfenced)
    if span is None:
        return raw
    if _is_json(span):
        return span

    cleaned = _clean_span(span)
    if _is_json(cleaned):
        return cleaned

    relaxed = _aggressive_pass(unfenced)
    if relaxed is not None and _is_json(relaxed):
        return relaxed

    logger.debug(f"JSON sanitization failed for {len(raw)} chars of output")
    return raw


def parse_json(raw: str) -> Any:
    """Sanitize and parse model output, raising StructuralError on failure."""
    text = sanitize_json(raw)
    try:
        return loads_strict(text)
    except (TypeError, ValueError) as e:
        preview = (raw or "")[:120] if isinstance(raw, str) else repr(raw)
        raise StructuralError(
            f"Response is not valid JSON: {e}",
            context={"preview": preview},
        ) from e


def sanitize_content(text: Any) -> str:
    """Strip residual fences/backticks and unescape literal \\n and \\\\ in a parsed field."""
    if text is None:
        return ""
    if not isinstance(text, str):
        return str(text)
    return (
        text.replace("```json\n", "")
        .replace("```json", "")
        .replace("```\n", "")
        .replace("```", "")
        .replace("`", "")
        .replace("\\n", "\n")
        .replace("\\\\", "\\")
        .strip()
    )


def clean_code_example(data: Any) -> CodeExample | None:
    """Normalize a parsed codeExample object; None when absent or unusable."""
    if not data or not isinstance(data, dict):
        return None

    code = data.get("code") or ""
    if not isinstance(code, str):
        code = str(code)
    code = re.sub(r"```[\w]*\n?", "", code)
    code = re.sub(r"^// ", "", code, flags=re.MULTILINE)
    code = code.strip()

    return CodeExample(
        language=str(data.get("language") or "javascript"),
        code=code,
        explanation=str(data.get("explanation") or ""),
    )
