"""Recover a JSON value from free-form model output.

Used by the call sites that do not run in provider JSON mode. Handles
markdown code fences and JSON embedded in prose. Embedded spans are found
with a delimiter scanner that tracks nesting depth and string/escape
state, so braces inside string values do not cut a payload short.
"""

import json
import re
from typing import Any, Optional

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)

_CLOSERS = {"{": "}", "[": "]"}


class NoJSONFoundError(ValueError):
    """No parseable JSON object or array was found in the text."""


def _scan_from(text: str, start: int) -> dict[int, Optional[int]]:
    """Scan from the opener at text[start] and settle every opener it passes.

    Maps each opener position seen outside a string to the index just past
    its closing delimiter, or None when it never closes (mismatch or end of
    text). A fresh scan from any of those positions would see the same
    characters in the same state, so its outcome is the same.
    """
    settled: dict[int, Optional[int]] = {}
    stack = [(start, _CLOSERS[text[start]])]
    in_string = False
    escaped = False
    for i in range(start + 1, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append((i, _CLOSERS[ch]))
        elif ch in ("}", "]"):
            if ch != stack[-1][1]:
                break
            opened_at, _ = stack.pop()
            settled[opened_at] = i + 1
            if not stack:
                return settled
    for opened_at, _ in stack:
        settled[opened_at] = None
    return settled


def find_json_span(text: str) -> Optional[str]:
    """Return the first balanced {...} or [...] span that parses, or None."""
    settled: dict[int, Optional[int]] = {}
    pos = 0
    while True:
        starts = [i for i in (text.find("{", pos), text.find("[", pos)) if i != -1]
        if not starts:
            return None
        start = min(starts)
        if start not in settled:
            settled.update(_scan_from(text, start))
        end = settled[start]
        if end is not None:
            candidate = text[start:end]
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                pass
        pos = start + 1


def extract_json(text: str) -> Any:
    """Parse JSON out of model output.

    Order: fenced code block, then the first balanced brace/bracket span.
    Raises NoJSONFoundError when neither yields valid JSON.
    """
    fence = _FENCE_RE.search(text)
    if fence:
        inner = fence.group(1).strip()
        try:
            return json.loads(inner)
        except json.JSONDecodeError:
            span = find_json_span(inner)
            if span is not None:
                return json.loads(span)

    span = find_json_span(text)
    if span is not None:
        return json.loads(span)

    raise NoJSONFoundError("No JSON found in response")


def parse_json_lenient(text: str) -> Any:
    """Strict json.loads first, then fall back to extract_json."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return extract_json(text)
