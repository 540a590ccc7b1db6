"""Bias-pattern scanner for generated job descriptions.

Deterministic and offline: a fixed table of word-bounded, case-insensitive
patterns, each with an issue label and a suggested replacement. Terms are
only matched as whole words, so "youngster" or "gurus" never trigger the
"young"/"guru" entries and are never rewritten.
"""

import re
from itertools import combinations

from hirely.schemas.jd import BiasFlag

BIAS_PATTERNS: list[tuple[re.Pattern, str, str]] = [
    (re.compile(r"\bninja\b", re.IGNORECASE), "Gendered/Age-biased term", "expert"),
    (re.compile(r"\brockstar\b", re.IGNORECASE), "Informal/Exclusionary", "high-performer"),
    (re.compile(r"\bguru\b", re.IGNORECASE), "Cultural appropriation", "specialist"),
    (re.compile(r"\bhustler\b", re.IGNORECASE), "Exclusionary language", "driven professional"),
    (re.compile(r"\byoung\b", re.IGNORECASE), "Age discrimination", "energetic"),
    (re.compile(r"\bhe/she\b", re.IGNORECASE), "Binary language", "they"),
    (re.compile(r"\bmanpower\b", re.IGNORECASE), "Gendered term", "workforce"),
    (re.compile(r"\bman hours\b", re.IGNORECASE), "Gendered term", "work hours"),
    (re.compile(r"\bchairman\b", re.IGNORECASE), "Gendered term", "chairperson"),
    (re.compile(r"\bfreshman\b", re.IGNORECASE), "Gendered term", "first-year"),
    (re.compile(r"\bnative speaker\b", re.IGNORECASE), "Potentially exclusionary", "fluent in English"),
    (re.compile(r"\bculture fit\b", re.IGNORECASE), "Can enable bias", "values alignment"),
    (re.compile(r"\bagg?ressive\b", re.IGNORECASE), "Gendered connotation", "ambitious"),
    (re.compile(r"\bseamless\b", re.IGNORECASE), "Ableist language", "smooth"),
]


def detect_bias(text: str) -> list[BiasFlag]:
    """One flag per distinct matched term, in table order then text order."""
    flags: list[BiasFlag] = []
    seen: set[str] = set()
    for pattern, issue, suggestion in BIAS_PATTERNS:
        for match in pattern.finditer(text):
            term = match.group(0)
            if term.lower() in seen:
                continue
            seen.add(term.lower())
            flags.append(BiasFlag(text=term, issue=issue, suggestion=suggestion))
    return flags


def _term_pattern(term: str) -> re.Pattern:
    return re.compile(r"(?<!\w)" + re.escape(term) + r"(?!\w)", re.IGNORECASE)


def fix_bias(text: str, term: str, suggestion: str) -> str:
    """Replace every case-insensitive whole-word occurrence of term."""
    if not term:
        return text
    return _term_pattern(term).sub(lambda _m: suggestion, text)


def fix_all_bias(text: str) -> str:
    """Apply every table entry, in table order."""
    for pattern, _issue, suggestion in BIAS_PATTERNS:
        text = pattern.sub(lambda _m, s=suggestion: s, text)
    return text


def find_overlapping_patterns(text: str) -> list[tuple[int, int]]:
    """Index pairs of table entries whose matches overlap somewhere in text.

    Replacement order only matters for such pairs; the table is built to
    have none.
    """
    spans = [
        [m.span() for m in pattern.finditer(text)]
        for pattern, _issue, _suggestion in BIAS_PATTERNS
    ]
    overlapping = []
    for (i, a), (j, b) in combinations(enumerate(spans), 2):
        if any(s1 < e2 and s2 < e1 for s1, e1 in a for s2, e2 in b):
            overlapping.append((i, j))
    return overlapping
