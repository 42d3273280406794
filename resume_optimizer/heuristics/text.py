from __future__ import annotations

import re
from functools import lru_cache

_BULLET_CHARS = "-•·"
_BULLET_PATTERN = re.compile(rf"^\s*[{re.escape(_BULLET_CHARS)}]\s*")
_BULLET_LINE_RE = re.compile(rf"(?:^|\n)[ \t]*[{re.escape(_BULLET_CHARS)}]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_ESCAPED_NULL_RE = re.compile(r"\\u0000")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\u00a0]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_EMAIL_RE = re.compile(r"(?<![\w.+-])[\w.+-]+@\w+\.[\w.-]+")
_PHONE_CANDIDATE_RE = re.compile(r"\+?\(?\d[\d \t().-]{7,}\d")
_URL_RE = re.compile(r"(?:https?://|www\.|linkedin\.com|github\.com)", re.IGNORECASE)
_NUMERIC_TOKEN_RE = re.compile(r"[$€£]?\d+(?:[.,]\d+)*(?:\s?%|[kKmMxX]\b)?")
_MONTHS = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*"
_DATE_RANGE_RE = re.compile(
    rf"(?<![a-z]){_MONTHS}\.?\s?\d{{4}}\s*[-–—]\s*(?:present|current|{_MONTHS}\.?\s?\d{{4}})"
    r"|\b\d{4}\s*[-–—]\s*(?:present|current|\d{4})\b",
    re.IGNORECASE,
)
_WORD_RE = re.compile(r"[a-z0-9][a-z0-9+#.]*", re.IGNORECASE)

PHONE_MIN_DIGITS = 9
PHONE_MAX_DIGITS = 15


def sanitize_text(text: str | None) -> str:
    """Strip control characters and squeeze horizontal whitespace, keeping line breaks."""
    if not text:
        return ""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _ESCAPED_NULL_RE.sub("", cleaned)
    cleaned = _CONTROL_RE.sub("", cleaned)
    lines = [_HORIZONTAL_SPACE_RE.sub(" ", line).strip() for line in cleaned.split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def truncate_text(text: str, max_chars: int) -> str:
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[:max_chars]


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def non_empty_lines(text: str) -> list[str]:
    return [stripped for stripped in (normalize_line(line) for line in text.splitlines()) if stripped]


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def count_bullet_lines(text: str) -> int:
    return len(_BULLET_LINE_RE.findall(text))


def count_words(text: str) -> int:
    return len(text.split())


def words_of(text: str, *, min_length: int = 1) -> set[str]:
    words = (word.rstrip(".") for word in _WORD_RE.findall(text.lower()))
    return {word for word in words if len(word) >= min_length}


def find_email(text: str) -> str:
    match = _EMAIL_RE.search(text)
    return match.group(0) if match else ""


def _phone_digits_ok(candidate: str) -> bool:
    digits = sum(1 for char in candidate if char.isdigit())
    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


def find_phone(text: str) -> str:
    for match in _PHONE_CANDIDATE_RE.finditer(text):
        candidate = match.group(0).strip()
        if _phone_digits_ok(candidate):
            return candidate
    return ""


def has_email(text: str) -> bool:
    return bool(_EMAIL_RE.search(text))


def has_phone(text: str) -> bool:
    return bool(find_phone(text))


def is_contact_or_url(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    return bool(_EMAIL_RE.search(stripped) or find_phone(stripped) or _URL_RE.search(stripped))


def has_date_range(text: str) -> bool:
    return bool(_DATE_RANGE_RE.search(text))


def strip_contact_details(text: str) -> str:
    without_email = _EMAIL_RE.sub(" ", text)
    return _PHONE_CANDIDATE_RE.sub(
        lambda match: " " if _phone_digits_ok(match.group(0)) else match.group(0),
        without_email,
    )


def distinct_numeric_tokens(text: str) -> set[str]:
    return {token.replace(" ", "").lower() for token in _NUMERIC_TOKEN_RE.findall(text)}


@lru_cache(maxsize=2048)
def term_pattern(term: str) -> re.Pattern[str]:
    escaped = r"\s+".join(re.escape(part) for part in term.lower().split())
    return re.compile(rf"(?<![a-z0-9]){escaped}(?![a-z0-9])", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    return bool(term and term_pattern(term).search(text))


def contains_any_term(text: str, terms: tuple[str, ...]) -> bool:
    return any(contains_term(text, term) for term in terms)


def first_term(text: str, terms: tuple[str, ...]) -> str | None:
    for term in terms:
        if contains_term(text, term):
            return term
    return None


def count_term_occurrences(text: str, terms: tuple[str, ...]) -> int:
    return sum(len(term_pattern(term).findall(text)) for term in terms if term)


def distinct_terms(text: str, terms: tuple[str, ...]) -> list[str]:
    return [term for term in dict.fromkeys(terms) if contains_term(text, term)]


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)
