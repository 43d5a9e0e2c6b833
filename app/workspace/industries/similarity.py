"""Ranks canonical industries against a free-text industry name."""
import re
from typing import Dict, Iterable, List

from rapidfuzz import fuzz

MIN_SCORE = 40
MAX_SUGGESTIONS = 3

# weights sum to 1
WEIGHT_EDIT = 0.35
WEIGHT_TOKENS = 0.40
WEIGHT_PARTIAL = 0.25

NOISE_WORDS = {"and", "the", "of", "for", "in", "on", "at", "to", "a", "an"}


def normalize(text: str) -> str:
    text = (text or "").strip().lower().replace("&", " and ")
    text = re.sub(r"[^a-z0-9\s]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def meaningful_tokens(text: str) -> str:
    return " ".join(w for w in normalize(text).split() if len(w) >= 2 and w not in NOISE_WORDS)


def similarity(a: str, b: str) -> int:
    """0-100. Edit distance catches typos, token overlap catches reordering,
    partial matching catches one name contained in the other."""
    left, right = normalize(a), normalize(b)
    edit = fuzz.ratio(left, right)
    tokens = fuzz.token_set_ratio(meaningful_tokens(a), meaningful_tokens(b))
    partial = fuzz.partial_ratio(left, right)
    return int(round(edit * WEIGHT_EDIT + tokens * WEIGHT_TOKENS + partial * WEIGHT_PARTIAL))


def suggest(name: str, industries: Iterable) -> List[Dict]:
    """Best canonical matches for ``name``, highest score first."""
    target = normalize(name)
    if not target:
        return []

    results = []
    for industry in industries:
        if normalize(industry.name) == target:
            return [{"id": industry.id, "name": industry.name, "score": 100}]
        score = similarity(name, industry.name)
        if score >= MIN_SCORE:
            results.append({"id": industry.id, "name": industry.name, "score": score})

    results.sort(key=lambda r: (-r["score"], r["name"]))
    return results[:MAX_SUGGESTIONS]
