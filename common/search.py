# common/search.py
"""
Typo-tolerant search over fixtures and leagues.

`FuzzyMatcher.search(pool, query, limit)` scores every item against the query
and returns the items whose best field similarity clears the threshold,
best first. Among equal scores, fields closer to the whole query rank first
("Inter" before "Internacional"); remaining ties keep their order from `pool`.

A field containing the query scores 100. Otherwise the query is compared with
rapidfuzz's `ratio` against the whole field and against every run of as many
words as the query has, so "Liverpol" still finds "Liverpool" while the
four letters "real" inside "Arsenal" do not pull in "Real Madrid".
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from rapidfuzz import fuzz, utils

from common.constants import FIXTURE_SEARCH_KEYS, FUZZY_THRESHOLD, LEAGUE_SEARCH_KEYS
from models.match_model import Fixture, League

Item = Union[Fixture, League]

DEFAULT_KEYS: Dict[type, Sequence[str]] = {
    Fixture: FIXTURE_SEARCH_KEYS,
    League: LEAGUE_SEARCH_KEYS,
}


def _resolve(item: object, path: str) -> str:
    """Follow a dotted attribute path ("home.name") and return text or ''."""
    val = item
    for part in path.split("."):
        val = getattr(val, part, None)
        if val is None:
            return ""
    return str(val)


def _word_spans(text: str, size: int) -> Iterator[str]:
    words = text.split()
    for i in range(len(words) - size + 1):
        yield " ".join(words[i:i + size])


class FuzzyMatcher:
    def __init__(
        self,
        threshold: float = FUZZY_THRESHOLD,
        keys: Optional[Dict[type, Sequence[str]]] = None,
        scorer: Callable[..., float] = fuzz.ratio,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold
        self.keys = keys or DEFAULT_KEYS
        self.scorer = scorer

    @property
    def min_score(self) -> float:
        # threshold 0.2 -> fields must be at least 80% similar
        return (1.0 - self.threshold) * 100.0

    def texts(self, item: object) -> List[str]:
        paths = self.keys.get(type(item), ())
        return [t for t in (_resolve(item, p) for p in paths) if t]

    def score(self, item: object, query: str) -> float:
        q = utils.default_process(query)
        if not q:
            return 0.0
        size = len(q.split())
        best = 0.0
        for text in self.texts(item):
            t = utils.default_process(text)
            if q in t:
                return 100.0
            best = max(best, self.scorer(q, t), *(self.scorer(q, s) for s in _word_spans(t, size)))
        return best

    def closeness(self, item: object, query: str) -> float:
        """Similarity of the query to the closest whole field."""
        q = utils.default_process(query)
        return max((fuzz.ratio(q, utils.default_process(t)) for t in self.texts(item)), default=0.0)

    def search(self, pool: Iterable[Item], query: str, limit: Optional[int] = None) -> List[Item]:
        if not query or not query.strip():
            return []
        scored: List[Tuple[float, float, int, Item]] = []
        for idx, item in enumerate(pool):
            s = self.score(item, query)
            if s >= self.min_score:
                scored.append((s, self.closeness(item, query), idx, item))
        scored.sort(key=lambda t: (-t[0], -t[1], t[2]))
        ranked = [item for _, _, _, item in scored]
        return ranked[:limit] if limit is not None else ranked
