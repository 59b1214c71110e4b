"""
Weighted fuzzy search index over a dataset snapshot.

String similarity comes from rapidfuzz. Scores follow the usual fuzzy-search
convention: 0.0 is a perfect match, 1.0 no match at all.

- Each indexed field gets a distance of ``1 - similarity / 100``.
- A field counts as a hit when its distance is within the threshold.
- A record's score combines its hit fields, each raised to its normalised weight,
  so heavier fields pull the score down harder.
"""

import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from rapidfuzz import fuzz, process

from directory_app.utils.records import Dataset, Record

EPSILON = sys.float_info.epsilon

# Characters of offset that cost a full point of distance when location matters
LOCATION_DISTANCE = 100

KeySpec = Union[Sequence[str], Mapping[str, float]]


@dataclass(frozen=True)
class SearchHit:
    item: Record
    ref_index: int
    score: float


def _normalise_keys(keys: KeySpec) -> List[Tuple[str, float]]:
    if isinstance(keys, Mapping):
        weighted = [(name, float(weight)) for name, weight in keys.items()]
    else:
        weighted = [(name, 1.0) for name in keys]

    for name, weight in weighted:
        if weight <= 0:
            raise ValueError(f"Weight for key '{name}' must be positive, got {weight}")

    total = sum(weight for _, weight in weighted)
    return [(name, weight / total) for name, weight in weighted] if total else []


def _best_window(query: str, text: str) -> Tuple[float, int]:
    """Best ratio of ``query`` against text windows of the query's own width, and its offset."""
    pos = text.find(query)
    if pos >= 0:
        return 100.0, pos

    width = len(query)
    windows = [text[i:i + width] for i in range(len(text) - width + 1)]
    _, score, pos = process.extractOne(query, windows, scorer=fuzz.ratio)
    return score, pos


def field_distance(query: str, text: str, ignore_location: bool = True) -> float:
    """
    Distance between a lower-cased query and lower-cased field text.

    When the query is longer than the text the whole strings are compared;
    otherwise only full-width windows of the text are scored, so a query never
    matches on a fragment shorter than itself.
    """
    if not query or not text:
        return 1.0

    if len(query) > len(text):
        return 1.0 - fuzz.ratio(query, text) / 100.0

    score, offset = _best_window(query, text)
    distance = 1.0 - score / 100.0
    if ignore_location:
        return distance
    return min(1.0, distance + offset / LOCATION_DISTANCE)


class SearchIndex:
    """
    Read-only fuzzy index built from a dataset and a field-weight configuration.

    ``keys`` is either a list of field names (uniform weight) or a mapping of
    field name to relative weight. The index keeps its own copy of the record
    list, so replacing the source dataset never changes an existing index.
    """

    def __init__(
        self,
        records: Dataset,
        keys: KeySpec,
        threshold: float = 0.4,
        ignore_location: bool = True,
    ):
        self.records: Tuple[Record, ...] = tuple(records)
        self.keys = _normalise_keys(keys)
        self.threshold = threshold
        self.ignore_location = ignore_location

        # lower-cased field text per record, in key order
        self._docs: List[List[str]] = [
            [str(record.get(name) or "").lower() for name, _ in self.keys]
            for record in self.records
        ]

    def __len__(self) -> int:
        return len(self.records)

    def _score(self, query: str, doc: List[str]) -> Optional[float]:
        score = 1.0
        matched = False
        for (_, weight), text in zip(self.keys, doc):
            distance = field_distance(query, text, self.ignore_location)
            if distance > self.threshold:
                continue
            matched = True
            score *= max(distance, EPSILON) ** weight
        return score if matched else None

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchHit]:
        """Ranked hits for ``query``, best first; ties keep dataset order."""
        q = (query or "").strip().lower()
        if not q or not self.keys:
            return []

        hits = []
        for idx, doc in enumerate(self._docs):
            score = self._score(q, doc)
            if score is not None:
                hits.append(SearchHit(item=self.records[idx], ref_index=idx, score=score))

        hits.sort(key=lambda h: (h.score, h.ref_index))
        return hits[:limit] if limit else hits


def build_index(
    records: Dataset,
    weights: Optional[Dict[str, float]] = None,
    threshold: float = 0.4,
    ignore_location: bool = True,
) -> SearchIndex:
    """
    Build an index over ``records``.

    Without explicit weights every header field is indexed with equal weight.
    """
    keys: KeySpec = weights if weights else (list(records[0].keys()) if records else [])
    return SearchIndex(records, keys, threshold=threshold, ignore_location=ignore_location)
