"""
Query engine: free-text search plus an optional exact-match category filter.
"""

from dataclasses import dataclass
from typing import Optional

from directory_app.utils.records import DIRECTORY_FLOOR_FIELD, Dataset
from directory_app.utils.search_index import SearchIndex


@dataclass(frozen=True)
class SearchResult:
    records: Dataset
    match_count: int
    total_count: int
    query: str = ""
    is_final: bool = False


def apply_category_filter(records: Dataset, value: Optional[str], field: str) -> Dataset:
    """Keep records whose ``field`` equals ``value``; order is untouched."""
    if not value:
        return records
    return [r for r in records if r.get(field) == value]


def search(
    index: Optional[SearchIndex],
    dataset: Dataset,
    query: str,
    category_filter: Optional[str] = None,
    category_field: str = DIRECTORY_FLOOR_FIELD,
    is_final: bool = False,
) -> SearchResult:
    """
    Run a search over ``dataset``.

    An empty or whitespace-only query returns the whole dataset in source order
    without touching the index. Otherwise the index's ranked hits are used. The
    category filter, when given, only removes records.
    """
    q = (query or "").strip()

    if q and index is not None:
        results = [hit.item for hit in index.search(q)]
    elif q:
        results = []
    else:
        results = list(dataset)

    results = apply_category_filter(results, category_filter, category_field)

    return SearchResult(
        records=results,
        match_count=len(results),
        total_count=len(dataset),
        query=q,
        is_final=is_final,
    )
