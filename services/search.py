"""
Relevance search over the ingredient catalog.

The same functions rank results for the server endpoint and for the
client-side catalog mirror, so both produce identical orderings:

1. queries shorter than the minimum length (after trimming) return nothing;
2. the query is split on whitespace and lowercased into terms;
3. an entry matches when its lowercased name contains every term;
4. matches sort by (first term is a prefix? 0 : 1, index of the first
   term in the name, lowercased name);
5. the result is capped by the caller-supplied limit.
"""

from typing import Iterable, List, Protocol, Tuple, TypeVar

MIN_QUERY_LENGTH = 2


class Named(Protocol):
    name: str


T = TypeVar("T", bound=Named)


def query_terms(query: str) -> List[str]:
    """Lowercased whitespace-separated terms of a query."""
    return (query or "").lower().split()


def is_searchable(query: str, min_length: int = MIN_QUERY_LENGTH) -> bool:
    return len((query or "").strip()) >= min_length


def matches(name: str, terms: List[str]) -> bool:
    """True when every term is a case-insensitive substring of ``name``."""
    lowered = (name or "").lower()
    return all(term in lowered for term in terms)


def relevance_key(name: str, first_term: str) -> Tuple[int, int, str]:
    lowered = (name or "").lower()
    return (
        0 if lowered.startswith(first_term) else 1,
        lowered.find(first_term),
        lowered,
    )


def search_catalog(
    query: str,
    catalog: Iterable[T],
    limit: int,
    min_length: int = MIN_QUERY_LENGTH,
) -> List[T]:
    """
    Filter and rank ``catalog`` entries for ``query``.

    Ties on the full relevance key keep the catalog's input order (the sort
    is stable), so callers should pass the catalog in a deterministic order.
    """
    if not is_searchable(query, min_length):
        return []
    terms = query_terms(query)
    if not terms:
        return []
    first = terms[0]
    found = [entry for entry in catalog if matches(entry.name, terms)]
    found.sort(key=lambda entry: relevance_key(entry.name, first))
    return found[: max(limit, 0)]
