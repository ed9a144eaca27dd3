"""Small pure helpers shared by the builder."""

from __future__ import annotations

from typing import Iterable, List

from graphql.pyutils.suggestion_list import LexicalDistance

SUGGESTION_THRESHOLD = 2


def suggestion_list(
    query: str, candidates: Iterable[str], threshold: int = SUGGESTION_THRESHOLD
) -> List[str]:
    """Return ``candidates`` within ``threshold`` edits of ``query``.

    Results are ordered by distance; equal distances keep candidate order.
    Duplicate candidates are reported once.
    """

    distance = LexicalDistance(query)
    scored: dict[str, int] = {}
    for candidate in candidates:
        if candidate in scored:
            continue
        measured = distance.measure(candidate, threshold)
        if measured is not None:
            scored[candidate] = measured
    # sorted() is stable, so insertion order breaks ties
    return sorted(scored, key=scored.__getitem__)
