# site_mirror/crawler/frontier.py
"""
Frontier bookkeeping. All functions are pure and return new frozensets, so the
orchestrator can hand an immutable snapshot of the visited set to each
iteration and only replace it between iterations.
"""
from __future__ import annotations

from typing import AbstractSet, Iterable, List, Tuple

from site_mirror.crawler.models import FetchFailure, FetchOutcome, FetchSuccess


def compute_next(discovered: AbstractSet[str], visited: AbstractSet[str]) -> frozenset[str]:
    """URLs found but never dispatched: ``discovered - visited``."""
    return frozenset(discovered) - frozenset(visited)


def merge_visited(visited: AbstractSet[str], batch: Iterable[str]) -> frozenset[str]:
    """``visited | batch``; called with a frontier right before it is dispatched."""
    return frozenset(visited).union(batch)


def partition_outcomes(
    outcomes: Iterable[FetchOutcome],
) -> Tuple[List[FetchSuccess], List[FetchFailure]]:
    successes: List[FetchSuccess] = []
    failures: List[FetchFailure] = []
    for outcome in outcomes:
        if isinstance(outcome, FetchSuccess):
            successes.append(outcome)
        else:
            failures.append(outcome)
    return successes, failures


def union_links(successes: Iterable[FetchSuccess]) -> frozenset[str]:
    links: set[str] = set()
    for outcome in successes:
        links.update(outcome.links)
    return frozenset(links)
