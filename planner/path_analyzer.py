"""Transitive closures and critical path over a preloaded adjacency map."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from planner.models import CriticalPath

_Chain = tuple[float, list[str]]


def transitive_closure(adjacency: Mapping[str, Sequence[str]], origin: str) -> set[str]:
    """Return every task reachable from ``origin``, excluding ``origin`` itself.

    Ids referenced by an edge but absent from the map are dead ends and are
    not reported.
    """
    if origin not in adjacency:
        return set()

    visited: set[str] = set()
    stack: list[str] = [origin]
    while stack:
        current = stack.pop()
        if current in visited or current not in adjacency:
            continue
        visited.add(current)
        stack.extend(adjacency[current])

    visited.discard(origin)
    return visited


def critical_path(
    adjacency: Mapping[str, Sequence[str]],
    durations: Mapping[str, float],
    source: str,
    sink: str,
) -> CriticalPath:
    """Longest duration-weighted ``blockedBy`` chain ending at ``sink``.

    A task's value is its own duration plus the best value among all of its
    predecessors, or just its own duration when it has none. Values are
    memoized per task for this call only, and ties keep the first
    predecessor in edge-list order. The returned path runs from the head of
    the winning chain to ``sink``. When ``source`` or ``sink`` is missing
    from the scope the result is the sink's own duration alone.
    """
    if sink not in adjacency:
        return CriticalPath(length=0.0, path=[sink])
    if source not in adjacency:
        return CriticalPath(length=durations.get(sink, 0.0), path=[sink])

    memo: dict[str, _Chain] = {}
    expanding: set[str] = set()
    stack: list[str] = [sink]

    while stack:
        node = stack[-1]
        if node in memo:
            stack.pop()
            continue

        if node not in expanding:
            expanding.add(node)
            pending = [
                p
                for p in adjacency[node]
                if p in adjacency and p not in memo and p not in expanding
            ]
            if pending:
                stack.extend(reversed(pending))
                continue

        # Dangling ids and predecessors still expanding (a cycle) are skipped.
        expanding.discard(node)
        best: _Chain | None = None
        for pred in adjacency[node]:
            chain = memo.get(pred)
            if chain is not None and (best is None or chain[0] > best[0]):
                best = chain
        own = durations.get(node, 0.0)
        memo[node] = (own, [node]) if best is None else (own + best[0], best[1] + [node])
        stack.pop()

    length, path = memo[sink]
    return CriticalPath(length=length, path=path)
