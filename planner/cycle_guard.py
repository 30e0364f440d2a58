"""Cycle checks over a preloaded ``blockedBy`` adjacency map."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

_ACTIVE = 1
_DONE = 2


def would_create_cycle(
    adjacency: Mapping[str, Sequence[str]],
    task: str,
    proposed_blocker: str,
) -> bool:
    """Return True when making ``task`` blocked by ``proposed_blocker`` closes a loop.

    The new edge closes a loop exactly when ``proposed_blocker`` already
    depends on ``task``, so the walk starts at the blocker and follows
    ``blockedBy`` edges looking for ``task``. A blocker missing from the map
    has no outgoing edges.
    """
    if task == proposed_blocker:
        return True

    visited: set[str] = set()
    stack: list[str] = [proposed_blocker]
    while stack:
        current = stack.pop()
        if current == task:
            return True
        if current in visited:
            continue
        visited.add(current)
        stack.extend(adjacency.get(current, ()))
    return False


def find_cycle(adjacency: Mapping[str, Sequence[str]]) -> list[str] | None:
    """Return one cycle as an ordered list of task ids, or None for a DAG.

    Each id in the result is blocked by the next one, and the last is
    blocked by the first. Edges to ids outside the map are ignored.
    """
    state: dict[str, int] = {}
    for root in adjacency:
        if root in state:
            continue
        state[root] = _ACTIVE
        path: list[str] = [root]
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(adjacency[root]))]
        while stack:
            node, edges = stack[-1]
            for nxt in edges:
                if nxt not in adjacency:
                    continue
                mark = state.get(nxt)
                if mark == _ACTIVE:
                    return path[path.index(nxt):]
                if mark is None:
                    state[nxt] = _ACTIVE
                    path.append(nxt)
                    stack.append((nxt, iter(adjacency[nxt])))
                    break
            else:
                state[node] = _DONE
                path.pop()
                stack.pop()
    return None
