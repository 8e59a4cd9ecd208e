"""
Search stores — the open frontier and the closed (settled) set.

Invariants maintained together with the SearchEngine:
- Frontier and ClosedStore hold nodes for mutually exclusive sets of values.
- A node in the ClosedStore has the minimum term count of all candidates
  ever generated for its value, and is never changed again.
- The Frontier holds at most one live node per value.
"""

from __future__ import annotations

import heapq
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

from min_expression.domain import Number
from min_expression.errors import SearchInvariantError
from min_expression.expression import ExpressionNode


class ClosedStore:
    """Append-only map from value to its proven-minimal node."""

    def __init__(self):
        self._nodes: Dict[Number, ExpressionNode] = {}
        self._levels: Dict[int, List[ExpressionNode]] = defaultdict(list)

    def add(self, node: ExpressionNode) -> None:
        if node.value in self._nodes:
            raise SearchInvariantError(f"value {node.value} settled twice")
        self._nodes[node.value] = node
        self._levels[node.term_count].append(node)

    def get(self, value: Number) -> ExpressionNode:
        return self._nodes[value]

    def peers(self, max_cost: Optional[int] = None) -> Iterator[ExpressionNode]:
        """
        Settled nodes costing at most `max_cost`, cheapest level first.

        Levels are visited in ascending cost, so a caller can stop early once
        the remaining levels are too expensive to matter.
        """
        for cost in sorted(self._levels):
            if max_cost is not None and cost > max_cost:
                break
            yield from self._levels[cost]

    def __contains__(self, value) -> bool:
        return value in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ExpressionNode]:
        return iter(self._nodes.values())


class Frontier:
    """
    Open set: insert-or-improve plus extract-minimum by term count.

    Implemented as a binary heap of (term_count, sequence, value) records
    backed by an authoritative value -> (node, sequence) map. Improving a
    value pushes a fresh record and leaves the old one in the heap; the old
    record no longer matches the map's sequence number and is discarded when
    it reaches the top. Insertion is O(log n); extraction is amortized
    O(log n) including the stale records it skips.

    Ties between equal-cost nodes are broken by insertion order.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, Number]] = []
        self._entries: Dict[Number, Tuple[ExpressionNode, int]] = {}
        self._level_counts: Dict[int, int] = defaultdict(int)
        self._sequence = 0
        self._level = 0  # cost of the most recently extracted node

    # --- mutation -----------------------------------------------------------

    def insert_or_improve(self, node: ExpressionNode) -> bool:
        """
        Add `node`, or replace a strictly more expensive node for its value.

        Returns True if the frontier changed. A node that is not cheaper than
        the one already stored carries no new information and is dropped.
        """
        if node.term_count <= self._level:
            # Everything cheaper than the drained level is already settled.
            raise SearchInvariantError(
                f"node {node.value} costs {node.term_count} terms but the "
                f"frontier has already drained level {self._level}"
            )

        existing = self._entries.get(node.value)
        if existing is not None:
            if existing[0].term_count <= node.term_count:
                return False
            self._level_counts[existing[0].term_count] -= 1

        self._sequence += 1
        self._entries[node.value] = (node, self._sequence)
        self._level_counts[node.term_count] += 1
        heapq.heappush(self._heap, (node.term_count, self._sequence, node.value))
        return True

    def extract_min(self) -> ExpressionNode:
        """Remove and return a live node of minimum term count."""
        if not self._entries:
            raise SearchInvariantError("extract_min on an empty frontier")

        while self._heap:
            cost, sequence, value = heapq.heappop(self._heap)
            entry = self._entries.get(value)
            if entry is None or entry[1] != sequence:
                continue  # stale
            node = entry[0]
            if cost < self._level:
                raise SearchInvariantError(
                    f"frontier went back from level {self._level} to {cost}"
                )
            del self._entries[value]
            self._level_counts[cost] -= 1
            self._level = cost
            return node

        raise SearchInvariantError(
            f"{len(self._entries)} live entries but no heap record for them"
        )

    def prune(self, bound: int, keep: Optional[Number] = None) -> int:
        """
        Drop live entries costing `bound` or more, except the value `keep`.

        Stale records are compacted away at the same time. Returns the
        number of live entries removed.
        """
        doomed = [
            value for value, (node, _) in self._entries.items()
            if node.term_count >= bound and value != keep
        ]
        for value in doomed:
            node, _ = self._entries.pop(value)
            self._level_counts[node.term_count] -= 1

        self._heap = [
            record for record in self._heap
            if record[2] in self._entries and self._entries[record[2]][1] == record[1]
        ]
        heapq.heapify(self._heap)
        return len(doomed)

    # --- lookup -------------------------------------------------------------

    def get(self, value: Number) -> ExpressionNode:
        return self._entries[value][0]

    def __contains__(self, value) -> bool:
        return value in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # --- diagnostics --------------------------------------------------------

    @property
    def level(self) -> int:
        """Term count of the most recently extracted node (0 before any)."""
        return self._level

    @property
    def live_count(self) -> int:
        return len(self._entries)

    @property
    def stale_count(self) -> int:
        return len(self._heap) - len(self._entries)

    @property
    def size(self) -> int:
        """Physical number of heap records, stale ones included."""
        return len(self._heap)

    def level_size(self) -> int:
        """Live entries at the current minimum level."""
        return self._level_counts.get(self._level, 0)

    def __repr__(self) -> str:
        return (f"Frontier(live={self.live_count}, stale={self.stale_count}, "
                f"level={self._level})")
