"""
Indexed Min-Priority Queue

A priority queue of distinct keys, each associated with an extrinsic integer
priority, implemented as a binary heap over a list paired with a dict that
maps every key to its current slot in the heap.

The index map gives O(1) membership and priority lookup and lets an existing
key's priority be changed in O(log n), which a plain heapq cannot do.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterator, List, Tuple


class EmptyQueue(IndexError):
    """Raised when the minimum of an empty queue is requested."""


class IndexedMinQueue:
    """
    Min-heap of (key, priority) entries with a key -> heap-slot index.

    Invariants (re-established by every mutating method):
        heap[i][1] >= heap[(i - 1) // 2][1] for every i > 0
        heap[index[key]][0] == key for every key in the queue
        len(index) == len(heap)
    """

    def __init__(self):
        self._heap: List[Tuple[Hashable, int]] = []
        self._index: Dict[Hashable, int] = {}
        assert self.check_invariant()

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, key) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Hashable]:
        return iter([key for key, _ in self._heap])

    def __repr__(self) -> str:
        return f"IndexedMinQueue(size={len(self._heap)})"

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def contains(self, key) -> bool:
        return key in self._index

    def priority(self, key) -> int:
        """Current priority of `key`. Requires `key` to be in the queue."""
        assert key in self._index, f"{key!r} is not in the queue"
        return self._heap[self._index[key]][1]

    def peek_min(self):
        """
        Return a key tied for the smallest priority without removing it.

        This is the key the next `remove_min()` returns if nothing changes
        in between.
        """
        if not self._heap:
            raise EmptyQueue("peek_min() on an empty queue")
        return self._heap[0][0]

    def min_priority(self) -> int:
        if not self._heap:
            raise EmptyQueue("min_priority() on an empty queue")
        return self._heap[0][1]

    def add_or_update(self, key, priority: int) -> None:
        """
        Insert `key` with `priority`, or change its priority if already present.
        """
        if key in self._index:
            self._update(key, priority)
        else:
            self._add(key, priority)

    def remove_min(self):
        """
        Remove and return a key with the smallest priority.

        Ties are broken arbitrarily.

        Raises:
            EmptyQueue: if the queue holds no keys
        """
        if not self._heap:
            raise EmptyQueue("remove_min() on an empty queue")

        root = self._heap[0][0]
        last = len(self._heap) - 1
        self._swap(0, last)
        self._heap.pop()
        del self._index[root]
        if self._heap:
            self._bubble_down(0)
        assert self.check_invariant()
        return root

    def clear(self) -> None:
        self._heap.clear()
        self._index.clear()
        assert self.check_invariant()

    def check_invariant(self) -> bool:
        """
        Assert heap order and index consistency. Returns True so it can be
        used as `assert q.check_invariant()`.
        """
        heap = self._heap
        for i in range(1, len(heap)):
            parent = (i - 1) // 2
            assert heap[i][1] >= heap[parent][1], (
                f"heap order broken at {i}: {heap[i][1]} < parent {heap[parent][1]}"
            )
        for i, (key, _) in enumerate(heap):
            assert self._index.get(key) == i, f"index of {key!r} is not {i}"
        assert len(self._index) == len(heap)
        return True

    def _add(self, key, priority: int) -> None:
        assert key not in self._index
        # New entry goes in the leftmost free slot of the bottom layer.
        self._index[key] = len(self._heap)
        self._heap.append((key, priority))
        self._bubble_up(len(self._heap) - 1)
        assert self.check_invariant()

    def _update(self, key, priority: int) -> None:
        assert key in self._index, f"{key!r} is not in the queue"
        i = self._index[key]
        old = self._heap[i][1]
        if priority == old:
            return
        self._heap[i] = (key, priority)

        if priority < old:
            self._bubble_up(i)
        elif priority > old:
            self._bubble_down(i)
        assert self.check_invariant()

    def _swap(self, i: int, j: int) -> None:
        """Swap heap slots `i` and `j` and repoint both keys in the index."""
        heap = self._heap
        assert 0 <= i < len(heap) and 0 <= j < len(heap)
        heap[i], heap[j] = heap[j], heap[i]
        self._index[heap[i][0]] = i
        self._index[heap[j][0]] = j

    def _bubble_up(self, i: int) -> None:
        heap = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if heap[parent][1] <= heap[i][1]:
                break
            self._swap(parent, i)
            i = parent

    def _bubble_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = 2 * i + 1
            right = left + 1
            if left >= n:
                break

            # Swap with whichever child has the smaller priority.
            child = left
            if right < n and heap[right][1] < heap[left][1]:
                child = right
            if heap[child][1] >= heap[i][1]:
                break
            self._swap(child, i)
            i = child
