"""
Binary min-heap with a reverse index from value to heap slot.

Values must be unique and hashable. Keeping the reverse index in step with
every swap lets a caller lower the priority of an arbitrary value in
O(log n) instead of scanning the heap for it, which is what Dijkstra's
relaxation step needs.
"""

from typing import Any, Dict, Hashable, List, Optional, Tuple


class IndexedMinHeap:
    """Min-heap of (key, value) pairs ordered by key.

    Ordering between pairs with equal keys is unspecified.
    """

    def __init__(self):
        self._heap: List[List[Any]] = []  # Each entry is [key, value]
        self._positions: Dict[Hashable, int] = {}  # value -> index in self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, value: Hashable) -> bool:
        return value in self._positions

    @staticmethod
    def _parent(idx: int) -> int:
        return (idx - 1) // 2

    @staticmethod
    def _left_child(idx: int) -> int:
        return idx * 2 + 1

    @staticmethod
    def _right_child(idx: int) -> int:
        return idx * 2 + 2

    def _swap(self, a: int, b: int) -> None:
        """Swap two slots and refresh the reverse index for both."""
        heap = self._heap
        heap[a], heap[b] = heap[b], heap[a]
        self._positions[heap[a][1]] = a
        self._positions[heap[b][1]] = b

    def _bubble_up(self, idx: int) -> None:
        heap = self._heap
        while idx > 0:
            parent = self._parent(idx)
            if not heap[idx][0] < heap[parent][0]:
                break
            self._swap(idx, parent)
            idx = parent
        self._positions[heap[idx][1]] = idx

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = self._left_child(idx)
            right = self._right_child(idx)
            smallest = idx
            if left < n and heap[left][0] < heap[smallest][0]:
                smallest = left
            if right < n and heap[right][0] < heap[smallest][0]:
                smallest = right
            if smallest == idx:
                break
            self._swap(idx, smallest)
            idx = smallest

    def insert(self, key: Any, value: Hashable) -> None:
        """Add a value with the given key.

        The value must not already be in the heap.
        """
        assert value not in self._positions, f"value {value!r} already in heap"
        self._heap.append([key, value])
        # _bubble_up also records the reverse index for the new entry
        self._bubble_up(len(self._heap) - 1)

    def pop(self) -> Optional[Tuple[Any, Hashable]]:
        """Remove and return the (key, value) pair with the smallest key.

        Returns None if the heap is empty.
        """
        if not self._heap:
            return None

        last_idx = len(self._heap) - 1
        if last_idx > 0:
            self._swap(0, last_idx)

        key, value = self._heap.pop()
        del self._positions[value]

        if self._heap:
            self._sift_down(0)

        return key, value

    def peek(self) -> Optional[Tuple[Any, Hashable]]:
        if not self._heap:
            return None
        key, value = self._heap[0]
        return key, value

    def decrease_key(self, value: Hashable, new_key: Any) -> None:
        """Lower the key of a value already in the heap.

        Raises AssertionError if the value is absent or new_key is not
        strictly smaller than the current key. Either case means the caller
        is broken, not that the input data is bad.
        """
        idx = self._positions.get(value)
        assert idx is not None, f"value {value!r} not in heap"
        entry = self._heap[idx]
        assert new_key < entry[0], (
            f"decrease_key for {value!r} must lower the key "
            f"(current {entry[0]!r}, requested {new_key!r})"
        )
        entry[0] = new_key
        self._bubble_up(idx)

    def get_key(self, value: Hashable) -> Optional[Any]:
        """Current key for value, or None if it is not in the heap."""
        idx = self._positions.get(value)
        if idx is None:
            return None
        return self._heap[idx][0]

    def insert_or_decrease(self, value: Hashable, key: Any) -> None:
        """Insert value, or lower its key if key beats the stored one."""
        current = self.get_key(value)
        if current is None:
            self.insert(key, value)
        elif key < current:
            self.decrease_key(value, key)
