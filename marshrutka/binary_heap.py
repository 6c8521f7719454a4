"""A binary max-heap ordered by an injected comparison function.

:mod:`heapq` only knows the natural ordering of its items.  The
pathfinder needs to order paths by whatever composite comparator the
user picked (and to invert it to get a min-heap), so the heap takes a
``compare(a, b) -> int`` function in the style of
:func:`functools.cmp_to_key`: negative if ``a < b``, zero if equal,
positive if ``a > b``.  The greatest item is on top.
"""

from contextlib import contextmanager


class BinaryHeap:
    __slots__ = ("_compare", "_data")

    def __init__(self, compare, iterable=()):
        self._compare = compare
        self._data = list(iterable)
        self._rebuild()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __iter__(self):
        """Iterate over the items in arbitrary (storage) order."""
        return iter(self._data)

    def __repr__(self) -> str:
        return f"BinaryHeap({self._data!r})"

    def push(self, item):
        self._data.append(item)
        self._sift_up(0, len(self._data) - 1)

    def pop(self):
        """Remove and return the greatest item.

        Raises
        ------
        IndexError
            If the heap is empty.
        """
        if not self._data:
            raise IndexError("pop from an empty heap")
        item = self._data.pop()
        if self._data:
            item, self._data[0] = self._data[0], item
            self._sift_down_to_bottom(0)
        return item

    def peek(self):
        """Greatest item, or ``None`` if the heap is empty."""
        return self._data[0] if self._data else None

    @contextmanager
    def peek_mut(self):
        """Give mutable access to the greatest item.

        The heap property is restored when the block exits, so the item
        may be changed in place in a way that lowers its rank::

            with heap.peek_mut() as top:
                top.priority -= 1
        """
        if not self._data:
            raise IndexError("peek into an empty heap")
        try:
            yield self._data[0]
        finally:
            self._sift_down(0)

    def replace_top(self, item):
        """Pop the greatest item and push ``item`` in one sift."""
        if not self._data:
            raise IndexError("replace on an empty heap")
        top, self._data[0] = self._data[0], item
        self._sift_down(0)
        return top

    def extend(self, items):
        items = list(items)
        # rebuilding is cheaper than pushing one by one when the batch is large
        if len(items) > len(self._data) // 2:
            self._data.extend(items)
            self._rebuild()
        else:
            for item in items:
                self.push(item)

    def clear(self):
        self._data.clear()

    def into_list(self) -> list:
        """Underlying storage, in arbitrary order.  The heap is emptied."""
        data, self._data = self._data, []
        return data

    def into_sorted_list(self) -> list:
        """Items in ascending order.  The heap is emptied."""
        data = self._data
        end = len(data)
        while end > 1:
            end -= 1
            data[0], data[end] = data[end], data[0]
            self._sift_down_range(0, end)
        self._data = []
        return data

    # ------------------------------------------------------------------

    def _greater(self, a, b) -> bool:
        return self._compare(a, b) > 0

    def _sift_up(self, start: int, pos: int) -> int:
        data = self._data
        item = data[pos]
        while pos > start:
            parent = (pos - 1) // 2
            if not self._greater(item, data[parent]):
                break
            data[pos] = data[parent]
            pos = parent
        data[pos] = item
        return pos

    def _sift_down_range(self, pos: int, end: int):
        data = self._data
        item = data[pos]
        child = 2 * pos + 1
        while child < end:
            right = child + 1
            if right < end and not self._greater(data[child], data[right]):
                child = right
            if not self._greater(data[child], item):
                break
            data[pos] = data[child]
            pos = child
            child = 2 * pos + 1
        data[pos] = item

    def _sift_down(self, pos: int):
        self._sift_down_range(pos, len(self._data))

    def _sift_down_to_bottom(self, pos: int):
        # Move the hole all the way down, then sift the item back up.
        # Popped items tend to belong near the bottom, which saves
        # comparisons on average.
        data = self._data
        end = len(data)
        start = pos
        item = data[pos]
        child = 2 * pos + 1
        while child <= end - 2:
            if not self._greater(data[child], data[child + 1]):
                child += 1
            data[pos] = data[child]
            pos = child
            child = 2 * pos + 1
        if child == end - 1:
            data[pos] = data[child]
            pos = child
        data[pos] = item
        self._sift_up(start, pos)

    def _rebuild(self):
        for pos in reversed(range(len(self._data) // 2)):
            self._sift_down(pos)
