"""Binary heap with a caller-supplied ordering."""

from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Binary heap over a dense list.

    ``compare(a, b)`` returns True when ``a`` has higher priority than ``b``
    and should sit closer to the root. Passing ``operator.gt`` on comparable
    items gives a max-heap, ``operator.lt`` a min-heap.
    """

    def __init__(self, compare: Callable[[T, T], bool], items: Iterable[T] = ()):
        self._compare = compare
        self._data: List[T] = []
        self.offer_all(items)

    @property
    def data(self) -> List[T]:
        """Copy of the heap array, in heap order."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._data))

    def offer(self, item: T) -> None:
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def offer_all(self, items: Iterable[T]) -> None:
        for item in items:
            self.offer(item)

    def peek(self) -> Optional[T]:
        return self._data[0] if self._data else None

    def poll(self) -> Optional[T]:
        """Remove and return the highest-priority item, or None when empty."""
        if not self._data:
            return None

        result = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            self._sift_down(0)
        return result

    def _sift_up(self, child_index: int) -> None:
        target = self._data[child_index]

        while child_index > 0:
            parent_index = (child_index - 1) // 2
            parent = self._data[parent_index]
            if not self._compare(target, parent):
                break
            self._data[child_index] = parent
            child_index = parent_index

        self._data[child_index] = target

    def _sift_down(self, root_index: int) -> None:
        target = self._data[root_index]
        size = len(self._data)

        child_index = root_index * 2 + 1
        while child_index < size:
            right = child_index + 1
            if right < size and self._compare(self._data[right], self._data[child_index]):
                child_index = right
            if not self._compare(self._data[child_index], target):
                break
            self._data[root_index] = self._data[child_index]
            root_index = child_index
            child_index = root_index * 2 + 1

        self._data[root_index] = target
