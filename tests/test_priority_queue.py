"""Tests for the binary heap priority queue."""

import operator
import random

from swatchcut.core.priority_queue import PriorityQueue


class TestPriorityQueue:
    """Heap ordering with caller-supplied comparators."""

    def test_max_heap_polls_in_descending_order(self):
        rng = random.Random(7)
        values = [rng.randrange(1000) for _ in range(200)]
        queue = PriorityQueue(operator.gt, values)

        polled = [queue.poll() for _ in range(len(values))]

        assert polled == sorted(values, reverse=True)
        assert len(queue) == 0

    def test_min_heap_polls_in_ascending_order(self):
        queue = PriorityQueue(operator.lt)
        queue.offer_all([5, 3, 9, 1, 7])

        assert queue.peek() == 1
        assert [queue.poll() for _ in range(5)] == [1, 3, 5, 7, 9]

    def test_poll_and_peek_on_empty_queue(self):
        queue = PriorityQueue(operator.gt)

        assert queue.poll() is None
        assert queue.peek() is None
        assert not queue

    def test_comparator_on_attribute(self):
        items = [{"name": "a", "volume": 3}, {"name": "b", "volume": 10}, {"name": "c", "volume": 1}]
        queue = PriorityQueue(lambda x, y: x["volume"] > y["volume"], items)

        assert queue.poll()["name"] == "b"
        queue.offer({"name": "d", "volume": 5})
        assert [queue.poll()["name"] for _ in range(3)] == ["d", "a", "c"]

    def test_data_is_a_copy_in_heap_order(self):
        queue = PriorityQueue(operator.gt, [1, 2, 3])
        data = queue.data

        assert data[0] == 3
        assert sorted(data) == [1, 2, 3]
        data.clear()
        assert len(queue) == 3
        assert sorted(queue) == [1, 2, 3]
