"""Tests for delivery channels and the completion barrier."""

import queue
import threading

import pytest

from gifhub.pipeline.channel import Channel, ChannelClosed, CompletionBarrier

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


class TestChannel:

    def test_fifo_until_closed(self):
        ch = Channel("test", capacity=3)
        for item in ("a", "b", "c"):
            ch.put(item)
        ch.close()

        assert list(ch) == ["a", "b", "c"]

    def test_put_never_blocks_at_capacity(self):
        ch = Channel("test", capacity=2)
        ch.put(1)
        ch.put(2)
        ch.close()  # the close marker has its own slot

        assert list(ch) == [1, 2]

    def test_put_beyond_capacity_raises(self):
        ch = Channel("test", capacity=1)
        ch.put(1)
        ch.put(2)  # slot reserved for the close marker
        with pytest.raises(queue.Full):
            ch.put(3)

    def test_put_after_close(self):
        ch = Channel("test")
        ch.close()
        with pytest.raises(ChannelClosed, match="test"):
            ch.put(1)

    def test_close_is_idempotent(self):
        ch = Channel("test")
        ch.close()
        ch.close()
        assert ch.closed
        assert list(ch) == []

    def test_iterating_twice_after_close(self):
        ch = Channel("test")
        ch.put(1)
        ch.close()

        assert list(ch) == [1]
        assert list(ch) == []

    def test_get_times_out_while_open(self):
        ch = Channel("test")
        with pytest.raises(queue.Empty):
            ch.get(timeout=0.01)

    def test_consumer_blocks_until_producer_closes(self):
        ch = Channel("test")
        received = []
        consumer = threading.Thread(target=lambda: received.extend(ch))
        consumer.start()

        ch.put("x")
        ch.close()
        consumer.join(timeout=5)

        assert not consumer.is_alive()
        assert received == ["x"]


class TestCompletionBarrier:

    def test_not_complete_before_expect(self):
        barrier = CompletionBarrier()
        barrier.done()
        assert barrier.wait(timeout=0.01) is False

    def test_zero_tasks(self):
        barrier = CompletionBarrier()
        barrier.expect(0)
        assert barrier.wait(timeout=0) is True

    def test_waits_for_all_tasks(self):
        barrier = CompletionBarrier()
        release = threading.Event()

        def task():
            release.wait(5)
            barrier.done()

        threads = [threading.Thread(target=task) for _ in range(5)]
        for t in threads:
            t.start()
        barrier.expect(len(threads))

        assert barrier.wait(timeout=0.05) is False
        release.set()
        assert barrier.wait(timeout=5) is True
        assert barrier.finished == 5
