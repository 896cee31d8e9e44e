"""
tests/core/test_browser_timer.py - RefreshTimer / CallGate 테스트
"""

import threading
import time

import pytest

from core.browser import CallGate, RefreshTimer


class TestRefreshTimer:
    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            RefreshTimer(0, lambda: None)

    def test_ticks(self):
        ticked = threading.Event()
        timer = RefreshTimer(0.01, ticked.set)
        timer.start()
        try:
            assert ticked.wait(2.0)
            assert timer.active is True
        finally:
            timer.stop()
        assert timer.active is False

    def test_no_tick_after_stop(self):
        """stop() 반환 후에는 on_tick이 호출되지 않음"""
        calls = []
        timer = RefreshTimer(0.01, lambda: calls.append(1))
        timer.start()
        time.sleep(0.05)
        timer.stop()

        count = len(calls)
        time.sleep(0.05)
        assert len(calls) == count

    def test_stop_waits_for_running_tick(self):
        entered = threading.Event()
        release = threading.Event()
        finished = []

        def slow_tick():
            entered.set()
            release.wait(2.0)
            finished.append(1)

        timer = RefreshTimer(0.01, slow_tick)
        timer.start()
        assert entered.wait(2.0)

        stopper = threading.Thread(target=timer.stop)
        stopper.start()
        time.sleep(0.02)
        assert stopper.is_alive()

        release.set()
        stopper.join(2.0)
        assert not stopper.is_alive()
        assert finished == [1]

    def test_stop_from_tick(self):
        """tick 안에서 stop()을 호출해도 교착 상태가 되지 않음"""
        done = threading.Event()
        holder = {}

        def tick():
            holder["timer"].stop()
            done.set()

        holder["timer"] = RefreshTimer(0.01, tick)
        holder["timer"].start()
        assert done.wait(2.0)
        holder["timer"].stop()
        assert holder["timer"].active is False

    def test_tick_exception_keeps_running(self):
        calls = []

        def tick():
            calls.append(1)
            raise RuntimeError("boom")

        timer = RefreshTimer(0.01, tick)
        timer.start()
        try:
            deadline = time.monotonic() + 2.0
            while len(calls) < 2 and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            timer.stop()
        assert len(calls) >= 2

    def test_stop_before_start(self):
        timer = RefreshTimer(1, lambda: None)
        timer.stop()
        assert timer.active is False

    def test_start_twice(self):
        timer = RefreshTimer(1, lambda: None)
        timer.start()
        timer.start()
        timer.stop()


class TestCallGate:
    def test_shared_concurrent(self):
        gate = CallGate()
        with gate.shared():
            with gate.shared():
                assert gate.active_readers == 2
        assert gate.active_readers == 0

    def test_exclusive_waits_for_readers(self):
        gate = CallGate()
        entered = threading.Event()

        def writer():
            with gate.exclusive():
                entered.set()

        with gate.shared():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not entered.wait(0.05)

        assert entered.wait(2.0)
        thread.join(2.0)
        assert gate.writer_active is False

    def test_readers_wait_for_writer(self):
        gate = CallGate()
        read = threading.Event()

        def reader():
            with gate.shared():
                read.set()

        with gate.exclusive():
            assert gate.writer_active is True
            thread = threading.Thread(target=reader)
            thread.start()
            assert not read.wait(0.05)

        assert read.wait(2.0)
        thread.join(2.0)

    def test_exception_releases(self):
        gate = CallGate()
        with pytest.raises(RuntimeError):
            with gate.exclusive():
                raise RuntimeError("reconfigure failed")
        with gate.shared():
            assert gate.active_readers == 1
