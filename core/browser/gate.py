"""
core/browser/gate.py - 공유/배타 호출 게이트

조회와 빠른 작업은 shared로, 클라이언트 재설정은 exclusive로 진입합니다.
재설정은 진행 중인 모든 shared 호출이 끝난 뒤에만 시작되고,
재설정 중에는 새 shared 호출이 대기합니다 (반쯤 교체된 클라이언트 관찰 방지).

Example:
    gate = CallGate()

    with gate.shared():
        resource.fetch(client)

    with gate.exclusive():
        client.reconfigure(region="eu-west-1")
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class CallGate:
    """writer 우선 reader/writer 게이트"""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def active_readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer
