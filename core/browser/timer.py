"""
core/browser/timer.py - 자동 새로고침 타이머

고정 간격으로 on_tick을 호출하는 백그라운드 스레드입니다.
stop()이 반환된 뒤에는 on_tick이 다시 호출되지 않습니다.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RefreshTimer:
    """주기 타이머 (stop_event 기반)

    Args:
        interval: 호출 간격 (초)
        on_tick: 매 주기 호출할 함수 (타이머 스레드에서 실행)
        name: 스레드 이름
    """

    def __init__(self, interval: float, on_tick: Callable[[], None], name: str = "a9s-refresh-timer"):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.interval = interval
        self._on_tick = on_tick
        self._stop_event = threading.Event()
        self._tick_lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._thread.start()
        logger.debug("새로고침 타이머 시작 (%ss)", self.interval)

    def stop(self) -> None:
        """타이머 중지 후 스레드 종료까지 대기

        타이머 스레드 자신이 호출한 경우에는 join하지 않습니다.
        """
        self._stop_event.set()
        if threading.current_thread() is self._thread:
            return
        # 진행 중인 tick이 끝날 때까지 대기
        with self._tick_lock:
            pass
        if self._started:
            self._thread.join()
        logger.debug("새로고침 타이머 중지")

    @property
    def active(self) -> bool:
        return self._started and not self._stop_event.is_set()

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            with self._tick_lock:
                if self._stop_event.is_set():
                    break
                try:
                    self._on_tick()
                except Exception:
                    logger.exception("새로고침 타이머 tick 실패")
