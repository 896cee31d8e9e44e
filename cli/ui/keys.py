"""
cli/ui/keys.py - 단일 키 입력 읽기

크로스 플랫폼 지원:
- Windows: msvcrt.kbhit()/getwch() 폴링
- Unix/Mac: termios cbreak 모드 + select 타임아웃

read_key()는 일반 문자는 그대로, 특수 키는 이름("up", "enter", "esc" ...)으로 반환합니다.
타임아웃 동안 입력이 없으면 None을 반환합니다.

Example:
    with KeyReader() as keys:
        while running:
            key = keys.read_key(timeout=0.1)
            if key is not None:
                handle(key)
"""

from __future__ import annotations

import os
import sys
import time
from collections import deque

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
PAGE_UP = "pageup"
PAGE_DOWN = "pagedown"
HOME = "home"
END = "end"
ENTER = "enter"
ESCAPE = "esc"
BACKSPACE = "backspace"
TAB = "tab"
CTRL_C = "ctrl+c"

# ANSI escape 시퀀스 (ESC 이후 부분)
_ANSI_SEQUENCES = {
    "[A": UP,
    "[B": DOWN,
    "[C": RIGHT,
    "[D": LEFT,
    "[H": HOME,
    "[F": END,
    "OA": UP,
    "OB": DOWN,
    "OC": RIGHT,
    "OD": LEFT,
    "OH": HOME,
    "OF": END,
    "[1~": HOME,
    "[4~": END,
    "[5~": PAGE_UP,
    "[6~": PAGE_DOWN,
}

# msvcrt 확장 키 코드 (\x00 또는 \xe0 다음 문자)
_WINDOWS_SPECIAL = {
    "H": UP,
    "P": DOWN,
    "K": LEFT,
    "M": RIGHT,
    "G": HOME,
    "O": END,
    "I": PAGE_UP,
    "Q": PAGE_DOWN,
}

_CONTROL_KEYS = {
    "\r": ENTER,
    "\n": ENTER,
    "\x7f": BACKSPACE,
    "\x08": BACKSPACE,
    "\t": TAB,
    "\x03": CTRL_C,
}


def parse_keys(chunk: str) -> list[str]:
    """터미널에서 읽은 문자열을 키 목록으로 분해"""
    keys: list[str] = []
    i = 0
    while i < len(chunk):
        ch = chunk[i]
        if ch == "\x1b":
            rest = chunk[i + 1 :]
            for seq in sorted(_ANSI_SEQUENCES, key=len, reverse=True):
                if rest.startswith(seq):
                    keys.append(_ANSI_SEQUENCES[seq])
                    i += 1 + len(seq)
                    break
            else:
                keys.append(ESCAPE)
                i += 1
            continue
        keys.append(_CONTROL_KEYS.get(ch, ch))
        i += 1
    return keys


class KeyReader:
    """터미널 raw 입력 컨텍스트"""

    def __init__(self) -> None:
        self._pending: deque[str] = deque()
        self._fd: int | None = None
        self._old_settings: list | None = None

    def __enter__(self) -> KeyReader:
        if sys.platform != "win32" and sys.stdin.isatty():
            import termios
            import tty

            self._fd = sys.stdin.fileno()
            self._old_settings = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._fd is not None and self._old_settings is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
            self._fd = None
            self._old_settings = None

    def read_key(self, timeout: float = 0.1) -> str | None:
        """키 하나 읽기 (timeout 초 동안 입력이 없으면 None)"""
        if self._pending:
            return self._pending.popleft()

        if sys.platform == "win32":
            return self._read_windows(timeout)
        return self._read_unix(timeout)

    def _read_unix(self, timeout: float) -> str | None:
        import select

        fd = self._fd if self._fd is not None else sys.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        data = os.read(fd, 64)
        if not data:
            return None
        # ESC 단독 입력과 시퀀스 시작을 구분하기 위해 잠깐 추가 입력 확인
        if data == b"\x1b":
            more, _, _ = select.select([fd], [], [], 0.03)
            if more:
                data += os.read(fd, 16)

        self._pending.extend(parse_keys(data.decode("utf-8", errors="ignore")))
        return self._pending.popleft() if self._pending else None

    def _read_windows(self, timeout: float) -> str | None:
        import msvcrt

        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.01)

        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            return _WINDOWS_SPECIAL.get(msvcrt.getwch())
        if ch == "\x1b":
            return ESCAPE
        return _CONTROL_KEYS.get(ch, ch)
