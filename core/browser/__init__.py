"""
core/browser - 리소스 브라우저 컨트롤러

표시 계층과 무관한 브라우저 로직 (선택, 새로고침, 자동 새로고침,
빠른 작업, 프로파일/리전 전환)을 제공합니다.
"""

from .controller import BrowserController, View
from .gate import CallGate
from .state import GLOBAL_KEYMAP, RESERVED_KEYS, Command, ControllerState, Frame, StatusLevel
from .timer import RefreshTimer

__all__: list[str] = [
    "BrowserController",
    "View",
    "CallGate",
    "RefreshTimer",
    "GLOBAL_KEYMAP",
    "RESERVED_KEYS",
    "Command",
    "ControllerState",
    "Frame",
    "StatusLevel",
]
