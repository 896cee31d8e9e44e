"""
core/browser/state.py - 컨트롤러 상태와 전역 키 맵
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ControllerState(Enum):
    IDLE = "idle"
    VIEWING = "viewing"
    LOADING = "loading"
    MUTATING = "mutating"


class StatusLevel(Enum):
    """상태 표시줄 강조 수준 (색상은 뷰가 결정)"""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Command(Enum):
    """전역 단일 키 명령"""

    MENU = "menu"
    QUIT = "quit"
    REFRESH = "refresh"
    TOGGLE_AUTO = "toggle_auto"
    SWITCH_PROFILE = "switch_profile"
    SWITCH_REGION = "switch_region"
    SELECT = "select"


@dataclass(frozen=True)
class Binding:
    command: Command
    argument: str = ""


GLOBAL_KEYMAP: dict[str, Binding] = {
    ":": Binding(Command.MENU),
    "q": Binding(Command.QUIT),
    "f": Binding(Command.REFRESH),
    "a": Binding(Command.TOGGLE_AUTO),
    "p": Binding(Command.SWITCH_PROFILE),
    "r": Binding(Command.SWITCH_REGION),
    "1": Binding(Command.SELECT, "ec2"),
    "2": Binding(Command.SELECT, "s3"),
}

# 빠른 작업 키로 사용할 수 없는 키
RESERVED_KEYS = frozenset(GLOBAL_KEYMAP)


@dataclass(frozen=True)
class Frame:
    """한 번의 화면 그리기에 필요한 스냅샷"""

    title: str
    columns: tuple[tuple[str, int], ...]
    rows: tuple[tuple[str, ...], ...]
    status: str
    status_level: StatusLevel
    region: str
    profile: str
    auto_refresh: bool
    state: ControllerState
    has_selection: bool = False
