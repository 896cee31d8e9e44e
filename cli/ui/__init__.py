# cli/ui - TUI 컴포넌트 (rich)
"""
TUI 컴포넌트 모듈

브라우저 화면(Rich Live), 키 입력, 콘솔 출력
"""

from .browser import BrowserView, ConfirmModal, InputModal, SelectorModal
from .console import (
    console,
    get_console_handler,
    print_error,
    print_info,
    print_table,
    print_warning,
)
from .keys import KeyReader, parse_keys

__all__: list[str] = [
    "BrowserView",
    "ConfirmModal",
    "InputModal",
    "SelectorModal",
    "KeyReader",
    "parse_keys",
    "console",
    "get_console_handler",
    "print_error",
    "print_info",
    "print_table",
    "print_warning",
]
