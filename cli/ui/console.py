"""
cli/ui/console.py - TUI 밖에서 쓰는 Rich 출력

브라우저 시작 전/종료 후와 서브커맨드(version, resources)에서만 사용.
브라우저 화면은 cli/ui/browser.py가 자체 Live 화면으로 그린다.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# 라이브러리 로그는 WARNING 이상만
for _name in ("boto3", "botocore", "urllib3", "s3transfer"):
    logging.getLogger(_name).setLevel(logging.WARNING)

# 레벨 -> (기호, 색상)
_STYLES: dict[str, tuple[str, str]] = {
    "error": ("✗", "red"),
    "warning": ("!", "yellow"),
    "info": ("•", "blue"),
}

console = Console(
    highlight=False,
    soft_wrap=True,
    emoji=not sys.platform.startswith("win"),
)


def _emit(level: str, message: str) -> None:
    symbol, color = _STYLES[level]
    console.print(f"[{color}]{symbol} {message}[/{color}]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (종료 직전 원인 안내용)"""
    _emit("error", message)


def print_warning(message: str) -> None:
    _emit("warning", message)


def print_info(message: str) -> None:
    _emit("info", message)


def print_table(title: str, columns: list[str], rows: list[list]) -> None:
    """첫 컬럼을 강조한 표 출력

    Args:
        title: 표 제목
        columns: 헤더
        rows: 행 목록 (셀은 str로 변환)
    """
    table = Table(title=title, header_style="bold yellow", title_justify="left")
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else None, no_wrap=i == 0)
    for row in rows:
        table.add_row(*map(str, row))
    console.print(table)


def get_console_handler(level: int = logging.INFO) -> RichHandler:
    """콘솔 로그 핸들러 (TUI 실행 중에는 파일 로그를 쓴다)"""
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True, markup=False)
    handler.setLevel(level)
    return handler
