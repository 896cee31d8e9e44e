"""
cli/ui/browser.py - Rich Live 기반 브라우저 화면

BrowserController의 표시 계층(View) 구현입니다.

화면 구성:
    a9s - AWS Resource Browser
    Region: ap-northeast-2 | Profile: default
    ┌ EC2 Instances ───────────────────────────────┐
    │ ID         Name      State    Type    ...     │
    │ i-0abc...  web-1     running  t3.micro        │
    └──────────────────────────────────────────────┘
     auto:on | EC2 Instances: 8 items | f: refresh | ...

스레드 모델:
    - run()을 호출한 스레드가 UI 스레드입니다.
    - post()는 어느 스레드에서나 호출할 수 있으며, 콜백은 UI 루프가
      키 입력 사이에 inbox를 비우면서 순서대로 실행합니다.
    - 모달(확인/입력/선택)은 UI 스레드에서만 열리고 닫힙니다.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.errors import MarkupError
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cli.i18n import t
from core.browser.state import Frame, StatusLevel

from . import keys as k
from .console import console as default_console

if TYPE_CHECKING:
    from core.browser import BrowserController

logger = logging.getLogger(__name__)

COLOR_ACCENT = "#FF9900"  # AWS Orange

STATUS_STYLES = {
    StatusLevel.INFO: "white",
    StatusLevel.SUCCESS: "green",
    StatusLevel.WARNING: "yellow",
    StatusLevel.ERROR: "red",
}

# 헤더 2줄 + 상태 1줄 + 테이블 테두리/헤더
CHROME_LINES = 7

SELECTOR_VISIBLE = 12

Finish = Callable[[], None]


def _markup(text: str) -> Text:
    try:
        return Text.from_markup(text)
    except MarkupError:
        return Text(text)


# =============================================================================
# Modals
# =============================================================================


class Modal:
    """모달 대화상자

    handle_key()가 callable을 반환하면 뷰는 모달을 닫은 뒤 그것을 실행합니다.
    """

    def handle_key(self, key: str) -> Finish | None:
        raise NotImplementedError

    def render(self, lang: str | None) -> RenderableType:
        raise NotImplementedError


class ConfirmModal(Modal):
    def __init__(self, message: str, on_result: Callable[[bool], None]):
        self.message = message
        self.on_result = on_result

    def handle_key(self, key: str) -> Finish | None:
        if key in ("y", "Y"):
            return lambda: self.on_result(True)
        if key in ("n", "N", k.ESCAPE):
            return lambda: self.on_result(False)
        return None

    def render(self, lang: str | None) -> RenderableType:
        body = Group(_markup(self.message), Text(""), Text(t("browser.confirm_hint", lang=lang), style="dim"))
        return Panel(body, title=t("browser.confirm_title", lang=lang), border_style=COLOR_ACCENT, expand=False)


class InputModal(Modal):
    def __init__(self, label: str, prefill: str, on_submit: Callable[[str | None], None]):
        self.label = label
        self.value = prefill
        self.on_submit = on_submit

    def handle_key(self, key: str) -> Finish | None:
        if key == k.ENTER:
            value = self.value
            return lambda: self.on_submit(value)
        if key == k.ESCAPE:
            return lambda: self.on_submit(None)
        if key == k.BACKSPACE:
            self.value = self.value[:-1]
        elif len(key) == 1 and key.isprintable():
            self.value += key
        return None

    def render(self, lang: str | None) -> RenderableType:
        line = Text.assemble((f"{self.label}: ", "bold"), (self.value, "white"), ("▏", COLOR_ACCENT))
        body = Group(line, Text(""), Text(t("browser.input_hint", lang=lang), style="dim"))
        return Panel(body, title=self.label, border_style=COLOR_ACCENT, width=60)


class SelectorModal(Modal):
    """검색어로 필터링되는 리소스 선택 메뉴 (Enter: 강조된 항목, 기본은 첫 항목)"""

    def __init__(
        self,
        title: str,
        search: Callable[[str], list[str]],
        on_choice: Callable[[str | None], None],
    ):
        self.title = title
        self.search = search
        self.on_choice = on_choice
        self.query = ""
        self.index = 0
        self.matches = search("")

    def _update(self) -> None:
        self.matches = self.search(self.query)
        self.index = 0

    def handle_key(self, key: str) -> Finish | None:
        if key == k.ESCAPE:
            return lambda: None
        if key == k.ENTER:
            choice = self.matches[self.index] if self.matches else None
            return lambda: self.on_choice(choice)
        if key == k.UP:
            self.index = max(0, self.index - 1)
        elif key == k.DOWN:
            self.index = min(max(len(self.matches) - 1, 0), self.index + 1)
        elif key == k.BACKSPACE:
            self.query = self.query[:-1]
            self._update()
        elif len(key) == 1 and key.isprintable():
            self.query += key
            self._update()
        return None

    def render(self, lang: str | None) -> RenderableType:
        lines: list[RenderableType] = [
            Text.assemble((t("browser.search_label", lang=lang), "bold"), self.query, ("▏", COLOR_ACCENT)),
            Text(""),
        ]
        if not self.matches:
            lines.append(Text(t("browser.no_match", lang=lang), style="dim"))

        start = max(0, self.index - SELECTOR_VISIBLE + 1)
        for i, key in enumerate(self.matches[start : start + SELECTOR_VISIBLE], start=start):
            style = f"reverse {COLOR_ACCENT}" if i == self.index else ""
            lines.append(Text(f" {key} ", style=style))

        lines.extend([Text(""), Text(t("browser.menu_hint", lang=lang), style="dim")])
        return Panel(Group(*lines), title=self.title, border_style=COLOR_ACCENT, width=50)


# =============================================================================
# View
# =============================================================================


class BrowserView:
    """Rich Live 화면 + 키 입력 루프"""

    def __init__(self, console: Console | None = None, lang: str | None = None):
        self.console = console or default_console
        self.lang = lang
        self.controller: BrowserController | None = None
        self.modal: Modal | None = None

        self._inbox: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._cursor = 0
        self._offset = 0
        self._row_count = 0
        self._running = False

    # -------------------------------------------------------------------------
    # View 인터페이스 (컨트롤러가 호출)
    # -------------------------------------------------------------------------

    def post(self, callback: Callable[[], None]) -> None:
        self._inbox.put(callback)

    def confirm(self, message: str, on_result: Callable[[bool], None]) -> None:
        self.modal = ConfirmModal(message, on_result)

    def prompt(self, label: str, prefill: str, on_submit: Callable[[str | None], None]) -> None:
        self.modal = InputModal(label, prefill, on_submit)

    def choose(
        self, title: str, search: Callable[[str], list[str]], on_choice: Callable[[str | None], None]
    ) -> None:
        self.modal = SelectorModal(title, search, on_choice)

    def selected_index(self) -> int | None:
        if self._row_count == 0:
            return None
        return self._cursor

    def reset_selection(self) -> None:
        self._cursor = 0
        self._offset = 0
        self._row_count = 0

    def stop(self) -> None:
        self._running = False

    # -------------------------------------------------------------------------
    # 루프
    # -------------------------------------------------------------------------

    def run(self, controller: BrowserController, reader: k.KeyReader | None = None) -> None:
        """UI 루프 실행 (controller.quit() 또는 Ctrl+C까지)"""
        self.controller = controller
        self._running = True
        reader = reader or k.KeyReader()

        try:
            with reader, Live(
                self.render(), console=self.console, screen=True, auto_refresh=False
            ) as live:
                while self._running:
                    self.drain()
                    key = reader.read_key(timeout=0.1)
                    if key is not None:
                        self.handle_key(key)
                    self.drain()
                    live.update(self.render(), refresh=True)
        except KeyboardInterrupt:
            logger.debug("Ctrl+C로 종료")
        finally:
            controller.shutdown()

    def drain(self) -> int:
        """inbox의 콜백을 모두 실행하고 실행한 개수를 반환"""
        count = 0
        while True:
            try:
                callback = self._inbox.get_nowait()
            except queue.Empty:
                return count
            count += 1
            try:
                callback()
            except Exception:
                logger.exception("UI 콜백 실행 실패")

    def handle_key(self, key: str) -> None:
        controller = self.controller
        if key == k.CTRL_C:
            if controller is not None:
                controller.quit()
            else:
                self.stop()
            return

        if self.modal is not None:
            finish = self.modal.handle_key(key)
            if finish is not None:
                # 콜백이 새 모달을 열 수 있으므로 먼저 닫음
                self.modal = None
                finish()
            return

        if key in (k.UP, "k"):
            self._move(-1)
        elif key in (k.DOWN, "j"):
            self._move(1)
        elif key == k.PAGE_UP:
            self._move(-self._page_size())
        elif key == k.PAGE_DOWN:
            self._move(self._page_size())
        elif key in (k.HOME, "g"):
            self._cursor = 0
        elif key in (k.END, "G"):
            self._cursor = max(self._row_count - 1, 0)
        elif controller is not None:
            controller.handle_key(key)

    def _move(self, delta: int) -> None:
        if self._row_count == 0:
            return
        self._cursor = min(max(self._cursor + delta, 0), self._row_count - 1)

    def _page_size(self) -> int:
        return max(1, self.console.size.height - CHROME_LINES)

    # -------------------------------------------------------------------------
    # 렌더링
    # -------------------------------------------------------------------------

    def render(self) -> RenderableType:
        if self.controller is None:
            return Text("")
        frame = self.controller.frame()

        self._row_count = len(frame.rows)
        if self._cursor >= self._row_count:
            self._cursor = max(self._row_count - 1, 0)

        body = self._render_modal() if self.modal is not None else self._render_table(frame)
        return Group(self._render_header(frame), body, self._render_status(frame))

    def _render_header(self, frame: Frame) -> RenderableType:
        unset = t("browser.not_configured", lang=self.lang)
        context = t(
            "browser.header_context",
            lang=self.lang,
            region=frame.region or unset,
            profile=frame.profile or unset,
        )
        return Group(
            Align.center(Text(t("browser.header_title", lang=self.lang), style=f"bold {COLOR_ACCENT}")),
            Align.center(Text(context, style="grey50")),
        )

    def _render_table(self, frame: Frame) -> RenderableType:
        table = Table(
            title=f" {frame.title} ",
            expand=True,
            header_style="bold yellow",
            border_style="grey50",
            show_edge=True,
        )
        for name, width in frame.columns:
            table.add_column(name, min_width=min(len(name), width), max_width=width, no_wrap=True, overflow="ellipsis")

        page = self._page_size()
        if self._cursor < self._offset:
            self._offset = self._cursor
        elif self._cursor >= self._offset + page:
            self._offset = self._cursor - page + 1

        for i, row in enumerate(frame.rows[self._offset : self._offset + page], start=self._offset):
            style = f"reverse {COLOR_ACCENT}" if i == self._cursor else None
            table.add_row(*row, style=style)
        return table

    def _render_modal(self) -> RenderableType:
        assert self.modal is not None
        return Align.center(self.modal.render(self.lang), vertical="middle", height=self._page_size() + 3)

    def _render_status(self, frame: Frame) -> RenderableType:
        return Text(f" {frame.status}", style=STATUS_STYLES.get(frame.status_level, "white"), no_wrap=True)
