"""
core/browser/controller.py - 브라우저 컨트롤러

현재 선택된 리소스, 조회/새로고침 주기, 자동 새로고침 타이머,
빠른 작업 확인/실행 흐름, 프로파일/리전 재구성을 관리합니다.

스레드 모델:
    - 모든 상태는 UI 스레드 하나가 소유합니다 (public 메서드는 UI 스레드에서 호출).
    - 원격 호출은 executor에서 실행되고, 결과는 view.post(callback)로
      UI 스레드에 전달됩니다. 백그라운드 작업은 상태를 직접 변경하지 않습니다.
    - 조회 결과는 발행 시점의 generation과 일치할 때만 적용됩니다.
    - 재구성은 CallGate의 exclusive 구간에서 실행되어
      진행 중인 조회/작업과 겹치지 않습니다.

Example:
    controller = BrowserController(default_registry(RESERVED_KEYS), AWSClient(), view)
    controller.select("ec2")
    controller.handle_key("s")   # 선택된 인스턴스 중지 (확인 후)
    controller.shutdown()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Protocol

from cli.i18n import t
from core.config import settings
from core.exceptions import LookupFailure, NoSelectionError, UnknownResourceError, format_error_for_user

from .gate import CallGate
from .state import GLOBAL_KEYMAP, Command, ControllerState, Frame, StatusLevel
from .timer import RefreshTimer

if TYPE_CHECKING:
    from core.client import AWSClient
    from core.resources import QuickAction, Registry, Resource, Row

logger = logging.getLogger(__name__)

APP_TITLE = "a9s"

TimerFactory = Callable[[float, Callable[[], None]], Any]


class View(Protocol):
    """컨트롤러가 사용하는 표시 계층 인터페이스"""

    def post(self, callback: Callable[[], None]) -> None:
        """UI 스레드에서 callback 실행 예약 (thread-safe)"""

    def confirm(self, message: str, on_result: Callable[[bool], None]) -> None: ...

    def prompt(self, label: str, prefill: str, on_submit: Callable[[str | None], None]) -> None: ...

    def choose(
        self, title: str, search: Callable[[str], list[str]], on_choice: Callable[[str | None], None]
    ) -> None: ...

    def selected_index(self) -> int | None: ...

    def reset_selection(self) -> None: ...

    def stop(self) -> None: ...


class BrowserController:
    """AWS 리소스 브라우저 컨트롤러

    Args:
        registry: 리소스 레지스트리
        client: AWS Provider Client
        view: 표시 계층
        auto_refresh: 자동 새로고침 초기값
        refresh_interval: 자동 새로고침 간격 (초)
        executor: 백그라운드 작업 실행기 (None이면 ThreadPoolExecutor)
        timer_factory: (interval, on_tick) -> 타이머 (start/stop)
        settle_seconds: 빠른 작업 후 새로고침 대기 시간 (None이면 작업별 값)
        lang: 메시지 언어 ("ko" | "en")
    """

    def __init__(
        self,
        registry: Registry,
        client: AWSClient,
        view: View,
        *,
        auto_refresh: bool = True,
        refresh_interval: float = settings.REFRESH_INTERVAL_SECONDS,
        executor: Executor | None = None,
        timer_factory: TimerFactory = RefreshTimer,
        settle_seconds: float | None = None,
        lang: str | None = None,
    ):
        self.registry = registry
        self.client = client
        self.view = view
        self.lang = lang
        self.refresh_interval = refresh_interval

        self._executor = executor or ThreadPoolExecutor(
            max_workers=settings.MAX_WORKERS, thread_name_prefix="a9s-worker"
        )
        self._timer_factory = timer_factory
        self._settle_override = settle_seconds
        self._gate = CallGate()
        self._cancel = threading.Event()

        self._current: Resource | None = None
        self._auto_refresh = auto_refresh
        self._timer: Any = None
        self._timer_token: object | None = None
        self._generation = 0
        self._loading = False
        self._mutating = False
        self._reconfiguring = False
        self._closed = False

        self._rows: list[Row] = []
        self._ids: list[str] = []
        self._status = t("browser.welcome", lang=lang)
        self._status_level = StatusLevel.INFO

    # =========================================================================
    # 상태 조회
    # =========================================================================

    @property
    def current(self) -> Resource | None:
        return self._current

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    @property
    def status(self) -> str:
        return self._status

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> ControllerState:
        if self._mutating:
            return ControllerState.MUTATING
        if self._current is None:
            return ControllerState.IDLE
        if self._loading:
            return ControllerState.LOADING
        return ControllerState.VIEWING

    def frame(self) -> Frame:
        """현재 화면 스냅샷"""
        resource = self._current
        return Frame(
            title=resource.name if resource else APP_TITLE,
            columns=tuple((c.name, c.width) for c in resource.columns()) if resource else (),
            rows=tuple(self._rows),
            status=self._status,
            status_level=self._status_level,
            region=self.client.region(),
            profile=self.client.profile(),
            auto_refresh=self._auto_refresh,
            state=self.state,
            has_selection=resource is not None,
        )

    # =========================================================================
    # 리소스 선택 / 새로고침
    # =========================================================================

    def select(self, key: str | None) -> None:
        """리소스 선택 후 즉시 조회 (알 수 없는 키는 상태 메시지만)"""
        if self._closed or not key:
            return
        try:
            resource = self.registry.require(key)
        except UnknownResourceError as e:
            self._set_status(t("browser.unknown_resource", lang=self.lang, key=e.key), StatusLevel.ERROR)
            return

        logger.debug("리소스 선택: %s", key)
        self._current = resource
        self._generation += 1
        self._loading = False
        self._rows = []
        self._ids = []
        self.view.reset_selection()
        self.refresh()
        self._sync_timer()

    def refresh(self) -> None:
        """현재 리소스 조회

        조회 중이거나 선택이 없으면 무시. 재구성 중에는 완료 후의 새로고침이 대신한다.
        """
        if self._closed or self._current is None or self._loading or self._reconfiguring:
            return

        self._loading = True
        self._set_status(t("browser.loading", lang=self.lang), StatusLevel.WARNING)
        self._submit(self._fetch_task, self._current, self._generation)

    def _fetch_task(self, resource: Resource, generation: int) -> None:
        if self._cancel.is_set():
            return
        try:
            with self._gate.shared():
                resource.fetch(self.client)
            rows, ids = resource.snapshot()
        except Exception as e:
            logger.warning("%s 조회 실패: %s", resource.key, e)
            self._post(lambda e=e: self._on_fetch_done(generation, None, None, e))
            return
        self._post(lambda: self._on_fetch_done(generation, rows, ids, None))

    def _on_fetch_done(
        self,
        generation: int,
        rows: list[Row] | None,
        ids: list[str] | None,
        error: Exception | None,
    ) -> None:
        if generation != self._generation:
            logger.debug("이전 조회 결과 폐기 (generation %d != %d)", generation, self._generation)
            return

        self._loading = False
        if error is not None:
            detail = format_error_for_user(error)
            self._set_status(t("browser.error", lang=self.lang, detail=detail), StatusLevel.ERROR)
            return

        self._rows = rows or []
        self._ids = ids or []
        self._set_status(self._summary(), StatusLevel.SUCCESS)

    # =========================================================================
    # 자동 새로고침
    # =========================================================================

    def toggle_auto_refresh(self) -> None:
        if self._closed:
            return
        self._auto_refresh = not self._auto_refresh
        self._sync_timer()

        if self._current is not None:
            self._set_status(self._summary(), StatusLevel.INFO)
        else:
            key = "browser.auto_enabled" if self._auto_refresh else "browser.auto_disabled"
            self._set_status(f"{self._auto_label()} | {t(key, lang=self.lang)}", StatusLevel.INFO)

    def _sync_timer(self) -> None:
        """타이머는 auto_refresh가 켜져 있고 선택된 리소스가 있을 때만 존재"""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
            self._timer_token = None

        if self._closed or not self._auto_refresh or self._current is None:
            return

        token = object()
        self._timer_token = token
        self._timer = self._timer_factory(self.refresh_interval, lambda: self._post(lambda: self._on_tick(token)))
        self._timer.start()

    def _on_tick(self, token: object) -> None:
        # 중지된 타이머가 남긴 tick은 무시
        if token is not self._timer_token:
            return
        self.refresh()

    # =========================================================================
    # 빠른 작업
    # =========================================================================

    def invoke_quick_action(self, key: str) -> None:
        """현재 리소스의 빠른 작업 실행 (선택 확인 → 확인 대화상자 → 실행)"""
        if self._closed:
            return
        resource = self._current
        if resource is None:
            self._set_status(t("browser.no_resource", lang=self.lang), StatusLevel.WARNING)
            return

        action = resource.quick_action(key)
        if action is None:
            self._set_status(
                t("browser.action_unavailable", lang=self.lang, key=key, name=resource.name), StatusLevel.WARNING
            )
            return

        if self._mutating:
            self._set_status(t("browser.busy", lang=self.lang), StatusLevel.WARNING)
            return

        if action.input_label:
            self.view.prompt(action.input_label, "", lambda value: self._on_input(resource, action, value))
            return

        try:
            identifier = self._resolve_target(action)
        except LookupFailure as e:
            self._set_status(self._lookup_message(e), StatusLevel.WARNING)
            return

        self._confirm_then_execute(resource, action, identifier)

    def _resolve_target(self, action: QuickAction) -> str:
        """선택된 행의 식별자 (needs_selection이 아니면 빈 문자열)

        Raises:
            NoSelectionError: 선택된 행이 없거나 식별자가 비어 있는 경우
        """
        if not action.needs_selection:
            return ""
        index = self.view.selected_index()
        if index is None:
            raise NoSelectionError(action.label)
        identifier = self._ids[index] if 0 <= index < len(self._ids) else ""
        if not identifier:
            raise NoSelectionError(action.label, index)
        return identifier

    def _lookup_message(self, error: LookupFailure) -> str:
        if isinstance(error, NoSelectionError) and error.index is not None:
            return t("browser.no_identifier", lang=self.lang, index=error.index)
        return t("browser.no_selection", lang=self.lang)

    def _on_input(self, resource: Resource, action: QuickAction, value: str | None) -> None:
        value = (value or "").strip()
        if not value:
            self._set_status(t("browser.cancelled", lang=self.lang), StatusLevel.INFO)
            return
        self._confirm_then_execute(resource, action, value)

    def _confirm_then_execute(self, resource: Resource, action: QuickAction, identifier: str) -> None:
        if not action.needs_confirm:
            self._execute(resource, action, identifier)
            return

        message = action.confirm_message(identifier, region=self.client.region())
        self.view.confirm(message, lambda ok: self._on_confirm(resource, action, identifier, ok))

    def _on_confirm(self, resource: Resource, action: QuickAction, identifier: str, confirmed: bool) -> None:
        if not confirmed or resource is not self._current:
            self._set_status(t("browser.cancelled", lang=self.lang), StatusLevel.INFO)
            return
        self._execute(resource, action, identifier)

    def _execute(self, resource: Resource, action: QuickAction, identifier: str) -> None:
        if self._closed:
            return
        if self._mutating:
            self._set_status(t("browser.busy", lang=self.lang), StatusLevel.WARNING)
            return

        logger.info("빠른 작업 실행: %s %s (%s)", action.label, identifier, resource.key)
        self._mutating = True
        self._set_status(
            t("browser.action_running", lang=self.lang, label=action.label, id=identifier), StatusLevel.WARNING
        )
        self._submit(self._action_task, action, identifier)

    def _action_task(self, action: QuickAction, identifier: str) -> None:
        if self._cancel.is_set():
            return
        try:
            with self._gate.shared():
                action.handler(self.client, identifier)
        except Exception as e:
            logger.warning("빠른 작업 실패: %s %s: %s", action.label, identifier, e)
            self._post(lambda e=e: self._on_action_done(action, identifier, e))
            return

        self._post(lambda: self._on_action_done(action, identifier, None))

        # 원격 상태 반영 대기 (종료 시 즉시 중단)
        settle = action.settle_seconds if self._settle_override is None else self._settle_override
        if self._cancel.wait(settle):
            return
        self._post(self.refresh)

    def _on_action_done(self, action: QuickAction, identifier: str, error: Exception | None) -> None:
        self._mutating = False
        if error is not None:
            detail = format_error_for_user(error)
            self._set_status(
                t("browser.action_failed", lang=self.lang, label=action.label, id=identifier, detail=detail),
                StatusLevel.ERROR,
            )
            return
        self._set_status(
            t("browser.action_done", lang=self.lang, label=action.label, id=identifier), StatusLevel.SUCCESS
        )

    # =========================================================================
    # 프로파일 / 리전 재구성
    # =========================================================================

    def switch_profile(self, name: str | None) -> None:
        self._reconfigure("profile", name)

    def switch_region(self, name: str | None) -> None:
        self._reconfigure("region", name)

    def _reconfigure(self, target: str, name: str | None) -> None:
        if self._closed:
            return
        name = (name or "").strip()
        if not name:
            self._set_status(t("browser.cancelled", lang=self.lang), StatusLevel.INFO)
            return
        if self._mutating:
            self._set_status(t("browser.busy", lang=self.lang), StatusLevel.WARNING)
            return

        self._mutating = True
        self._reconfiguring = True
        self._set_status(t(f"browser.switching_{target}", lang=self.lang, name=name), StatusLevel.WARNING)
        self._submit(self._reconfigure_task, target, name)

    def _reconfigure_task(self, target: str, name: str) -> None:
        if self._cancel.is_set():
            return
        try:
            with self._gate.exclusive():
                self.client.reconfigure(**{target: name})
        except Exception as e:
            logger.warning("%s 전환 실패 (%s): %s", target, name, e)
            self._post(lambda e=e: self._on_reconfigured(target, name, e))
            return
        self._post(lambda: self._on_reconfigured(target, name, None))

    def _on_reconfigured(self, target: str, name: str, error: Exception | None) -> None:
        self._mutating = False
        self._reconfiguring = False
        if error is not None:
            detail = format_error_for_user(error)
            self._set_status(t(f"browser.switch_{target}_failed", lang=self.lang, detail=detail), StatusLevel.ERROR)
            return

        self._set_status(t(f"browser.switched_{target}", lang=self.lang, name=name), StatusLevel.SUCCESS)
        if self._current is not None:
            # 이전 구성으로 진행 중이던 조회 결과는 폐기
            self._generation += 1
            self._loading = False
            self.refresh()

    # =========================================================================
    # 키 처리
    # =========================================================================

    def handle_key(self, key: str) -> bool:
        """단일 키 명령 처리 (처리했으면 True)

        전역 명령을 먼저 확인하고, 그 다음 현재 리소스의 빠른 작업을 확인합니다.
        """
        if self._closed:
            return False

        binding = GLOBAL_KEYMAP.get(key)
        if binding is not None:
            self._dispatch(binding.command, binding.argument)
            return True

        if self._current is not None and self._current.quick_action(key) is not None:
            self.invoke_quick_action(key)
            return True
        return False

    def _dispatch(self, command: Command, argument: str) -> None:
        if command is Command.MENU:
            self.view.choose(t("browser.menu_title", lang=self.lang), self.registry.filter, self.select)
        elif command is Command.QUIT:
            self.quit()
        elif command is Command.REFRESH:
            if self._current is None:
                self._set_status(t("browser.no_resource", lang=self.lang), StatusLevel.WARNING)
            self.refresh()
        elif command is Command.TOGGLE_AUTO:
            self.toggle_auto_refresh()
        elif command is Command.SWITCH_PROFILE:
            self.view.prompt(t("browser.profile_label", lang=self.lang), self.client.profile(), self.switch_profile)
        elif command is Command.SWITCH_REGION:
            self.view.prompt(t("browser.region_label", lang=self.lang), self.client.region(), self.switch_region)
        elif command is Command.SELECT:
            self.select(argument)

    # =========================================================================
    # 종료
    # =========================================================================

    def quit(self) -> None:
        self.shutdown()
        self.view.stop()

    def shutdown(self) -> None:
        """타이머 중지/대기 후 세션 취소 (이후 백그라운드 작업은 예약되지 않음)"""
        if self._closed:
            return
        self._closed = True

        if self._timer is not None:
            self._timer.stop()
            self._timer = None
            self._timer_token = None

        self._cancel.set()
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("브라우저 세션 종료")

    # =========================================================================
    # 내부
    # =========================================================================

    def _submit(self, fn: Callable[..., None], *args: Any) -> None:
        if self._closed:
            return
        try:
            self._executor.submit(fn, *args)
        except RuntimeError as e:
            # 종료된 executor
            logger.debug("작업 예약 실패: %s", e)

    def _post(self, callback: Callable[[], None]) -> None:
        """백그라운드 → UI 스레드 전달 (종료 후에는 버림)"""
        if self._cancel.is_set():
            return

        def guarded() -> None:
            if not self._closed:
                callback()

        self.view.post(guarded)

    def _set_status(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self._status = text
        self._status_level = level

    def _auto_label(self) -> str:
        return t("browser.auto_on" if self._auto_refresh else "browser.auto_off", lang=self.lang)

    def _summary(self) -> str:
        """'auto:on | EC2 Instances: 8 items | f: refresh | ... | s: stop' 형식"""
        resource = self._current
        if resource is None:
            return self._auto_label()
        parts = [
            self._auto_label(),
            t("browser.item_count", lang=self.lang, name=resource.name, count=len(self._rows)),
            t("browser.key_help", lang=self.lang),
        ]
        parts.extend(f"{a.key}: {a.label}" for a in resource.quick_actions())
        return " | ".join(parts)
