"""
tests/conftest.py - pytest 공통 픽스처

AWS 환경변수 격리, 브라우저 컨트롤러용 테스트 더블을 제공합니다.

Usage:
    def test_something(controller, view, executor):
        controller.select("ec2")
        executor.run_all()
        view.drain()
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from core.browser import RESERVED_KEYS, BrowserController
from core.resources import Column, QuickAction, Registry, Resource

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정 (실제 자격 증명/설정 파일 사용 방지)"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))
    for name in ("AWS_PROFILE", "AWS_DEFAULT_PROFILE", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)
    for name in ("A9S_AUTO_REFRESH", "A9S_REFRESH_INTERVAL", "A9S_LANG", "A9S_RESOURCE"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def aws_profiles(tmp_path):
    """dev / prod 프로파일이 정의된 AWS 설정 파일"""
    config = tmp_path / "aws_config"
    config.write_text(
        "[default]\nregion = ap-northeast-2\n\n"
        "[profile dev]\nregion = us-west-2\n\n"
        "[profile prod]\nregion = eu-west-1\n"
    )
    credentials = tmp_path / "aws_credentials"
    credentials.write_text(
        "[default]\naws_access_key_id = testing\naws_secret_access_key = testing\n\n"
        "[dev]\naws_access_key_id = testing\naws_secret_access_key = testing\n\n"
        "[prod]\naws_access_key_id = testing\naws_secret_access_key = testing\n"
    )
    return ["default", "dev", "prod"]


# =============================================================================
# 테스트 더블
# =============================================================================


class ManualExecutor:
    """submit된 작업을 run_all()/run_next() 호출 시점에 실행하는 executor"""

    def __init__(self) -> None:
        self.pending: list[tuple[Callable[..., Any], tuple]] = []
        self.submitted = 0
        self.shutdown_called = False

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        if self.shutdown_called:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted += 1
        self.pending.append((fn, args))

    def run_next(self) -> None:
        fn, args = self.pending.pop(0)
        fn(*args)

    def run_all(self) -> None:
        while self.pending:
            self.run_next()

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        self.shutdown_called = True
        if cancel_futures:
            self.pending.clear()


class FakeView:
    """BrowserController View 인터페이스 기록용 구현"""

    def __init__(self) -> None:
        self.inbox: list[Callable[[], None]] = []
        self.selected: int | None = None
        self.confirms: list[tuple[str, Callable[[bool], None]]] = []
        self.prompts: list[tuple[str, str, Callable[[str | None], None]]] = []
        self.choices: list[tuple[str, Callable[[str], list[str]], Callable[[str | None], None]]] = []
        self.resets = 0
        self.stopped = False

    def post(self, callback: Callable[[], None]) -> None:
        self.inbox.append(callback)

    def drain(self) -> int:
        count = 0
        while self.inbox:
            self.inbox.pop(0)()
            count += 1
        return count

    def confirm(self, message: str, on_result: Callable[[bool], None]) -> None:
        self.confirms.append((message, on_result))

    def prompt(self, label: str, prefill: str, on_submit: Callable[[str | None], None]) -> None:
        self.prompts.append((label, prefill, on_submit))

    def choose(self, title, search, on_choice) -> None:
        self.choices.append((title, search, on_choice))

    def selected_index(self) -> int | None:
        return self.selected

    def reset_selection(self) -> None:
        self.resets += 1
        self.selected = None

    def stop(self) -> None:
        self.stopped = True


class FakeTimer:
    """start/stop만 기록하는 타이머 (tick은 fire()로 수동 발생)"""

    instances: list["FakeTimer"] = []

    def __init__(self, interval: float, on_tick: Callable[[], None]):
        self.interval = interval
        self.on_tick = on_tick
        self.started = False
        self.stopped = False
        FakeTimer.instances.append(self)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    @property
    def active(self) -> bool:
        return self.started and not self.stopped

    def fire(self) -> None:
        self.on_tick()

    @classmethod
    def active_count(cls) -> int:
        return sum(1 for timer in cls.instances if timer.active)


@dataclass
class StubItem:
    ident: str
    name: str


class StubResource(Resource[StubItem]):
    """원격 호출 없이 미리 정한 항목을 반환하는 리소스"""

    COLUMNS = (Column("ID", 20), Column("Name", 30))

    def __init__(self, key: str = "stub", name: str = "Stub Items", count: int = 0, actions=None):
        super().__init__()
        self.key = key
        self.name = name
        self.next_items = [StubItem(f"{key}-{i}", f"item-{i}") for i in range(count)]
        self.fail_with: Exception | None = None
        self.fetch_calls = 0
        self._actions = actions or []

    def _collect(self, client):
        self.fetch_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.next_items)

    def _row(self, item):
        return (item.ident, item.name)

    def _item_id(self, item):
        return item.ident

    def quick_actions(self):
        return self._actions


@dataclass
class RecordingHandler:
    """빠른 작업 handler 호출 기록"""

    calls: list[str] = field(default_factory=list)
    error: Exception | None = None

    def __call__(self, client, identifier: str) -> None:
        self.calls.append(identifier)
        if self.error is not None:
            raise self.error


class StubClient:
    """AWSClient 대체 (reconfigure 호출 기록)"""

    def __init__(self, region: str = "ap-northeast-2", profile: str = "default"):
        self._region = region
        self._profile = profile
        self.reconfigure_calls: list[dict[str, str | None]] = []
        self.fail_with: Exception | None = None

    def region(self) -> str:
        return self._region

    def profile(self) -> str:
        return self._profile

    def reconfigure(self, region: str | None = None, profile: str | None = None) -> None:
        self.reconfigure_calls.append({"region": region, "profile": profile})
        if self.fail_with is not None:
            raise self.fail_with
        self._region = region or self._region
        self._profile = profile or self._profile


# =============================================================================
# 컨트롤러 픽스처
# =============================================================================


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def stop_action(handler):
    return QuickAction(key="s", label="stop", description="Stop", handler=handler)


@pytest.fixture
def ec2(stop_action):
    return StubResource("ec2", "EC2 Instances", count=8, actions=[stop_action])


@pytest.fixture
def s3():
    return StubResource("s3", "S3 Buckets", count=3)


@pytest.fixture
def registry(ec2, s3):
    registry = Registry(reserved_keys=RESERVED_KEYS)
    registry.register("ec2", ec2)
    registry.register("s3", s3)
    return registry


@pytest.fixture
def client():
    return StubClient()


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def executor():
    return ManualExecutor()


@pytest.fixture
def timers():
    FakeTimer.instances = []
    yield FakeTimer
    FakeTimer.instances = []


@pytest.fixture
def controller(registry, client, view, executor, timers):
    controller = BrowserController(
        registry,
        client,
        view,
        executor=executor,
        timer_factory=timers,
        settle_seconds=0,
        lang="en",
    )
    yield controller
    controller.shutdown()


@pytest.fixture
def make_resource():
    """StubResource 생성 함수"""
    return StubResource
