"""
core/config.py - 중앙 설정 관리

애플리케이션 전체에서 사용되는 기본값과 환경변수 헬퍼를 정의합니다.

주요 구성 요소:
    - Settings: 불변 기본 설정 (리전, 자동 새로고침 주기, API 재시도 등)
    - LogConfig: 로깅 설정 (LOG_LEVEL, LOG_FORMAT, LOG_FILE)
    - BrowserConfig: 브라우저 세션 설정 (~/.a9s/config.yaml + A9S_* 환경변수)

Usage:
    from core.config import settings, get_default_region, load_browser_config

    region = get_default_region()  # AWS_REGION > AWS_DEFAULT_REGION > 기본값
    config = load_browser_config()
    if config.auto_refresh:
        ...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)


# =============================================================================
# 기본 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)"""

    # AWS
    DEFAULT_REGION: str = "us-east-1"
    DEFAULT_PROFILE: str = "default"

    # 브라우저
    REFRESH_INTERVAL_SECONDS: int = 10
    ACTION_SETTLE_SECONDS: float = 1.0
    MAX_WORKERS: int = 4

    # API 호출
    API_MAX_ATTEMPTS: int = 5
    API_RETRY_MODE: str = "adaptive"
    API_CONNECT_TIMEOUT: int = 10
    API_READ_TIMEOUT: int = 30

    # 경로
    CONFIG_DIR: Path = field(default_factory=lambda: Path.home() / ".a9s")
    CONFIG_FILE_NAME: str = "config.yaml"
    LOG_FILE_NAME: str = "a9s.log"

    # i18n
    SUPPORTED_LANGS: tuple[str, ...] = ("ko", "en")


settings = Settings()


# =============================================================================
# 환경변수 헬퍼
# =============================================================================

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환 (인식할 수 없는 값이면 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default

    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (변환 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_default_profile() -> str | None:
    """AWS_PROFILE > AWS_DEFAULT_PROFILE 순서로 프로파일 반환"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_default_region() -> str:
    """AWS_REGION > AWS_DEFAULT_REGION > settings.DEFAULT_REGION 순서로 리전 반환"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 패키지 메타데이터에서 버전 문자열 반환"""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("a9s")
    except PackageNotFoundError:
        return "0.0.0-dev"


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷 문자열
        date_format: 날짜 포맷
        file: 로그 파일 경로 (전체 화면 UI 실행 중에는 파일로만 기록)
    """

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file: Path | None = None

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT / LOG_FILE 환경변수에서 로드"""
        config = cls()
        config.level = os.environ.get("LOG_LEVEL", config.level).upper()
        config.format = os.environ.get("LOG_FORMAT", config.format)
        log_file = os.environ.get("LOG_FILE")
        config.file = Path(log_file).expanduser() if log_file else settings.CONFIG_DIR / settings.LOG_FILE_NAME
        return config


# =============================================================================
# 브라우저 설정
# =============================================================================


@dataclass
class BrowserConfig:
    """브라우저 세션 설정

    우선순위: CLI 옵션 > A9S_* 환경변수 > config.yaml > 기본값
    """

    auto_refresh: bool = True
    refresh_interval: int = settings.REFRESH_INTERVAL_SECONDS
    lang: str = "ko"
    start_resource: str | None = None

    def __post_init__(self) -> None:
        if self.refresh_interval < 1:
            raise ConfigError("refresh_interval", f"must be at least 1 (got {self.refresh_interval})")
        if self.lang not in settings.SUPPORTED_LANGS:
            raise ConfigError("lang", f"unsupported language: {self.lang}")


def _load_yaml(path: Path) -> dict[str, Any]:
    """YAML 설정 파일 로드 (없으면 빈 dict)"""
    if not path.exists():
        return {}

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(str(path), "cannot read config file", cause=e) from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "top level must be a mapping")
    return data


def load_browser_config(path: Path | None = None) -> BrowserConfig:
    """config.yaml과 환경변수를 병합해 BrowserConfig 생성

    Args:
        path: 설정 파일 경로 (None이면 ~/.a9s/config.yaml)

    Raises:
        ConfigError: 파일 형식 또는 값이 잘못된 경우
    """
    path = path or settings.CONFIG_DIR / settings.CONFIG_FILE_NAME
    data = _load_yaml(path)
    logger.debug("설정 파일 로드: %s (%d개 항목)", path, len(data))

    defaults = BrowserConfig()
    auto_refresh = data.get("auto_refresh", defaults.auto_refresh)
    if not isinstance(auto_refresh, bool):
        raise ConfigError("auto_refresh", "must be a boolean")

    refresh_interval = data.get("refresh_interval", defaults.refresh_interval)
    if not isinstance(refresh_interval, int) or isinstance(refresh_interval, bool):
        raise ConfigError("refresh_interval", "must be an integer")

    return BrowserConfig(
        auto_refresh=get_env_bool("A9S_AUTO_REFRESH", auto_refresh),
        refresh_interval=get_env_int("A9S_REFRESH_INTERVAL", refresh_interval),
        lang=os.environ.get("A9S_LANG") or str(data.get("lang", defaults.lang)),
        start_resource=os.environ.get("A9S_RESOURCE") or data.get("start_resource"),
    )
