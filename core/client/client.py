"""
core/client/client.py - AWS Provider Client 핸들

브라우저가 사용하는 유일한 원격 호출 진입점입니다.
현재 리전/프로파일로 스코프된 boto3 client를 서비스별로 지연 생성하고,
재구성(reconfigure) 시 세션과 client 캐시 전체를 한 번에 교체합니다.

Example:
    from core.client import AWSClient

    client = AWSClient(profile="dev", region="ap-northeast-2")
    ec2 = client.service("ec2")
    client.reconfigure(region="eu-west-1")
    client.region()  # "eu-west-1"
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ProfileNotFound

from core.config import get_default_profile, get_default_region, settings
from core.exceptions import ClientConfigError

logger = logging.getLogger(__name__)

# us-east-1, ap-northeast-2, us-gov-west-1, cn-north-1 ...
_REGION_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")

SessionFactory = Callable[..., boto3.Session]

# 모든 서비스 client에 적용 (adaptive 재시도 + 타임아웃)
CLIENT_CONFIG = Config(
    retries={"max_attempts": settings.API_MAX_ATTEMPTS, "mode": settings.API_RETRY_MODE},  # type: ignore[typeddict-item]
    connect_timeout=settings.API_CONNECT_TIMEOUT,
    read_timeout=settings.API_READ_TIMEOUT,
    max_pool_connections=settings.MAX_WORKERS * 2,
)


def is_valid_region_name(region: str) -> bool:
    """리전 이름 형식 검증"""
    return bool(_REGION_PATTERN.match(region))


class AWSClient:
    """AWS Provider Client

    Attributes:
        region(): 현재 리전
        profile(): 현재 자격 증명 프로파일 ("default"는 기본 자격 증명 체인)

    Thread safety:
        service()와 reconfigure()는 내부 lock으로 보호됩니다.
        재구성 중 진행 중인 조회와의 직렬화는 호출자(BrowserController) 책임입니다.
    """

    def __init__(
        self,
        profile: str | None = None,
        region: str | None = None,
        session_factory: SessionFactory | None = None,
    ):
        """초기화

        Args:
            profile: 프로파일 이름 (None이면 AWS_PROFILE 또는 "default")
            region: 리전 (None이면 프로파일 설정 > 환경변수 > 기본값)
            session_factory: boto3.Session 생성 함수 (테스트용)

        Raises:
            ClientConfigError: 프로파일을 찾을 수 없거나 리전이 잘못된 경우
        """
        self._lock = threading.RLock()
        self._session_factory = session_factory or boto3.Session
        self._clients: dict[str, Any] = {}

        profile = profile or get_default_profile() or settings.DEFAULT_PROFILE
        session = self._build_session(profile, region)
        self._session = session
        self._profile = profile
        self._region = region or session.region_name or get_default_region()
        self._validate_region(self._region, profile)

        logger.info("AWS client 초기화: profile=%s, region=%s", self._profile, self._region)

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    def region(self) -> str:
        """현재 리전"""
        with self._lock:
            return self._region

    def profile(self) -> str:
        """현재 프로파일"""
        with self._lock:
            return self._profile

    def service(self, service_name: str) -> Any:
        """현재 리전/프로파일의 boto3 client 반환 (서비스별 캐시)"""
        with self._lock:
            client = self._clients.get(service_name)
            if client is None:
                client = self._session.client(service_name, region_name=self._region, config=CLIENT_CONFIG)
                self._clients[service_name] = client
            return client

    # -------------------------------------------------------------------------
    # 재구성
    # -------------------------------------------------------------------------

    def reconfigure(self, region: str | None = None, profile: str | None = None) -> None:
        """리전 및/또는 프로파일 변경

        새 세션 생성과 검증이 모두 성공한 뒤에만 세션과 client 캐시를 교체합니다.
        실패 시 이전 구성은 그대로 유지됩니다.

        Raises:
            ClientConfigError: 새 구성이 유효하지 않은 경우
        """
        with self._lock:
            new_profile = profile or self._profile
            new_region = region or self._region

        self._validate_region(new_region, new_profile)
        session = self._build_session(new_profile, new_region)

        with self._lock:
            self._session = session
            self._clients = {}
            self._profile = new_profile
            self._region = new_region

        logger.info("AWS client 재구성: profile=%s, region=%s", new_profile, new_region)

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    def _build_session(self, profile: str, region: str | None) -> boto3.Session:
        # "default"는 프로파일을 지정하지 않고 기본 자격 증명 체인 사용
        profile_name = None if profile == settings.DEFAULT_PROFILE else profile
        try:
            return self._session_factory(profile_name=profile_name, region_name=region)
        except ProfileNotFound as e:
            raise ClientConfigError(f"Profile not found: {profile}", profile=profile, region=region) from e
        except BotoCoreError as e:
            raise ClientConfigError("Failed to create AWS session", profile=profile, region=region, cause=e) from e

    @staticmethod
    def _validate_region(region: str, profile: str) -> None:
        if not region or not is_valid_region_name(region):
            raise ClientConfigError(f"Invalid region name: {region!r}", profile=profile, region=region)

    def __repr__(self) -> str:
        return f"AWSClient(profile={self.profile()!r}, region={self.region()!r})"
