"""
core/resources/helpers.py - 리소스 수집 공통 헬퍼

태그 파싱, 셀 포맷팅, API 호출 예외 변환, 페이지네이션 소진.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import APICallError

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_tags(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """AWS 태그 리스트를 dict로 변환"""
    if not tags:
        return {}
    return {tag["Key"]: tag.get("Value", "") for tag in tags if "Key" in tag}


def format_time(value: datetime | str | None) -> str:
    """datetime을 표시용 문자열로 변환 (없으면 빈 문자열)"""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIME_FORMAT)
    return str(value)


def format_date(value: datetime | None) -> str:
    """datetime을 YYYY-MM-DD로 변환"""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def cell(value: Any) -> str:
    """테이블 셀 값 정규화 (None은 빈 문자열)"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


@contextmanager
def api_call(service: str, operation: str) -> Iterator[None]:
    """botocore 예외를 APICallError로 변환하는 컨텍스트

    Example:
        with api_call("ec2", "stop_instances"):
            ec2.stop_instances(InstanceIds=[instance_id])
    """
    try:
        yield
    except ClientError as e:
        raise APICallError.from_client_error(service, operation, e) from e
    except BotoCoreError as e:
        raise APICallError(service, operation, error_message=str(e), cause=e) from e


def paginate(client: Any, service: str, operation: str, result_key: str, **kwargs: Any) -> list[dict[str, Any]]:
    """페이지네이터를 끝까지 소진해 result_key 항목을 모두 반환

    Raises:
        APICallError: 어느 페이지에서든 호출 실패 시
    """
    items: list[dict[str, Any]] = []
    with api_call(service, operation):
        paginator = client.get_paginator(operation)
        for page in paginator.paginate(**kwargs):
            items.extend(page.get(result_key, []))
    return items


def describe_or_none(service: str, operation: str, call: Any, **kwargs: Any) -> dict[str, Any] | None:
    """항목별 상세 조회 (실패 시 None)

    목록 조회는 성공했지만 개별 상세 조회가 실패한 항목은
    빈 필드로 표시됩니다 (행/컬럼 수 유지).
    """
    try:
        result: dict[str, Any] = call(**kwargs)
        return result
    except (ClientError, BotoCoreError) as e:
        logger.debug("%s.%s 상세 조회 실패 (빈 값으로 표시): %s", service, operation, e)
        return None
