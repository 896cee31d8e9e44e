# core/client/__init__.py
"""
AWS Provider Client 모듈

현재 리전/프로파일로 스코프된 boto3 client를 제공하고,
재구성 시 세션 전체를 교체합니다.
"""

from .client import CLIENT_CONFIG, AWSClient, is_valid_region_name

__all__: list[str] = [
    "AWSClient",
    "CLIENT_CONFIG",
    "is_valid_region_name",
]
