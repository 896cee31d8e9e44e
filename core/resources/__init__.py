"""
core/resources - 리소스 종류 카탈로그

각 리소스 종류는 Resource를 구현하며, default_registry()가
전체 카탈로그를 짧은 키("ec2", "s3", ...)로 등록합니다.

Usage:
    from core.resources import default_registry

    registry = default_registry()
    ec2 = registry.require("ec2")
    ec2.fetch(client)
    ec2.rows()
"""

from .base import NO_ID, Column, QuickAction, Resource, Row
from .registry import Registry, default_registry

__all__: list[str] = [
    "NO_ID",
    "Column",
    "QuickAction",
    "Resource",
    "Row",
    "Registry",
    "default_registry",
]
