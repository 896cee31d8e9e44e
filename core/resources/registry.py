"""
core/resources/registry.py - 리소스 레지스트리

짧은 키("ec2", "s3", ...)를 리소스 인스턴스에 매핑합니다.
시작 시 한 번 채워지며 이후에는 조회만 합니다.

Usage:
    registry = default_registry()
    ec2 = registry.get("ec2")
    registry.keys()           # 정렬된 키 목록 (선택 메뉴용)
    registry.filter("iam")    # ["iam-policies", "iam-roles", "iam-users"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from core.exceptions import UnknownResourceError

from .base import Resource

logger = logging.getLogger(__name__)


class Registry:
    """리소스 키 -> Resource 매핑

    Args:
        reserved_keys: 전역 명령 키 (빠른 작업 키와 충돌 금지)
    """

    def __init__(self, reserved_keys: Iterable[str] = ()):
        self._resources: dict[str, Resource] = {}
        self._reserved_keys = frozenset(reserved_keys)

    def register(self, key: str, resource: Resource) -> None:
        """리소스 등록 (같은 키가 있으면 덮어씀)

        Raises:
            ValueError: 빠른 작업 키가 전역 명령 키와 충돌하는 경우
        """
        clashes = sorted(a.key for a in resource.quick_actions() if a.key in self._reserved_keys)
        if clashes:
            raise ValueError(f"{key}: quick action keys {clashes} clash with global commands")

        if key in self._resources:
            logger.debug("리소스 덮어쓰기: %s", key)
        resource.key = key
        self._resources[key] = resource

    def get(self, key: str) -> Resource | None:
        """키로 조회 (없으면 None)"""
        return self._resources.get(key)

    def require(self, key: str) -> Resource:
        """키로 조회

        Raises:
            UnknownResourceError: 등록되지 않은 키
        """
        resource = self._resources.get(key)
        if resource is None:
            raise UnknownResourceError(key)
        return resource

    def keys(self) -> list[str]:
        """정렬된 키 목록"""
        return sorted(self._resources)

    def filter(self, text: str) -> list[str]:
        """키에 text가 포함된 항목 (대소문자 무시, 정렬)"""
        needle = text.strip().lower()
        if not needle:
            return self.keys()
        return [key for key in self.keys() if needle in key.lower()]

    def __contains__(self, key: object) -> bool:
        return key in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[tuple[str, Resource]]:
        for key in self.keys():
            yield key, self._resources[key]


def default_registry(reserved_keys: Iterable[str] = ()) -> Registry:
    """기본 리소스 카탈로그로 채운 레지스트리 생성"""
    from .billing import Billing
    from .compute import ECSClusters, EC2Instances, EKSClusters, LambdaFunctions
    from .database import DynamoDBTables, ElastiCacheClusters, ElastiCacheReplicationGroups, RDSInstances
    from .messaging import SNSTopics, SQSQueues
    from .network import (
        CloudFrontDistributions,
        HostedZones,
        HttpAPIs,
        LoadBalancers,
        RestAPIs,
        SecurityGroups,
        Subnets,
        VPCs,
    )
    from .security import ACMCertificates, CognitoUserPools, IAMPolicies, IAMRoles, IAMUsers, KMSKeys, Secrets
    from .storage import ECRRepositories, S3Buckets

    registry = Registry(reserved_keys)
    catalog: list[tuple[str, Resource]] = [
        ("ec2", EC2Instances()),
        ("s3", S3Buckets()),
        ("lambda", LambdaFunctions()),
        ("ecs", ECSClusters()),
        ("eks", EKSClusters()),
        ("rds", RDSInstances()),
        ("acm", ACMCertificates()),
        ("billing", Billing()),
        ("cloudfront", CloudFrontDistributions()),
        ("alb", LoadBalancers()),
        ("dynamodb", DynamoDBTables()),
        ("secrets", Secrets()),
        ("kms", KMSKeys()),
        ("ecr", ECRRepositories()),
        ("cognito", CognitoUserPools()),
        ("iam-users", IAMUsers()),
        ("iam-roles", IAMRoles()),
        ("iam-policies", IAMPolicies()),
        ("vpc", VPCs()),
        ("subnets", Subnets()),
        ("security-groups", SecurityGroups()),
        ("sqs", SQSQueues()),
        ("sns", SNSTopics()),
        ("api-gateway", RestAPIs()),
        ("api-gateway-v2", HttpAPIs()),
        ("elasticache-clusters", ElastiCacheClusters()),
        ("elasticache-groups", ElastiCacheReplicationGroups()),
        ("route53", HostedZones()),
    ]
    for key, resource in catalog:
        registry.register(key, resource)
    return registry
