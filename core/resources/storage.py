"""
core/resources/storage.py - Storage 리소스

S3 Bucket, ECR Repository.
S3는 create/delete/empty 빠른 작업을 제공합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.exceptions import APICallError

from .base import Column, QuickAction, Resource
from .helpers import api_call, describe_or_none, format_time, paginate

if TYPE_CHECKING:
    from core.client import AWSClient

logger = logging.getLogger(__name__)

# LocationConstraint가 비어 있으면 us-east-1
S3_DEFAULT_REGION = "us-east-1"

# 레거시 LocationConstraint 값
S3_LEGACY_LOCATIONS = {"EU": "eu-west-1"}

# delete_objects 최대 키 수
S3_DELETE_BATCH = 1000


# =============================================================================
# S3
# =============================================================================


@dataclass
class S3Bucket:
    name: str
    creation_date: str
    region: str


class S3Buckets(Resource[S3Bucket]):
    """S3 버킷 목록"""

    key = "s3"
    name = "S3 Buckets"
    COLUMNS = (
        Column("Name", 50),
        Column("Creation Date", 25),
        Column("Region", 20),
    )

    def _collect(self, client: AWSClient) -> list[S3Bucket]:
        s3 = client.service("s3")
        buckets: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        with api_call("s3", "list_buckets"):
            while True:
                resp = s3.list_buckets(**kwargs)
                buckets.extend(resp.get("Buckets", []))
                token = resp.get("ContinuationToken")
                if not token:
                    break
                kwargs["ContinuationToken"] = token

        return [
            S3Bucket(
                name=b["Name"],
                creation_date=format_time(b.get("CreationDate")),
                region=self._bucket_region(s3, b["Name"]),
            )
            for b in buckets
        ]

    @staticmethod
    def _bucket_region(s3: Any, bucket: str) -> str:
        location = describe_or_none("s3", "get_bucket_location", s3.get_bucket_location, Bucket=bucket)
        if location is None:
            return ""
        constraint = location.get("LocationConstraint") or S3_DEFAULT_REGION
        return S3_LEGACY_LOCATIONS.get(constraint, constraint)

    def _row(self, item: S3Bucket) -> tuple:
        return (item.name, item.creation_date, item.region)

    def _item_id(self, item: S3Bucket) -> str:
        return item.name

    def quick_actions(self) -> list[QuickAction]:
        return [
            QuickAction(
                key="c",
                label="create",
                description="Create bucket",
                handler=create_bucket,
                needs_selection=False,
                input_label="Bucket Name",
                confirm_template="Create bucket [green]{id}[/green] in region [yellow]{region}[/yellow]?",
            ),
            QuickAction(
                key="d",
                label="delete",
                description="Delete bucket",
                handler=delete_bucket,
                confirm_template="[red]Delete[/red] bucket [bold]{id}[/bold]?\n\n[yellow]Warning: Bucket must be empty![/yellow]",
            ),
            QuickAction(
                key="e",
                label="empty",
                description="Empty bucket",
                handler=empty_bucket,
                confirm_template=(
                    "[red]Empty[/red] bucket [bold]{id}[/bold]?\n\n"
                    "[yellow]WARNING: This will permanently delete ALL objects!\n"
                    "This action cannot be undone![/yellow]"
                ),
            ),
        ]


def create_bucket(client: AWSClient, bucket_name: str) -> None:
    """현재 리전에 버킷 생성"""
    region = client.region()
    kwargs: dict[str, Any] = {"Bucket": bucket_name}
    # us-east-1 외 리전은 LocationConstraint 필수
    if region and region != S3_DEFAULT_REGION:
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}

    with api_call("s3", "create_bucket"):
        client.service("s3").create_bucket(**kwargs)
    logger.info("S3 버킷 생성: %s (%s)", bucket_name, region)


def delete_bucket(client: AWSClient, bucket_name: str) -> None:
    """빈 버킷 삭제"""
    with api_call("s3", "delete_bucket"):
        client.service("s3").delete_bucket(Bucket=bucket_name)
    logger.info("S3 버킷 삭제: %s", bucket_name)


def empty_bucket(client: AWSClient, bucket_name: str) -> None:
    """버킷의 모든 객체 버전과 삭제 마커 삭제

    Raises:
        APICallError: 목록/삭제 호출 실패 또는 일부 키 삭제 실패
    """
    s3 = client.service("s3")
    deleted = 0

    with api_call("s3", "list_object_versions"):
        pages = s3.get_paginator("list_object_versions").paginate(Bucket=bucket_name)
        for page in pages:
            keys = [
                {"Key": obj["Key"], "VersionId": obj["VersionId"]}
                for obj in page.get("Versions", []) + page.get("DeleteMarkers", [])
            ]
            for i in range(0, len(keys), S3_DELETE_BATCH):
                batch = keys[i : i + S3_DELETE_BATCH]
                resp = s3.delete_objects(Bucket=bucket_name, Delete={"Objects": batch, "Quiet": True})
                errors = resp.get("Errors", [])
                if errors:
                    first = errors[0]
                    raise APICallError(
                        "s3",
                        "delete_objects",
                        error_code=first.get("Code"),
                        error_message=f"{len(errors)} keys failed, e.g. {first.get('Key')}: {first.get('Message')}",
                    )
                deleted += len(batch)

    logger.info("S3 버킷 비우기 완료: %s (%d개 삭제)", bucket_name, deleted)


# =============================================================================
# ECR
# =============================================================================


@dataclass
class ECRRepository:
    name: str
    uri: str
    image_count: str
    scan_on_push: bool
    tag_mutability: str
    encryption: str


class ECRRepositories(Resource[ECRRepository]):
    key = "ecr"
    name = "ECR Repositories"
    COLUMNS = (
        Column("Name", 35),
        Column("URI", 60),
        Column("Images", 8),
        Column("Scan", 6),
        Column("Tag Mutability", 15),
        Column("Encryption", 12),
    )

    def _collect(self, client: AWSClient) -> list[ECRRepository]:
        ecr = client.service("ecr")
        repos = []
        for repo in paginate(ecr, "ecr", "describe_repositories", "repositories"):
            name = repo.get("repositoryName", "")
            repos.append(
                ECRRepository(
                    name=name,
                    uri=repo.get("repositoryUri", ""),
                    image_count=self._image_count(ecr, name),
                    scan_on_push=repo.get("imageScanningConfiguration", {}).get("scanOnPush", False),
                    tag_mutability=repo.get("imageTagMutability", ""),
                    encryption=repo.get("encryptionConfiguration", {}).get("encryptionType", ""),
                )
            )
        return repos

    @staticmethod
    def _image_count(ecr: Any, repository_name: str) -> str:
        try:
            return str(len(paginate(ecr, "ecr", "list_images", "imageIds", repositoryName=repository_name)))
        except APICallError as e:
            logger.debug("ECR 이미지 수 조회 실패 (%s): %s", repository_name, e)
            return ""

    def _row(self, item: ECRRepository) -> tuple:
        return (item.name, item.uri, item.image_count, item.scan_on_push, item.tag_mutability, item.encryption)

    def _item_id(self, item: ECRRepository) -> str:
        return item.name
