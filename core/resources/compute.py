"""
core/resources/compute.py - Compute 리소스

EC2 Instance, Lambda Function, ECS Cluster, EKS Cluster.
EC2는 stop/start/reboot 빠른 작업을 제공합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Column, QuickAction, Resource
from .helpers import api_call, describe_or_none, format_time, paginate, parse_tags

if TYPE_CHECKING:
    from core.client import AWSClient

logger = logging.getLogger(__name__)

# EC2 상태 변경 후 새로고침까지 대기 (초)
EC2_SETTLE_SECONDS = 2.0

# describe_clusters 최대 배치 크기
ECS_DESCRIBE_BATCH = 100


# =============================================================================
# EC2
# =============================================================================


@dataclass
class EC2Instance:
    instance_id: str
    name: str
    state: str
    instance_type: str
    private_ip: str
    public_ip: str
    availability_zone: str
    launch_time: str


class EC2Instances(Resource[EC2Instance]):
    """EC2 인스턴스 목록"""

    key = "ec2"
    name = "EC2 Instances"
    COLUMNS = (
        Column("ID", 20),
        Column("Name", 30),
        Column("State", 12),
        Column("Type", 15),
        Column("Private IP", 16),
        Column("Public IP", 16),
        Column("AZ", 15),
        Column("Launch Time", 20),
    )

    def _collect(self, client: AWSClient) -> list[EC2Instance]:
        reservations = paginate(client.service("ec2"), "ec2", "describe_instances", "Reservations")
        return [self._parse(inst) for r in reservations for inst in r.get("Instances", [])]

    @staticmethod
    def _parse(inst: dict) -> EC2Instance:
        tags = parse_tags(inst.get("Tags"))
        return EC2Instance(
            instance_id=inst.get("InstanceId", ""),
            name=tags.get("Name", ""),
            state=inst.get("State", {}).get("Name", ""),
            instance_type=inst.get("InstanceType", ""),
            private_ip=inst.get("PrivateIpAddress", ""),
            public_ip=inst.get("PublicIpAddress", ""),
            availability_zone=inst.get("Placement", {}).get("AvailabilityZone", ""),
            launch_time=format_time(inst.get("LaunchTime")),
        )

    def _row(self, item: EC2Instance) -> tuple:
        return (
            item.instance_id,
            item.name,
            item.state,
            item.instance_type,
            item.private_ip,
            item.public_ip,
            item.availability_zone,
            item.launch_time,
        )

    def _item_id(self, item: EC2Instance) -> str:
        return item.instance_id

    def quick_actions(self) -> list[QuickAction]:
        return [
            QuickAction(
                key="s",
                label="stop",
                description="Stop instance",
                handler=stop_instance,
                confirm_template="[red]stop[/red] instance [bold]{id}[/bold]?",
                settle_seconds=EC2_SETTLE_SECONDS,
            ),
            QuickAction(
                key="S",
                label="start",
                description="Start instance",
                handler=start_instance,
                confirm_template="[green]start[/green] instance [bold]{id}[/bold]?",
                settle_seconds=EC2_SETTLE_SECONDS,
            ),
            QuickAction(
                key="R",
                label="restart",
                description="Restart instance",
                handler=reboot_instance,
                confirm_template="[yellow]restart[/yellow] instance [bold]{id}[/bold]?",
                settle_seconds=EC2_SETTLE_SECONDS,
            ),
        ]


def stop_instance(client: AWSClient, instance_id: str) -> None:
    with api_call("ec2", "stop_instances"):
        client.service("ec2").stop_instances(InstanceIds=[instance_id])
    logger.info("EC2 중지 요청: %s", instance_id)


def start_instance(client: AWSClient, instance_id: str) -> None:
    with api_call("ec2", "start_instances"):
        client.service("ec2").start_instances(InstanceIds=[instance_id])
    logger.info("EC2 시작 요청: %s", instance_id)


def reboot_instance(client: AWSClient, instance_id: str) -> None:
    with api_call("ec2", "reboot_instances"):
        client.service("ec2").reboot_instances(InstanceIds=[instance_id])
    logger.info("EC2 재시작 요청: %s", instance_id)


# =============================================================================
# Lambda
# =============================================================================


@dataclass
class LambdaFunction:
    function_name: str
    runtime: str
    handler: str
    memory_size: int
    timeout: int
    last_modified: str


class LambdaFunctions(Resource[LambdaFunction]):
    key = "lambda"
    name = "Lambda Functions"
    COLUMNS = (
        Column("Function Name", 40),
        Column("Runtime", 15),
        Column("Handler", 30),
        Column("Memory (MB)", 12),
        Column("Timeout (s)", 12),
        Column("Last Modified", 25),
    )

    def _collect(self, client: AWSClient) -> list[LambdaFunction]:
        functions = paginate(client.service("lambda"), "lambda", "list_functions", "Functions")
        return [
            LambdaFunction(
                function_name=fn.get("FunctionName", ""),
                runtime=fn.get("Runtime", ""),
                handler=fn.get("Handler", ""),
                memory_size=fn.get("MemorySize", 0),
                timeout=fn.get("Timeout", 0),
                last_modified=fn.get("LastModified", ""),
            )
            for fn in functions
        ]

    def _row(self, item: LambdaFunction) -> tuple:
        return (item.function_name, item.runtime, item.handler, item.memory_size, item.timeout, item.last_modified)

    def _item_id(self, item: LambdaFunction) -> str:
        return item.function_name


# =============================================================================
# ECS
# =============================================================================


@dataclass
class ECSCluster:
    cluster_name: str
    status: str
    running_tasks: int
    pending_tasks: int
    active_services: int
    container_instances: int


class ECSClusters(Resource[ECSCluster]):
    key = "ecs"
    name = "ECS Clusters"
    COLUMNS = (
        Column("Cluster Name", 35),
        Column("Status", 12),
        Column("Running Tasks", 14),
        Column("Pending Tasks", 14),
        Column("Services", 10),
        Column("Instances", 10),
    )

    def _collect(self, client: AWSClient) -> list[ECSCluster]:
        ecs = client.service("ecs")
        arns = paginate(ecs, "ecs", "list_clusters", "clusterArns")

        clusters: list[ECSCluster] = []
        for i in range(0, len(arns), ECS_DESCRIBE_BATCH):
            with api_call("ecs", "describe_clusters"):
                resp = ecs.describe_clusters(clusters=arns[i : i + ECS_DESCRIBE_BATCH])
            for c in resp.get("clusters", []):
                clusters.append(
                    ECSCluster(
                        cluster_name=c.get("clusterName", ""),
                        status=c.get("status", ""),
                        running_tasks=c.get("runningTasksCount", 0),
                        pending_tasks=c.get("pendingTasksCount", 0),
                        active_services=c.get("activeServicesCount", 0),
                        container_instances=c.get("registeredContainerInstancesCount", 0),
                    )
                )
        return clusters

    def _row(self, item: ECSCluster) -> tuple:
        return (
            item.cluster_name,
            item.status,
            item.running_tasks,
            item.pending_tasks,
            item.active_services,
            item.container_instances,
        )

    def _item_id(self, item: ECSCluster) -> str:
        return item.cluster_name


# =============================================================================
# EKS
# =============================================================================


@dataclass
class EKSCluster:
    name: str
    status: str = ""
    version: str = ""
    platform_version: str = ""
    created_at: str = ""


class EKSClusters(Resource[EKSCluster]):
    key = "eks"
    name = "EKS Clusters"
    COLUMNS = (
        Column("Name", 30),
        Column("Status", 12),
        Column("Version", 10),
        Column("Platform Version", 18),
        Column("Created At", 20),
    )

    def _collect(self, client: AWSClient) -> list[EKSCluster]:
        eks = client.service("eks")
        clusters = []
        for cluster_name in paginate(eks, "eks", "list_clusters", "clusters"):
            detail = describe_or_none("eks", "describe_cluster", eks.describe_cluster, name=cluster_name)
            info = (detail or {}).get("cluster", {})
            clusters.append(
                EKSCluster(
                    name=cluster_name,
                    status=info.get("status", ""),
                    version=info.get("version", ""),
                    platform_version=info.get("platformVersion", ""),
                    created_at=format_time(info.get("createdAt")),
                )
            )
        return clusters

    def _row(self, item: EKSCluster) -> tuple:
        return (item.name, item.status, item.version, item.platform_version, item.created_at)

    def _item_id(self, item: EKSCluster) -> str:
        return item.name
