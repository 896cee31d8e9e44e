"""
core/resources/database.py - Database 리소스

RDS Instance, DynamoDB Table, ElastiCache Cluster / Replication Group.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Column, Resource
from .helpers import describe_or_none, paginate

if TYPE_CHECKING:
    from core.client import AWSClient


def format_bytes(size: int | None) -> str:
    """바이트 수를 사람이 읽기 쉬운 단위로 변환"""
    if size is None:
        return ""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if value < 1024 or unit == "TB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


# =============================================================================
# RDS
# =============================================================================


@dataclass
class RDSInstance:
    identifier: str
    instance_class: str
    engine: str
    engine_version: str
    status: str
    endpoint: str
    availability_zone: str
    multi_az: bool


class RDSInstances(Resource[RDSInstance]):
    key = "rds"
    name = "RDS Instances"
    COLUMNS = (
        Column("DB Instance ID", 30),
        Column("Class", 18),
        Column("Engine", 15),
        Column("Version", 12),
        Column("Status", 15),
        Column("Endpoint", 50),
        Column("AZ", 15),
        Column("Multi-AZ", 10),
    )

    def _collect(self, client: AWSClient) -> list[RDSInstance]:
        instances = paginate(client.service("rds"), "rds", "describe_db_instances", "DBInstances")
        result = []
        for db in instances:
            endpoint = db.get("Endpoint") or {}
            address = endpoint.get("Address", "")
            if address and endpoint.get("Port"):
                address = f"{address}:{endpoint['Port']}"
            result.append(
                RDSInstance(
                    identifier=db.get("DBInstanceIdentifier", ""),
                    instance_class=db.get("DBInstanceClass", ""),
                    engine=db.get("Engine", ""),
                    engine_version=db.get("EngineVersion", ""),
                    status=db.get("DBInstanceStatus", ""),
                    endpoint=address,
                    availability_zone=db.get("AvailabilityZone", ""),
                    multi_az=db.get("MultiAZ", False),
                )
            )
        return result

    def _row(self, item: RDSInstance) -> tuple:
        return (
            item.identifier,
            item.instance_class,
            item.engine,
            item.engine_version,
            item.status,
            item.endpoint,
            item.availability_zone,
            item.multi_az,
        )

    def _item_id(self, item: RDSInstance) -> str:
        return item.identifier


# =============================================================================
# DynamoDB
# =============================================================================


@dataclass
class DynamoDBTable:
    name: str
    status: str = ""
    partition_key: str = ""
    sort_key: str = ""
    item_count: str = ""
    size: str = ""
    billing_mode: str = ""


class DynamoDBTables(Resource[DynamoDBTable]):
    key = "dynamodb"
    name = "DynamoDB Tables"
    COLUMNS = (
        Column("Name", 35),
        Column("Status", 12),
        Column("Partition Key", 20),
        Column("Sort Key", 20),
        Column("Items", 12),
        Column("Size", 15),
        Column("Billing Mode", 15),
    )

    def _collect(self, client: AWSClient) -> list[DynamoDBTable]:
        dynamodb = client.service("dynamodb")
        tables = []
        for table_name in paginate(dynamodb, "dynamodb", "list_tables", "TableNames"):
            detail = describe_or_none("dynamodb", "describe_table", dynamodb.describe_table, TableName=table_name)
            if detail is None:
                tables.append(DynamoDBTable(name=table_name))
                continue

            table = detail.get("Table", {})
            keys = {k["KeyType"]: k["AttributeName"] for k in table.get("KeySchema", [])}
            billing = table.get("BillingModeSummary", {}).get("BillingMode", "PROVISIONED")
            tables.append(
                DynamoDBTable(
                    name=table_name,
                    status=table.get("TableStatus", ""),
                    partition_key=keys.get("HASH", ""),
                    sort_key=keys.get("RANGE", ""),
                    item_count=str(table.get("ItemCount", "")),
                    size=format_bytes(table.get("TableSizeBytes")),
                    billing_mode=billing,
                )
            )
        return tables

    def _row(self, item: DynamoDBTable) -> tuple:
        return (
            item.name,
            item.status,
            item.partition_key,
            item.sort_key,
            item.item_count,
            item.size,
            item.billing_mode,
        )

    def _item_id(self, item: DynamoDBTable) -> str:
        return item.name


# =============================================================================
# ElastiCache
# =============================================================================


@dataclass
class ElastiCacheCluster:
    cluster_id: str
    engine: str
    engine_version: str
    node_type: str
    num_nodes: int
    status: str
    availability_zone: str


class ElastiCacheClusters(Resource[ElastiCacheCluster]):
    key = "elasticache-clusters"
    name = "ElastiCache Clusters"
    COLUMNS = (
        Column("Cluster ID", 30),
        Column("Engine", 12),
        Column("Version", 10),
        Column("Node Type", 18),
        Column("Nodes", 8),
        Column("Status", 15),
        Column("AZ", 15),
    )

    def _collect(self, client: AWSClient) -> list[ElastiCacheCluster]:
        clusters = paginate(client.service("elasticache"), "elasticache", "describe_cache_clusters", "CacheClusters")
        return [
            ElastiCacheCluster(
                cluster_id=c.get("CacheClusterId", ""),
                engine=c.get("Engine", ""),
                engine_version=c.get("EngineVersion", ""),
                node_type=c.get("CacheNodeType", ""),
                num_nodes=c.get("NumCacheNodes", 0),
                status=c.get("CacheClusterStatus", ""),
                availability_zone=c.get("PreferredAvailabilityZone", ""),
            )
            for c in clusters
        ]

    def _row(self, item: ElastiCacheCluster) -> tuple:
        return (
            item.cluster_id,
            item.engine,
            item.engine_version,
            item.node_type,
            item.num_nodes,
            item.status,
            item.availability_zone,
        )

    def _item_id(self, item: ElastiCacheCluster) -> str:
        return item.cluster_id


@dataclass
class ReplicationGroup:
    group_id: str
    description: str
    status: str
    node_type: str
    node_groups: int
    cluster_mode: str


class ElastiCacheReplicationGroups(Resource[ReplicationGroup]):
    key = "elasticache-groups"
    name = "ElastiCache Replication Groups"
    COLUMNS = (
        Column("Replication Group ID", 30),
        Column("Description", 40),
        Column("Status", 15),
        Column("Node Type", 18),
        Column("Node Groups", 12),
        Column("Cluster Mode", 12),
    )

    def _collect(self, client: AWSClient) -> list[ReplicationGroup]:
        groups = paginate(
            client.service("elasticache"), "elasticache", "describe_replication_groups", "ReplicationGroups"
        )
        return [
            ReplicationGroup(
                group_id=g.get("ReplicationGroupId", ""),
                description=g.get("Description", ""),
                status=g.get("Status", ""),
                node_type=g.get("CacheNodeType", ""),
                node_groups=len(g.get("NodeGroups", [])),
                cluster_mode=g.get("ClusterMode") or ("enabled" if g.get("ClusterEnabled") else "disabled"),
            )
            for g in groups
        ]

    def _row(self, item: ReplicationGroup) -> tuple:
        return (item.group_id, item.description, item.status, item.node_type, item.node_groups, item.cluster_mode)

    def _item_id(self, item: ReplicationGroup) -> str:
        return item.group_id
