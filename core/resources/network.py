"""
core/resources/network.py - Network 리소스

VPC, Subnet, Security Group, Load Balancer, CloudFront Distribution,
Route53 Hosted Zone, API Gateway (REST / HTTP·WebSocket).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import Column, Resource
from .helpers import api_call, format_time, paginate, parse_tags

if TYPE_CHECKING:
    from core.client import AWSClient


# =============================================================================
# VPC / Subnet / Security Group
# =============================================================================


@dataclass
class VPC:
    vpc_id: str
    name: str
    cidr_block: str
    state: str
    is_default: bool


class VPCs(Resource[VPC]):
    key = "vpc"
    name = "VPCs"
    COLUMNS = (
        Column("VPC ID", 25),
        Column("Name", 30),
        Column("CIDR Block", 20),
        Column("State", 12),
        Column("Default", 10),
    )

    def _collect(self, client: AWSClient) -> list[VPC]:
        vpcs = paginate(client.service("ec2"), "ec2", "describe_vpcs", "Vpcs")
        return [
            VPC(
                vpc_id=v.get("VpcId", ""),
                name=parse_tags(v.get("Tags")).get("Name", ""),
                cidr_block=v.get("CidrBlock", ""),
                state=v.get("State", ""),
                is_default=v.get("IsDefault", False),
            )
            for v in vpcs
        ]

    def _row(self, item: VPC) -> tuple:
        return (item.vpc_id, item.name, item.cidr_block, item.state, item.is_default)

    def _item_id(self, item: VPC) -> str:
        return item.vpc_id


@dataclass
class Subnet:
    subnet_id: str
    name: str
    vpc_id: str
    cidr_block: str
    availability_zone: str
    state: str


class Subnets(Resource[Subnet]):
    key = "subnets"
    name = "Subnets"
    COLUMNS = (
        Column("Subnet ID", 25),
        Column("Name", 30),
        Column("VPC ID", 25),
        Column("CIDR Block", 20),
        Column("AZ", 15),
        Column("State", 12),
    )

    def _collect(self, client: AWSClient) -> list[Subnet]:
        subnets = paginate(client.service("ec2"), "ec2", "describe_subnets", "Subnets")
        return [
            Subnet(
                subnet_id=s.get("SubnetId", ""),
                name=parse_tags(s.get("Tags")).get("Name", ""),
                vpc_id=s.get("VpcId", ""),
                cidr_block=s.get("CidrBlock", ""),
                availability_zone=s.get("AvailabilityZone", ""),
                state=s.get("State", ""),
            )
            for s in subnets
        ]

    def _row(self, item: Subnet) -> tuple:
        return (item.subnet_id, item.name, item.vpc_id, item.cidr_block, item.availability_zone, item.state)

    def _item_id(self, item: Subnet) -> str:
        return item.subnet_id


@dataclass
class SecurityGroup:
    group_id: str
    group_name: str
    vpc_id: str
    description: str


class SecurityGroups(Resource[SecurityGroup]):
    key = "security-groups"
    name = "Security Groups"
    COLUMNS = (
        Column("Group ID", 25),
        Column("Group Name", 30),
        Column("VPC ID", 25),
        Column("Description", 50),
    )

    def _collect(self, client: AWSClient) -> list[SecurityGroup]:
        groups = paginate(client.service("ec2"), "ec2", "describe_security_groups", "SecurityGroups")
        return [
            SecurityGroup(
                group_id=g.get("GroupId", ""),
                group_name=g.get("GroupName", ""),
                vpc_id=g.get("VpcId", ""),
                description=g.get("Description", ""),
            )
            for g in groups
        ]

    def _row(self, item: SecurityGroup) -> tuple:
        return (item.group_id, item.group_name, item.vpc_id, item.description)

    def _item_id(self, item: SecurityGroup) -> str:
        return item.group_id


# =============================================================================
# ELBv2
# =============================================================================


@dataclass
class LoadBalancer:
    name: str
    dns_name: str
    lb_type: str
    scheme: str
    state: str
    vpc_id: str
    created: str
    arn: str


class LoadBalancers(Resource[LoadBalancer]):
    key = "alb"
    name = "Load Balancers"
    COLUMNS = (
        Column("Name", 30),
        Column("DNS Name", 50),
        Column("Type", 12),
        Column("Scheme", 15),
        Column("State", 10),
        Column("VPC ID", 25),
        Column("Created", 20),
    )

    def _collect(self, client: AWSClient) -> list[LoadBalancer]:
        lbs = paginate(client.service("elbv2"), "elbv2", "describe_load_balancers", "LoadBalancers")
        return [
            LoadBalancer(
                name=lb.get("LoadBalancerName", ""),
                dns_name=lb.get("DNSName", ""),
                lb_type=lb.get("Type", ""),
                scheme=lb.get("Scheme", ""),
                state=lb.get("State", {}).get("Code", ""),
                vpc_id=lb.get("VpcId", ""),
                created=format_time(lb.get("CreatedTime")),
                arn=lb.get("LoadBalancerArn", ""),
            )
            for lb in lbs
        ]

    def _row(self, item: LoadBalancer) -> tuple:
        return (item.name, item.dns_name, item.lb_type, item.scheme, item.state, item.vpc_id, item.created)

    def _item_id(self, item: LoadBalancer) -> str:
        return item.arn


# =============================================================================
# CloudFront
# =============================================================================


@dataclass
class Distribution:
    distribution_id: str
    domain_name: str
    status: str
    enabled: bool
    origins: int
    price_class: str
    aliases: str


class CloudFrontDistributions(Resource[Distribution]):
    key = "cloudfront"
    name = "CloudFront Distributions"
    COLUMNS = (
        Column("ID", 16),
        Column("Domain Name", 40),
        Column("Status", 12),
        Column("Enabled", 8),
        Column("Origins", 8),
        Column("Price Class", 20),
        Column("Aliases", 30),
    )

    def _collect(self, client: AWSClient) -> list[Distribution]:
        cloudfront = client.service("cloudfront")
        items: list[dict[str, Any]] = []
        with api_call("cloudfront", "list_distributions"):
            for page in cloudfront.get_paginator("list_distributions").paginate():
                items.extend(page.get("DistributionList", {}).get("Items", []))

        return [
            Distribution(
                distribution_id=d.get("Id", ""),
                domain_name=d.get("DomainName", ""),
                status=d.get("Status", ""),
                enabled=d.get("Enabled", False),
                origins=d.get("Origins", {}).get("Quantity", 0),
                price_class=d.get("PriceClass", ""),
                aliases=", ".join(d.get("Aliases", {}).get("Items", [])),
            )
            for d in items
        ]

    def _row(self, item: Distribution) -> tuple:
        return (
            item.distribution_id,
            item.domain_name,
            item.status,
            item.enabled,
            item.origins,
            item.price_class,
            item.aliases,
        )

    def _item_id(self, item: Distribution) -> str:
        return item.distribution_id


# =============================================================================
# Route53
# =============================================================================


@dataclass
class HostedZone:
    zone_id: str
    name: str
    zone_type: str
    record_count: int
    comment: str


class HostedZones(Resource[HostedZone]):
    key = "route53"
    name = "Route53 Hosted Zones"
    COLUMNS = (
        Column("Zone ID", 25),
        Column("Name", 40),
        Column("Type", 12),
        Column("Records", 10),
        Column("Comment", 50),
    )

    def _collect(self, client: AWSClient) -> list[HostedZone]:
        zones = paginate(client.service("route53"), "route53", "list_hosted_zones", "HostedZones")
        result = []
        for z in zones:
            config = z.get("Config", {})
            result.append(
                HostedZone(
                    zone_id=z.get("Id", "").removeprefix("/hostedzone/"),
                    name=z.get("Name", ""),
                    zone_type="Private" if config.get("PrivateZone") else "Public",
                    record_count=z.get("ResourceRecordSetCount", 0),
                    comment=config.get("Comment", ""),
                )
            )
        return result

    def _row(self, item: HostedZone) -> tuple:
        return (item.zone_id, item.name, item.zone_type, item.record_count, item.comment)

    def _item_id(self, item: HostedZone) -> str:
        return item.zone_id


# =============================================================================
# API Gateway
# =============================================================================


@dataclass
class RestAPI:
    api_id: str
    name: str
    version: str
    created: str
    description: str


class RestAPIs(Resource[RestAPI]):
    key = "api-gateway"
    name = "API Gateway (REST)"
    COLUMNS = (
        Column("API ID", 15),
        Column("Name", 35),
        Column("Version", 12),
        Column("Created", 20),
        Column("Description", 50),
    )

    def _collect(self, client: AWSClient) -> list[RestAPI]:
        apis = paginate(client.service("apigateway"), "apigateway", "get_rest_apis", "items")
        return [
            RestAPI(
                api_id=a.get("id", ""),
                name=a.get("name", ""),
                version=a.get("version", ""),
                created=format_time(a.get("createdDate")),
                description=a.get("description", ""),
            )
            for a in apis
        ]

    def _row(self, item: RestAPI) -> tuple:
        return (item.api_id, item.name, item.version, item.created, item.description)

    def _item_id(self, item: RestAPI) -> str:
        return item.api_id


@dataclass
class HttpAPI:
    api_id: str
    name: str
    protocol: str
    created: str
    description: str


class HttpAPIs(Resource[HttpAPI]):
    key = "api-gateway-v2"
    name = "API Gateway (HTTP/WebSocket)"
    COLUMNS = (
        Column("API ID", 15),
        Column("Name", 35),
        Column("Protocol", 12),
        Column("Created", 20),
        Column("Description", 50),
    )

    def _collect(self, client: AWSClient) -> list[HttpAPI]:
        apigw = client.service("apigatewayv2")
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        with api_call("apigatewayv2", "get_apis"):
            while True:
                resp = apigw.get_apis(**kwargs)
                items.extend(resp.get("Items", []))
                token = resp.get("NextToken")
                if not token:
                    break
                kwargs["NextToken"] = token

        return [
            HttpAPI(
                api_id=a.get("ApiId", ""),
                name=a.get("Name", ""),
                protocol=a.get("ProtocolType", ""),
                created=format_time(a.get("CreatedDate")),
                description=a.get("Description", ""),
            )
            for a in items
        ]

    def _row(self, item: HttpAPI) -> tuple:
        return (item.api_id, item.name, item.protocol, item.created, item.description)

    def _item_id(self, item: HttpAPI) -> str:
        return item.api_id
