"""
tests/core/test_resources_compute.py - Compute 리소스 테스트 (moto)
"""

import pytest
from moto import mock_aws

from core.client import AWSClient
from core.exceptions import APICallError
from core.resources.compute import (
    EC2Instances,
    ECSClusters,
    LambdaFunctions,
    reboot_instance,
    start_instance,
    stop_instance,
)

REGION = "ap-northeast-2"


@pytest.fixture
def aws():
    with mock_aws():
        yield AWSClient(region=REGION)


def run_instances(client: AWSClient, count: int, name: str = "web") -> list[str]:
    ec2 = client.service("ec2")
    image_id = ec2.describe_images()["Images"][0]["ImageId"]
    resp = ec2.run_instances(
        ImageId=image_id,
        MinCount=count,
        MaxCount=count,
        InstanceType="t3.micro",
        TagSpecifications=[{"ResourceType": "instance", "Tags": [{"Key": "Name", "Value": name}]}],
    )
    return [inst["InstanceId"] for inst in resp["Instances"]]


class TestEC2Instances:
    def test_fetch(self, aws):
        ids = run_instances(aws, 8)
        resource = EC2Instances()
        resource.fetch(aws)

        rows = resource.rows()
        assert len(rows) == 8
        assert {row[0] for row in rows} == set(ids)
        assert all(row[1] == "web" for row in rows)
        assert all(row[2] == "running" for row in rows)
        assert all(row[3] == "t3.micro" for row in rows)
        assert all(len(row) == 8 for row in rows)

    def test_empty(self, aws):
        resource = EC2Instances()
        resource.fetch(aws)
        assert resource.rows() == []

    def test_get_id(self, aws):
        ids = run_instances(aws, 2)
        resource = EC2Instances()
        resource.fetch(aws)
        assert {resource.get_id(0), resource.get_id(1)} == set(ids)

    def test_stop_and_start(self, aws):
        instance_id = run_instances(aws, 1)[0]
        ec2 = aws.service("ec2")

        stop_instance(aws, instance_id)
        state = ec2.describe_instances(InstanceIds=[instance_id])["Reservations"][0]["Instances"][0]["State"]["Name"]
        assert state in ("stopping", "stopped")

        start_instance(aws, instance_id)
        state = ec2.describe_instances(InstanceIds=[instance_id])["Reservations"][0]["Instances"][0]["State"]["Name"]
        assert state in ("pending", "running")

        reboot_instance(aws, instance_id)

    def test_stop_unknown_instance(self, aws):
        with pytest.raises(APICallError) as exc_info:
            stop_instance(aws, "i-0123456789abcdef0")
        assert exc_info.value.operation == "stop_instances"


class TestLambdaFunctions:
    def test_fetch(self, aws):
        iam = aws.service("iam")
        role = iam.create_role(
            RoleName="lambda-role",
            AssumeRolePolicyDocument='{"Version": "2012-10-17", "Statement": []}',
        )["Role"]["Arn"]
        aws.service("lambda").create_function(
            FunctionName="hello",
            Runtime="python3.12",
            Role=role,
            Handler="app.handler",
            Code={"ZipFile": b"fake"},
            MemorySize=256,
            Timeout=15,
        )

        resource = LambdaFunctions()
        resource.fetch(aws)

        rows = resource.rows()
        assert len(rows) == 1
        assert rows[0][:5] == ("hello", "python3.12", "app.handler", "256", "15")
        assert resource.get_id(0) == "hello"


class TestECSClusters:
    def test_fetch(self, aws):
        ecs = aws.service("ecs")
        ecs.create_cluster(clusterName="alpha")
        ecs.create_cluster(clusterName="beta")

        resource = ECSClusters()
        resource.fetch(aws)

        assert sorted(row[0] for row in resource.rows()) == ["alpha", "beta"]
        assert all(row[1] == "ACTIVE" for row in resource.rows())
