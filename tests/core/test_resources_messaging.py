"""
tests/core/test_resources_messaging.py - SQS/SNS/DynamoDB 리소스 테스트 (moto)
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from core.client import AWSClient
from core.resources.database import DynamoDBTables, format_bytes
from core.resources.messaging import SNSTopics, SQSQueues

REGION = "ap-northeast-2"


@pytest.fixture
def aws():
    with mock_aws():
        yield AWSClient(region=REGION)


class TestSQSQueues:
    def test_fetch(self, aws):
        sqs = aws.service("sqs")
        url = sqs.create_queue(QueueName="orders", Attributes={"MessageRetentionPeriod": "86400"})["QueueUrl"]
        sqs.send_message(QueueUrl=url, MessageBody="hello")
        sqs.send_message(QueueUrl=url, MessageBody="world")

        resource = SQSQueues()
        resource.fetch(aws)

        rows = resource.rows()
        assert len(rows) == 1
        name, messages, in_flight, retention, queue_url = rows[0]
        assert name == "orders"
        assert messages == "2"
        assert in_flight == "0"
        assert retention == "86400"
        assert queue_url == url
        assert resource.get_id(0) == "orders"

    def test_detail_failure_keeps_row(self):
        """상세 조회가 실패해도 행은 유지되고 빈 값으로 표시"""
        sqs = MagicMock()
        sqs.get_paginator.return_value.paginate.return_value = [
            {"QueueUrls": ["https://sqs.ap-northeast-2.amazonaws.com/123456789012/broken"]}
        ]
        sqs.get_queue_attributes.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "no"}}, "GetQueueAttributes"
        )
        client = MagicMock()
        client.service.return_value = sqs

        resource = SQSQueues()
        resource.fetch(client)

        assert resource.rows() == [("broken", "", "", "", "https://sqs.ap-northeast-2.amazonaws.com/123456789012/broken")]


class TestSNSTopics:
    def test_fetch(self, aws):
        arn = aws.service("sns").create_topic(Name="alerts")["TopicArn"]

        resource = SNSTopics()
        resource.fetch(aws)

        rows = resource.rows()
        assert len(rows) == 1
        assert rows[0][0] == "alerts"
        assert rows[0][4] == arn
        assert rows[0][1] == "0"


class TestDynamoDBTables:
    def test_fetch(self, aws):
        aws.service("dynamodb").create_table(
            TableName="users",
            KeySchema=[
                {"AttributeName": "pk", "KeyType": "HASH"},
                {"AttributeName": "sk", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "pk", "AttributeType": "S"},
                {"AttributeName": "sk", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        resource = DynamoDBTables()
        resource.fetch(aws)

        rows = resource.rows()
        assert len(rows) == 1
        name, status, partition_key, sort_key, _items, _size, billing = rows[0]
        assert (name, status, partition_key, sort_key, billing) == ("users", "ACTIVE", "pk", "sk", "PAY_PER_REQUEST")


class TestFormatBytes:
    @pytest.mark.parametrize(
        "size,expected",
        [(None, ""), (0, "0 B"), (512, "512 B"), (2048, "2.0 KB"), (1572864, "1.5 MB")],
    )
    def test_units(self, size, expected):
        assert format_bytes(size) == expected
