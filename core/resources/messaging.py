"""
core/resources/messaging.py - Messaging 리소스

SQS Queue, SNS Topic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Column, Resource
from .helpers import describe_or_none, paginate

if TYPE_CHECKING:
    from core.client import AWSClient

SQS_ATTRIBUTES = [
    "ApproximateNumberOfMessages",
    "ApproximateNumberOfMessagesNotVisible",
    "MessageRetentionPeriod",
]


@dataclass
class SQSQueue:
    name: str
    url: str
    messages: str = ""
    in_flight: str = ""
    retention: str = ""


class SQSQueues(Resource[SQSQueue]):
    key = "sqs"
    name = "SQS Queues"
    COLUMNS = (
        Column("Queue Name", 40),
        Column("Messages", 12),
        Column("In Flight", 12),
        Column("Retention (s)", 15),
        Column("URL", 60),
    )

    def _collect(self, client: AWSClient) -> list[SQSQueue]:
        sqs = client.service("sqs")
        queues = []
        for url in paginate(sqs, "sqs", "list_queues", "QueueUrls"):
            # https://sqs.{region}.amazonaws.com/{account}/{name}
            queue = SQSQueue(name=url.rstrip("/").rsplit("/", 1)[-1] or url, url=url)
            detail = describe_or_none(
                "sqs", "get_queue_attributes", sqs.get_queue_attributes, QueueUrl=url, AttributeNames=SQS_ATTRIBUTES
            )
            attrs = (detail or {}).get("Attributes", {})
            queue.messages = attrs.get("ApproximateNumberOfMessages", "")
            queue.in_flight = attrs.get("ApproximateNumberOfMessagesNotVisible", "")
            queue.retention = attrs.get("MessageRetentionPeriod", "")
            queues.append(queue)
        return queues

    def _row(self, item: SQSQueue) -> tuple:
        return (item.name, item.messages, item.in_flight, item.retention, item.url)

    def _item_id(self, item: SQSQueue) -> str:
        return item.name


@dataclass
class SNSTopic:
    name: str
    arn: str
    confirmed: str = ""
    pending: str = ""
    deleted: str = ""


class SNSTopics(Resource[SNSTopic]):
    key = "sns"
    name = "SNS Topics"
    COLUMNS = (
        Column("Topic Name", 40),
        Column("Confirmed", 12),
        Column("Pending", 12),
        Column("Deleted", 12),
        Column("ARN", 60),
    )

    def _collect(self, client: AWSClient) -> list[SNSTopic]:
        sns = client.service("sns")
        topics = []
        for topic in paginate(sns, "sns", "list_topics", "Topics"):
            arn = topic.get("TopicArn", "")
            detail = describe_or_none("sns", "get_topic_attributes", sns.get_topic_attributes, TopicArn=arn)
            attrs = (detail or {}).get("Attributes", {})
            topics.append(
                SNSTopic(
                    name=arn.rsplit(":", 1)[-1],
                    arn=arn,
                    confirmed=attrs.get("SubscriptionsConfirmed", ""),
                    pending=attrs.get("SubscriptionsPending", ""),
                    deleted=attrs.get("SubscriptionsDeleted", ""),
                )
            )
        return topics

    def _row(self, item: SNSTopic) -> tuple:
        return (item.name, item.confirmed, item.pending, item.deleted, item.arn)

    def _item_id(self, item: SNSTopic) -> str:
        return item.name
