from typing import Any

import boto3
from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from posts_app import settings
from posts_app.utils import boto_config

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class PostRepository:
    def __init__(self):
        self._logger = Logger(utc=True)
        self._table = boto3.resource("dynamodb", config=boto_config()).Table(
            f"{settings.stage}-posts"
        )

    def create_post(self, data: dict[str, Any]):
        self._table.put_item(Item=data)

    def get_all_posts(self) -> list[dict[str, Any]]:
        items = []
        response = self._table.scan()
        items.extend(response["Items"])
        while "LastEvaluatedKey" in response:
            response = self._table.scan(
                ExclusiveStartKey=response["LastEvaluatedKey"]
            )
            items.extend(response["Items"])
        return items

    def get_post_by_uuid(self, post_uuid: str) -> dict[str, Any] | None:
        response = self._table.get_item(Key={"id": post_uuid})
        return response.get("Item")

    def update_post(
        self, post_uuid: str, data: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Set the given attributes on an existing post.

        Returns the post as stored after the update, or ``None`` when no post
        with ``post_uuid`` exists (the item is never created by an update).
        """
        attr_names = {f"#{k}": k for k in data}
        attr_values = {f":{k}": v for k, v in data.items()}
        update_expr = ", ".join(f"#{k}=:{k}" for k in data)
        try:
            response = self._table.update_item(
                Key={"id": post_uuid},
                ConditionExpression=Attr("id").exists(),
                UpdateExpression=f"SET {update_expr}",
                ExpressionAttributeNames=attr_names,
                ExpressionAttributeValues=attr_values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            if exc.response["Error"]["Code"] == CONDITIONAL_CHECK_FAILED:
                self._logger.warning(f"Update skipped, post is gone {post_uuid=}")
                return None
            raise
        return response["Attributes"]

    def delete_post(self, post_uuid: str) -> dict[str, Any] | None:
        response = self._table.delete_item(
            Key={"id": post_uuid}, ReturnValues="ALL_OLD"
        )
        return response.get("Attributes")
