from typing import Any

import boto3
from aws_lambda_powertools import Logger

from posts_app.utils import boto_config


class StorageService:
    def __init__(self):
        self._logger = Logger(utc=True)
        self._s3 = boto3.resource("s3", config=boto_config())

    def delete_object(self, bucket: str, key: str) -> dict[str, Any]:
        self._logger.info(f"Deleting object key={key} from bucket={bucket}")
        return self._s3.Object(bucket_name=bucket, key=key).delete()

    def put_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
        acl: str | None = None,
    ) -> dict[str, Any]:
        self._logger.info(
            f"Uploading object key={key} content_type={content_type} acl={acl} "
            f"to bucket={bucket}"
        )
        extra = {"ACL": acl} if acl else {}
        return self._s3.Object(bucket_name=bucket, key=key).put(
            Body=data, ContentType=content_type, **extra
        )
