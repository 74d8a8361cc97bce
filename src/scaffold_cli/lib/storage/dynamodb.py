"""DynamoDB lock table operations.

Low-level helpers that work with DynamoDB client.
Returns Result types for error handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from scaffold_cli.lib.errors import AwsCallError
from scaffold_cli.lib.result import Err, Ok, Result

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient

# Hash key used by Terraform's S3 backend locking
LOCK_KEY_ATTRIBUTE = "LockID"

TABLE_DELETE_POLL_SECONDS = 5
TABLE_DELETE_MAX_ATTEMPTS = 60


def _lock_key(lock_id: str) -> dict:
    return {LOCK_KEY_ATTRIBUTE: {"S": lock_id}}


def table_exists(dynamodb: DynamoDBClient, table: str) -> Result[bool, AwsCallError]:
    """Check if table exists."""
    try:
        dynamodb.describe_table(TableName=table)
        return Ok(True)
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            return Ok(False)
        return Err(AwsCallError("DescribeTable", table, str(e)))
    except BotoCoreError as e:
        return Err(AwsCallError("DescribeTable", table, str(e)))


def get_lock(dynamodb: DynamoDBClient, table: str, lock_id: str) -> Result[dict | None, AwsCallError]:
    """Fetch the lock item, or None if there is no lock.

    A missing table means nothing can be locked, so it also yields None.
    """
    try:
        response = dynamodb.get_item(TableName=table, Key=_lock_key(lock_id), ConsistentRead=True)
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            return Ok(None)
        return Err(AwsCallError("GetItem", table, str(e)))
    except BotoCoreError as e:
        return Err(AwsCallError("GetItem", table, str(e)))
    return Ok(response.get("Item") or None)


def delete_lock(dynamodb: DynamoDBClient, table: str, lock_id: str) -> Result[None, AwsCallError]:
    """Delete a lock item directly, bypassing 'terraform force-unlock'."""
    try:
        dynamodb.delete_item(TableName=table, Key=_lock_key(lock_id))
        return Ok(None)
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("DeleteItem", table, str(e)))


def delete_table(dynamodb: DynamoDBClient, table: str) -> Result[None, AwsCallError]:
    """Delete the table and wait until it no longer exists."""
    try:
        dynamodb.delete_table(TableName=table)
        dynamodb.get_waiter("table_not_exists").wait(
            TableName=table,
            WaiterConfig={
                "Delay": TABLE_DELETE_POLL_SECONDS,
                "MaxAttempts": TABLE_DELETE_MAX_ATTEMPTS,
            },
        )
        return Ok(None)
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("DeleteTable", table, str(e)))
