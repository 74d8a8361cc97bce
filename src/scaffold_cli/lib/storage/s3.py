"""S3 state bucket operations.

Low-level helpers that work with S3 client.
Returns Result types for error handling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from scaffold_cli.lib.errors import AwsCallError
from scaffold_cli.lib.result import Err, Ok, Result

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000

# HeadBucket has no body, so a missing bucket surfaces as a bare status code
_MISSING_BUCKET_CODES = ("404", "NoSuchBucket", "NotFound")


def bucket_exists(s3: S3Client, bucket: str) -> Result[bool, AwsCallError]:
    """Check if bucket exists.

    A 403 is an error, not absence: the name is taken by a bucket these
    credentials cannot reach.
    """
    try:
        s3.head_bucket(Bucket=bucket)
        return Ok(True)
    except ClientError as e:
        if e.response["Error"]["Code"] in _MISSING_BUCKET_CODES:
            return Ok(False)
        return Err(AwsCallError("HeadBucket", bucket, str(e)))
    except BotoCoreError as e:
        return Err(AwsCallError("HeadBucket", bucket, str(e)))


def list_all_versions(s3: S3Client, bucket: str) -> list[dict[str, str]]:
    """Every object version and delete marker, as DeleteObjects identifiers."""
    objects: list[dict[str, str]] = []
    paginator = s3.get_paginator("list_object_versions")
    for page in paginator.paginate(Bucket=bucket):
        for version in page.get("Versions", []):
            objects.append({"Key": version["Key"], "VersionId": version["VersionId"]})
        for marker in page.get("DeleteMarkers", []):
            objects.append({"Key": marker["Key"], "VersionId": marker["VersionId"]})
    return objects


def batched(items: list[Any], size: int = DELETE_BATCH_SIZE) -> list[list[Any]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def empty_bucket(s3: S3Client, bucket: str) -> Result[int, AwsCallError]:
    """Permanently delete every version and delete marker. Returns the count.

    A plain delete on a versioned bucket only adds a delete marker, so the
    versions themselves have to be enumerated and removed by VersionId.
    """
    try:
        objects = list_all_versions(s3, bucket)
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("ListObjectVersions", bucket, str(e)))

    for batch in batched(objects):
        try:
            response = s3.delete_objects(
                Bucket=bucket,
                Delete={"Objects": batch, "Quiet": True},
            )
        except (ClientError, BotoCoreError) as e:
            return Err(AwsCallError("DeleteObjects", bucket, str(e)))
        errors = response.get("Errors", [])
        if errors:
            first = errors[0]
            return Err(
                AwsCallError(
                    "DeleteObjects",
                    bucket,
                    f"{len(errors)} objects not deleted, e.g. {first.get('Key')}: {first.get('Message')}",
                )
            )
        logger.debug("Deleted %d object versions from %s", len(batch), bucket)

    return Ok(len(objects))


def delete_bucket(s3: S3Client, bucket: str) -> Result[None, AwsCallError]:
    """Delete an (already emptied) bucket."""
    try:
        s3.delete_bucket(Bucket=bucket)
        return Ok(None)
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("DeleteBucket", bucket, str(e)))
