"""Platform teardown - roles, lock table and state bucket, deleted directly via the AWS API.

The state bucket is protected by prevent_destroy in the backend module, so
teardown goes around Terraform rather than through it.
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import AwsCallError
from scaffold_cli.lib.iam import find_roles
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.storage import dynamodb, s3

logger = logging.getLogger(__name__)


def list_repository_roles(
    ctx: AwsContext, base_role: str, repo: str
) -> Result[list[str], AwsCallError]:
    """The base role plus every environment-suffixed role, tagged for repo."""
    try:
        return Ok(find_roles(ctx.iam, base_role, repo))
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("ListRoles", base_role, str(e)))


def delete_lock_table(ctx: AwsContext, table: str) -> Result[bool, AwsCallError]:
    """Delete the lock table. Ok(False) if it was already gone."""
    match dynamodb.table_exists(ctx.dynamodb, table):
        case Err() as e:
            return e
        case Ok(False):
            return Ok(False)
        case Ok(True):
            pass

    match dynamodb.delete_table(ctx.dynamodb, table):
        case Err() as e:
            return e
        case Ok(_):
            return Ok(True)


def delete_state_bucket(ctx: AwsContext, bucket: str) -> Result[int | None, AwsCallError]:
    """Empty the bucket of every version, then delete it.

    Returns the number of object versions removed, or None if the bucket
    was already gone.
    """
    match s3.bucket_exists(ctx.s3, bucket):
        case Err() as e:
            return e
        case Ok(False):
            return Ok(None)
        case Ok(True):
            pass

    match s3.empty_bucket(ctx.s3, bucket):
        case Err() as e:
            return e
        case Ok(count):
            logger.debug("Emptied %s (%d versions)", bucket, count)

    match s3.delete_bucket(ctx.s3, bucket):
        case Err() as e:
            return e
        case Ok(_):
            return Ok(count)
