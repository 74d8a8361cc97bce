"""State backend operations - S3 bucket and DynamoDB lock table."""

from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import AwsCallError, TerraformApplyError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.storage.dynamodb import table_exists
from scaffold_cli.lib.storage.s3 import bucket_exists
from scaffold_cli.lib.terraform import Terraform
from scaffold_cli.models import ResourceNames
from scaffold_cli.operations.reconcile import ManagedResource, ReconcileOutcome, reconcile

BUCKET_ADDRESS = "aws_s3_bucket.terraform_state"
TABLE_ADDRESS = "aws_dynamodb_table.terraform_locks"

BUCKET_TARGETS = (
    BUCKET_ADDRESS,
    "aws_s3_bucket_versioning.terraform_state",
    "aws_s3_bucket_server_side_encryption_configuration.terraform_state",
    "aws_s3_bucket_public_access_block.terraform_state",
    "aws_s3_bucket_lifecycle_configuration.terraform_state",
)
TABLE_TARGETS = (TABLE_ADDRESS,)


def _variables(ctx: AwsContext, names: ResourceNames) -> dict[str, str]:
    # Both resources live in one module, so every apply needs every variable
    return {
        "aws_region": ctx.region,
        "bucket_name": names.bucket,
        "dynamodb_table_name": names.lock_table,
    }


def reconcile_bucket(
    ctx: AwsContext, tf: Terraform, names: ResourceNames
) -> Result[ReconcileOutcome, AwsCallError | TerraformApplyError]:
    """Create or adopt the state bucket (versioned, encrypted, private)."""
    match bucket_exists(ctx.s3, names.bucket):
        case Err() as e:
            return e
        case Ok(exists):
            return reconcile(
                tf,
                ManagedResource(names.bucket, BUCKET_ADDRESS, BUCKET_TARGETS),
                exists=exists,
                variables=_variables(ctx, names),
            )


def reconcile_lock_table(
    ctx: AwsContext, tf: Terraform, names: ResourceNames
) -> Result[ReconcileOutcome, AwsCallError | TerraformApplyError]:
    """Create or adopt the lock table."""
    match table_exists(ctx.dynamodb, names.lock_table):
        case Err() as e:
            return e
        case Ok(exists):
            return reconcile(
                tf,
                ManagedResource(names.lock_table, TABLE_ADDRESS, TABLE_TARGETS),
                exists=exists,
                variables=_variables(ctx, names),
            )
