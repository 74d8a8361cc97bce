"""Role operations - create or adopt the GitHub Actions OIDC role."""

import logging
from dataclasses import dataclass

from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import AwsCallError, TerraformApplyError
from scaffold_cli.lib.iam import github_oidc_provider_exists, role_exists
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import Terraform
from scaffold_cli.models import Arn, RepositoryIdentity, ResourceNames
from scaffold_cli.operations.reconcile import ManagedResource, reconcile

logger = logging.getLogger(__name__)

ROLE_ADDRESS = "aws_iam_role.github_actions"
OIDC_PROVIDER_ADDRESS = "aws_iam_openid_connect_provider.github[0]"


@dataclass(frozen=True, slots=True)
class RoleResult:
    name: str
    arn: Arn
    existed: bool
    imported: bool


def _create_oidc_provider(ctx: AwsContext, tf: Terraform) -> Result[bool, AwsCallError]:
    # A provider created by an earlier run of this module must stay managed
    # here, or the next apply would plan to delete it.
    if OIDC_PROVIDER_ADDRESS in tf.state_list():
        return Ok(True)
    match github_oidc_provider_exists(ctx.iam):
        case Err() as e:
            return e
        case Ok(exists):
            return Ok(not exists)


def reconcile_role(
    ctx: AwsContext,
    tf: Terraform,
    identity: RepositoryIdentity,
    names: ResourceNames,
    role_name: str,
    use_inline_policies: bool = True,
) -> Result[RoleResult, AwsCallError | TerraformApplyError]:
    """Create or adopt a role trusted by this repository's workflows.

    The full module is applied (no targets) so the trust policy, access
    policy and OIDC provider converge together.
    """
    match _create_oidc_provider(ctx, tf):
        case Err() as e:
            return e
        case Ok(create_provider):
            logger.debug("Role %s: create_oidc_provider=%s", role_name, create_provider)

    match role_exists(ctx.iam, role_name):
        case Err() as e:
            return e
        case Ok(exists):
            pass

    variables = {
        "aws_region": ctx.region,
        "role_name": role_name,
        "github_org": identity.org,
        "github_repo": identity.repo,
        "s3_bucket": names.bucket,
        "dynamodb_table": names.lock_table,
        "use_inline_policies": use_inline_policies,
        "create_oidc_provider": create_provider,
    }

    match reconcile(
        tf,
        ManagedResource(role_name, ROLE_ADDRESS),
        exists=exists,
        variables=variables,
    ):
        case Err() as e:
            return e
        case Ok(outcome):
            return Ok(
                RoleResult(
                    name=role_name,
                    arn=Arn.for_role(ctx.account_id, role_name),
                    existed=outcome.existed,
                    imported=outcome.imported,
                )
            )
