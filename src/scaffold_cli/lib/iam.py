"""IAM role and OIDC provider helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from scaffold_cli.lib.errors import AwsCallError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.models import Arn

if TYPE_CHECKING:
    from mypy_boto3_iam import IAMClient

logger = logging.getLogger(__name__)

GITHUB_OIDC_HOST = "token.actions.githubusercontent.com"

# Set on every role by the iam module; value is "<org>/<repo>"
REPOSITORY_TAG = "Repository"


def role_exists(iam: IAMClient, role_name: str) -> Result[bool, AwsCallError]:
    """Check if role exists."""
    try:
        iam.get_role(RoleName=role_name)
        return Ok(True)
    except ClientError as e:
        if e.response["Error"]["Code"] == "NoSuchEntity":
            return Ok(False)
        return Err(AwsCallError("GetRole", role_name, str(e)))
    except BotoCoreError as e:
        return Err(AwsCallError("GetRole", role_name, str(e)))


def github_oidc_provider_exists(iam: IAMClient) -> Result[bool, AwsCallError]:
    """Check if the account already trusts GitHub's OIDC issuer."""
    try:
        response = iam.list_open_id_connect_providers()
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("ListOpenIDConnectProviders", GITHUB_OIDC_HOST, str(e)))
    return Ok(
        any(
            p["Arn"].endswith(f"/{GITHUB_OIDC_HOST}")
            for p in response.get("OpenIDConnectProviderList", [])
        )
    )


def _repository_tag(iam: IAMClient, role_name: str) -> str | None:
    # A role carries at most 50 tags, well under one page
    tags = iam.list_role_tags(RoleName=role_name)["Tags"]
    return next((t["Value"] for t in tags if t["Key"] == REPOSITORY_TAG), None)


def find_roles(iam: IAMClient, base_name: str, repo: str) -> list[str]:
    """Roles named base_name or '<base_name>-<suffix>' and tagged for repo.

    The name prefix alone is ambiguous: 'github-actions-widgets-api' may
    belong to the repository 'widgets-api'. Only roles whose Repository
    tag equals repo are returned.
    """
    names: list[str] = []
    for page in iam.get_paginator("list_roles").paginate():
        for role in page["Roles"]:
            name = role["RoleName"]
            if name != base_name and not name.startswith(f"{base_name}-"):
                continue
            tagged = _repository_tag(iam, name)
            if tagged == repo:
                names.append(name)
            else:
                logger.debug("Skipping role %s tagged for %s", name, tagged)
    return names


def delete_role(iam: IAMClient, role_name: str) -> Result[None, AwsCallError]:
    """Strip a role's policies, then delete it.

    IAM refuses to delete a role that still has inline or attached policies.
    Customer-managed policies named after the role were created alongside it
    and are deleted too.
    """
    try:
        for page in iam.get_paginator("list_role_policies").paginate(RoleName=role_name):
            for policy_name in page["PolicyNames"]:
                iam.delete_role_policy(RoleName=role_name, PolicyName=policy_name)
                logger.debug("Deleted inline policy %s from %s", policy_name, role_name)

        for page in iam.get_paginator("list_attached_role_policies").paginate(RoleName=role_name):
            for attached in page["AttachedPolicies"]:
                iam.detach_role_policy(RoleName=role_name, PolicyArn=attached["PolicyArn"])
                if _owned_policy(attached["PolicyArn"], role_name):
                    iam.delete_policy(PolicyArn=attached["PolicyArn"])

        iam.delete_role(RoleName=role_name)
        return Ok(None)
    except (ClientError, BotoCoreError) as e:
        return Err(AwsCallError("DeleteRole", role_name, str(e)))


def _owned_policy(policy_arn: str, role_name: str) -> bool:
    arn = Arn(policy_arn)
    return arn.account not in ("", "aws") and arn.resource_id == role_name
