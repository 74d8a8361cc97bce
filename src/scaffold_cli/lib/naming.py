"""Resource naming conventions.

Names are a pure function of the repository identity, so re-running init
rediscovers the same bucket, table and role.
"""

import hashlib

from scaffold_cli.models import RepositoryIdentity, ResourceNames

HASH_LENGTH = 8
ROLE_PREFIX = "github-actions-"


def resource_hash(org: str, repo: str) -> str:
    """First 8 hex characters of SHA-256 over 'org/repo'."""
    digest = hashlib.sha256(f"{org}/{repo}".encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def bucket_name(identity: RepositoryIdentity) -> str:
    return f"tf-state-{identity.repo}-{resource_hash(identity.org, identity.repo)}"


def lock_table_name(identity: RepositoryIdentity) -> str:
    return f"tf-lock-{identity.repo}-{resource_hash(identity.org, identity.repo)}"


def role_name(identity: RepositoryIdentity, env_name: str | None = None) -> str:
    """OIDC role name; env-suffixed when per-environment roles are in use."""
    base = f"{ROLE_PREFIX}{identity.repo}"
    return f"{base}-{env_name}" if env_name else base


def role_names_for(
    identity: RepositoryIdentity, env_names: list[str], shared_role: bool
) -> dict[str, str]:
    """Map each environment to its role name.

    One environment, or --shared-role: every environment uses the base role.
    Otherwise each environment gets its own suffixed role.
    """
    if shared_role or len(env_names) <= 1:
        return {name: role_name(identity) for name in env_names}
    return {name: role_name(identity, name) for name in env_names}


def resource_names(identity: RepositoryIdentity) -> ResourceNames:
    return ResourceNames(
        bucket=bucket_name(identity),
        lock_table=lock_table_name(identity),
        role=role_name(identity),
    )
