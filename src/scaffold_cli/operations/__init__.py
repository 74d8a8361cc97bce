"""Operations layer - atomic operations that return Result types."""

from scaffold_cli.operations.backend import reconcile_bucket, reconcile_lock_table
from scaffold_cli.operations.environment import destroy_environment, teardown_environment
from scaffold_cli.operations.locks import check_and_remove_locks
from scaffold_cli.operations.pipeline import (
    generate_backend_stub,
    generate_workflow,
    remove_workflows,
)
from scaffold_cli.operations.platform import (
    delete_lock_table,
    delete_state_bucket,
    list_repository_roles,
)
from scaffold_cli.operations.role import reconcile_role

__all__ = [
    # backend
    "reconcile_bucket",
    "reconcile_lock_table",
    # role
    "reconcile_role",
    # pipeline
    "generate_workflow",
    "generate_backend_stub",
    "remove_workflows",
    # locks
    "check_and_remove_locks",
    # environment
    "destroy_environment",
    "teardown_environment",
    # platform
    "list_repository_roles",
    "delete_lock_table",
    "delete_state_bucket",
]
