"""Uninstall workflow - remove every environment, the platform, and all local traces."""

from dataclasses import dataclass, field
from pathlib import Path

from scaffold_cli.lib import console, paths
from scaffold_cli.lib import state as state_module
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import ConfirmationMismatchError, PartialFailureError, StepFailure
from scaffold_cli.lib.iam import delete_role
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.storage import file
from scaffold_cli.lib.terraform import TerraformFactory
from scaffold_cli.models import RepositoryIdentity, StateDocument
from scaffold_cli.operations.environment import EnvironmentOutcome, teardown_environment
from scaffold_cli.operations.pipeline import remove_workflows
from scaffold_cli.operations.platform import (
    delete_lock_table,
    delete_state_bucket,
    list_repository_roles,
)

CONFIRM_UNINSTALL = "DESTROY EVERYTHING"


@dataclass
class UninstallReport:
    """What was removed. Failures are reported separately."""

    environments: dict[str, EnvironmentOutcome] = field(default_factory=dict)
    roles: list[str] = field(default_factory=list)
    lock_table_deleted: bool = False
    objects_deleted: int | None = None
    workflows: list[Path] = field(default_factory=list)
    failures: list[StepFailure] = field(default_factory=list)

    def fail(self, step: str, target: str, reason: str) -> None:
        console.error(f"{step} failed for {target}: {reason}")
        self.failures.append(StepFailure(step, target, reason))


def confirm_uninstall(prompter: Prompter) -> Result[None, ConfirmationMismatchError]:
    """Require the operator to type the full confirmation phrase."""
    if prompter.ask(f"Type {CONFIRM_UNINSTALL} to confirm") != CONFIRM_UNINSTALL:
        return Err(ConfirmationMismatchError(CONFIRM_UNINSTALL))
    return Ok(None)


def _destroy_environments(
    root: Path,
    document: StateDocument,
    terraform_factory: TerraformFactory,
    report: UninstallReport,
) -> None:
    console.header("Destroying environments...")
    for env in document.environments:
        match teardown_environment(root, document, env, terraform_factory):
            case Err(e):
                report.fail(f"terraform {e.command}", env.name, e.output)
            case Ok(outcome):
                report.environments[env.name] = outcome
                if outcome is not EnvironmentOutcome.SKIPPED:
                    console.ok(f"{env.name} infrastructure destroyed")


def _destroy_platform(ctx: AwsContext, document: StateDocument, report: UninstallReport) -> None:
    console.header("Destroying platform...")

    match list_repository_roles(ctx, document.iam_role, document.repo):
        case Err(e):
            report.fail("list roles", document.iam_role, e.reason)
        case Ok(roles):
            for role in roles:
                match delete_role(ctx.iam, role):
                    case Err(e):
                        report.fail("delete role", role, e.reason)
                    case Ok(_):
                        report.roles.append(role)
                        console.ok(f"IAM role deleted: {role}")

    match delete_lock_table(ctx, document.dynamodb_table):
        case Err(e):
            report.fail("delete table", document.dynamodb_table, e.reason)
        case Ok(deleted):
            report.lock_table_deleted = deleted
            if deleted:
                console.ok("DynamoDB table deleted")

    console.info("Emptying S3 bucket (including all versions)...")
    match delete_state_bucket(ctx, document.s3_bucket):
        case Err(e):
            report.fail("delete bucket", document.s3_bucket, e.reason)
        case Ok(count):
            report.objects_deleted = count
            if count is not None:
                console.ok("S3 bucket emptied and deleted")


def _remove_local(root: Path, identity: RepositoryIdentity, report: UninstallReport) -> None:
    try:
        report.workflows = remove_workflows(root)
        if report.workflows:
            console.ok("Workflows removed")
    except OSError as e:
        report.fail("remove workflows", str(paths.workflow_dir(root)), str(e))

    try:
        if state_module.delete(root):
            console.ok(f"{paths.SCAFFOLD_DIR}/ removed")
    except OSError as e:
        report.fail("remove state store", str(paths.scaffold_dir(root)), str(e))

    work_dir = paths.terraform_work_dir(identity.org, identity.repo)
    try:
        file.delete_tree(work_dir)
    except OSError as e:
        report.fail("remove work directory", str(work_dir), str(e))


def uninstall(
    ctx: AwsContext,
    root: Path,
    identity: RepositoryIdentity,
    document: StateDocument,
    terraform_factory: TerraformFactory,
) -> Result[UninstallReport, PartialFailureError]:
    """Remove everything init created. Call only after confirm_uninstall succeeded.

    1. Destroy each environment's infrastructure (no per-environment prompt)
    2. Delete roles, the lock table, and the emptied state bucket
    3. Delete generated workflows, the state store, and the local Terraform work dir

    Every step is attempted even if an earlier one failed. Failures are
    collected and returned together at the end.
    """
    report = UninstallReport()

    _destroy_environments(root, document, terraform_factory, report)
    _destroy_platform(ctx, document, report)
    _remove_local(root, identity, report)

    if report.failures:
        return Err(PartialFailureError("uninstall", tuple(report.failures)))
    return Ok(report)
