"""Status workflow - get current state."""

from dataclasses import dataclass
from pathlib import Path

from scaffold_cli.lib import paths
from scaffold_cli.lib import state as state_module
from scaffold_cli.lib.result import Err, Ok
from scaffold_cli.models import Environment


@dataclass(frozen=True)
class EnvironmentStatus:
    name: str
    watch_dir: str
    branch: str
    state_key: str
    workflow_present: bool


@dataclass(frozen=True)
class Status:
    """Local view of a repository's Scaffold setup.

    Never fails - returns uninitialized status if there is no readable state store.
    """

    config_path: Path
    initialized: bool
    repo: str | None = None
    region: str | None = None
    s3_bucket: str | None = None
    dynamodb_table: str | None = None
    iam_role: str | None = None
    environments: tuple[EnvironmentStatus, ...] = ()
    error: str | None = None


def _environment_status(root: Path, env: Environment) -> EnvironmentStatus:
    return EnvironmentStatus(
        name=env.name,
        watch_dir=env.watch_dir,
        branch=env.branch,
        state_key=env.state_key,
        workflow_present=paths.workflow_path(root, env.name).is_file(),
    )


def get_status(root: Path) -> Status:
    """Read the state store. No AWS calls."""
    config_path = paths.config_path(root)
    match state_module.load(root):
        case Err(e):
            return Status(config_path=config_path, initialized=False, error=e.reason)
        case Ok(None):
            return Status(config_path=config_path, initialized=False)
        case Ok(document):
            return Status(
                config_path=config_path,
                initialized=True,
                repo=document.repo,
                region=document.aws_region,
                s3_bucket=document.s3_bucket,
                dynamodb_table=document.dynamodb_table,
                iam_role=document.iam_role,
                environments=tuple(_environment_status(root, env) for env in document.environments),
            )
