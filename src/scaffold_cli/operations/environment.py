"""Environment operations - destroy the infrastructure an environment's Terraform manages.

Platform resources (state bucket, lock table, roles) are never touched here.
"""

import logging
import tempfile
import time
from enum import Enum
from pathlib import Path

from scaffold_cli.lib import console
from scaffold_cli.lib import state as state_module
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import (
    ConfirmationMismatchError,
    LockCheckError,
    LockNotResolvedError,
    StateSaveError,
    TerraformCommandError,
)
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import Terraform, TerraformFactory, backend_config_for
from scaffold_cli.models import Environment, StateDocument
from scaffold_cli.operations.locks import check_and_remove_locks

logger = logging.getLogger(__name__)

type EnvironmentDestroyError = (
    LockCheckError
    | LockNotResolvedError
    | ConfirmationMismatchError
    | TerraformCommandError
    | StateSaveError
)

CONFIRM_DESTROY = "DESTROY"
MAX_LISTED_RESOURCES = 30
PLAN_FILE = "destroy.tfplan"


class EnvironmentOutcome(Enum):
    DESTROYED = "destroyed"
    NOTHING_TO_DESTROY = "nothing_to_destroy"
    SKIPPED = "skipped"


def _init_backend(
    tf: Terraform, document: StateDocument, env: Environment
) -> Result[None, TerraformCommandError]:
    result = tf.init(backend_config=backend_config_for(document, env))
    if not result.ok:
        return Err(TerraformCommandError("init", tf.working_dir, result.output))
    return Ok(None)


def _forget(
    root: Path, document: StateDocument, env: Environment, outcome: EnvironmentOutcome
) -> Result[EnvironmentOutcome, StateSaveError]:
    document.remove_environment(env.name)
    match state_module.save(root, document):
        case Err() as e:
            return e
        case Ok(_):
            return Ok(outcome)


def _show_plan(resources: tuple[str, ...], summary: str) -> None:
    console.header("Resources to be destroyed:")
    console.line()
    for address in resources[:MAX_LISTED_RESOURCES]:
        console.line(f"- {address}")
    if len(resources) > MAX_LISTED_RESOURCES:
        console.line(f"... and {len(resources) - MAX_LISTED_RESOURCES} more")
    console.line()
    console.line(summary)
    console.line()


def destroy_environment(
    ctx: AwsContext,
    root: Path,
    document: StateDocument,
    env: Environment,
    prompter: Prompter,
    terraform_factory: TerraformFactory,
) -> Result[EnvironmentOutcome, EnvironmentDestroyError]:
    """Interactively destroy one environment and drop it from the state store.

    1. Check for a state lock (declining to remove it aborts)
    2. Skip, keeping the record, if the watch directory is gone
    3. Init against the environment's remote state and save a destroy plan
    4. Nothing planned: forget the environment
    5. Otherwise list the plan, require 'DESTROY', then apply the saved plan
    6. Forget the environment only after the destroy succeeded
    """
    match check_and_remove_locks(ctx, document, env.state_key, prompter):
        case Err() as e:
            return e
        case Ok(_):
            pass

    watch_dir = root / env.watch_dir
    if not watch_dir.is_dir():
        console.warn(f"Watch directory '{env.watch_dir}' not found - skipping.")
        return Ok(EnvironmentOutcome.SKIPPED)

    tf = terraform_factory(watch_dir)

    console.header("Generating destroy plan...")
    match _init_backend(tf, document, env):
        case Err() as e:
            return e
        case Ok(_):
            pass

    with tempfile.TemporaryDirectory(prefix="scaffold-plan-") as tmp:
        match tf.plan_destroy(Path(tmp) / PLAN_FILE):
            case Err() as e:
                return e
            case Ok(plan):
                pass

        if not plan.has_changes or plan.plan_file is None:
            console.ok(f"No resources to destroy in environment '{env.name}'.")
            return _forget(root, document, env, EnvironmentOutcome.NOTHING_TO_DESTROY)

        _show_plan(plan.resources, plan.summary)

        answer = prompter.ask(f"Type {CONFIRM_DESTROY} to confirm")
        if answer != CONFIRM_DESTROY:
            return Err(ConfirmationMismatchError(CONFIRM_DESTROY))

        console.header("Destroying...")
        start = time.monotonic()
        result = tf.apply_plan(plan.plan_file)
        if not result.ok:
            return Err(TerraformCommandError("apply (destroy plan)", watch_dir, result.output))
        console.ok(f"Complete ({int(time.monotonic() - start)}s)")

    match _forget(root, document, env, EnvironmentOutcome.DESTROYED):
        case Err() as e:
            return e
        case Ok(outcome):
            pass

    console.line()
    console.line("Note: Platform resources (S3 state, IAM role) remain intact.")
    console.line("Run `scaffold uninstall` to remove everything.")
    console.line()
    return Ok(outcome)


def teardown_environment(
    root: Path,
    document: StateDocument,
    env: Environment,
    terraform_factory: TerraformFactory,
) -> Result[EnvironmentOutcome, TerraformCommandError]:
    """Non-interactive destroy used by uninstall. The state store is left alone."""
    watch_dir = root / env.watch_dir
    if not watch_dir.is_dir():
        console.warn(f"Watch dir '{env.watch_dir}' not found - skipping env '{env.name}'.")
        return Ok(EnvironmentOutcome.SKIPPED)

    tf = terraform_factory(watch_dir)
    match _init_backend(tf, document, env):
        case Err() as e:
            return e
        case Ok(_):
            pass

    with tempfile.TemporaryDirectory(prefix="scaffold-plan-") as tmp:
        match tf.plan_destroy(Path(tmp) / PLAN_FILE):
            case Err() as e:
                return e
            case Ok(plan):
                pass

    if not plan.has_changes:
        return Ok(EnvironmentOutcome.NOTHING_TO_DESTROY)

    result = tf.destroy()
    if not result.ok:
        return Err(TerraformCommandError("destroy", watch_dir, result.output))
    logger.debug("Destroyed %d resources in %s", len(plan.resources), env.name)
    return Ok(EnvironmentOutcome.DESTROYED)
