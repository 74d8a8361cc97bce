"""Destroy workflow - tear down the infrastructure of one or all environments."""

from dataclasses import dataclass, field
from pathlib import Path

from scaffold_cli.lib import console, paths
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import (
    DestroyError,
    EnvironmentNotFoundError,
    InvalidSelectionError,
    NoEnvironmentsError,
    PartialFailureError,
    StepFailure,
    TerraformCommandError,
)
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import TerraformFactory
from scaffold_cli.models import Environment, StateDocument
from scaffold_cli.operations.environment import EnvironmentOutcome, destroy_environment


@dataclass
class DestroyReport:
    outcomes: dict[str, EnvironmentOutcome] = field(default_factory=dict)


def select_environments(
    root: Path,
    document: StateDocument,
    prompter: Prompter,
    name: str | None = None,
    all_environments: bool = False,
) -> Result[list[Environment], NoEnvironmentsError | EnvironmentNotFoundError | InvalidSelectionError]:
    """Resolve which environments to destroy.

    --env and --all bypass the picker. Otherwise the operator chooses from a
    numbered list whose last entry is "All environments".
    """
    if not document.environments:
        return Err(NoEnvironmentsError(paths.config_path(root)))

    if name is not None:
        env = document.get_environment(name)
        if env is None:
            return Err(EnvironmentNotFoundError(name))
        return Ok([env])

    if all_environments:
        return Ok(list(document.environments))

    console.header("Select Environment")
    console.line()
    for i, env in enumerate(document.environments, start=1):
        console.line(f"[{i}] {env.name} ({env.watch_dir})")
    all_index = len(document.environments) + 1
    console.line(f"[{all_index}] All environments")
    console.line()

    choice = prompter.ask("Choice").strip()
    if not choice.isdigit() or not 1 <= int(choice) <= all_index:
        return Err(InvalidSelectionError(choice))
    if int(choice) == all_index:
        return Ok(list(document.environments))
    return Ok([document.environments[int(choice) - 1]])


def destroy(
    ctx: AwsContext,
    root: Path,
    document: StateDocument,
    selected: list[Environment],
    prompter: Prompter,
    terraform_factory: TerraformFactory,
) -> Result[DestroyReport, DestroyError]:
    """Destroy each selected environment in order.

    A lock the operator will not remove, or a mistyped confirmation, stops
    the run at once. When several environments are selected a Terraform
    failure in one is recorded and the rest still run; the run then ends
    with a PartialFailureError listing every failure.
    """
    report = DestroyReport()
    failures: list[StepFailure] = []

    for env in selected:
        console.header(f"Environment: {env.name}")
        match destroy_environment(ctx, root, document, env, prompter, terraform_factory):
            case Ok(outcome):
                report.outcomes[env.name] = outcome
            case Err(TerraformCommandError() as e) if len(selected) > 1:
                console.error(f"{env.name}: terraform {e.command} failed")
                failures.append(StepFailure(f"terraform {e.command}", env.name, e.output))
            case Err() as e:
                return e

    if failures:
        return Err(PartialFailureError("destroy", tuple(failures)))
    return Ok(report)
