"""Terraform CLI runner.

Every invocation is built from typed arguments (targets, variables, backend
overrides) and returns a TerraformResult instead of raising. Plans are read
back through 'terraform show -json' rather than by scraping human output.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from scaffold_cli.lib.errors import TerraformCommandError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.models import Environment, StateDocument

logger = logging.getLogger(__name__)

TERRAFORM_BIN = "terraform"
DEFAULT_TIMEOUT = 1800

_EXIT_TIMEOUT = 124
_EXIT_NOT_FOUND = 127


@dataclass(frozen=True, slots=True)
class TerraformResult:
    """Outcome of one terraform invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout/stderr, for surfacing diagnostics verbatim."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


@dataclass(frozen=True, slots=True)
class PlanResult:
    """A saved destroy plan and the resource addresses it would delete."""

    has_changes: bool
    plan_file: Path | None = None
    resources: tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        return f"Plan: 0 to add, 0 to change, {len(self.resources)} to destroy."


def backend_config_for(document: StateDocument, env: Environment) -> dict[str, str]:
    """Backend overrides that point an environment at its own state key."""
    return {
        "bucket": document.s3_bucket,
        "key": env.state_key,
        "region": document.aws_region,
        "dynamodb_table": document.dynamodb_table,
        "encrypt": "true",
    }


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _var_args(variables: Mapping[str, object] | None) -> list[str]:
    return [f"-var={k}={_format_value(v)}" for k, v in (variables or {}).items()]


def _target_args(targets: Iterable[str]) -> list[str]:
    return [f"-target={t}" for t in targets]


class Terraform:
    """Run terraform against one working directory.

    Args:
        working_dir: Directory passed as -chdir
        env: Full environment for the child process (carries AWS credentials)
        binary: terraform executable
        timeout: Per-invocation timeout in seconds
    """

    def __init__(
        self,
        working_dir: Path,
        env: Mapping[str, str] | None = None,
        binary: str = TERRAFORM_BIN,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.working_dir = working_dir
        self.env = dict(env) if env is not None else None
        self.binary = binary
        self.timeout = timeout

    def run(self, *args: str) -> TerraformResult:
        cmd = [self.binary, f"-chdir={self.working_dir}", *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=self.env,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return TerraformResult(tuple(args), _EXIT_NOT_FOUND, "", f"{self.binary}: not found")
        except subprocess.TimeoutExpired:
            return TerraformResult(
                tuple(args), _EXIT_TIMEOUT, "", f"terraform timed out after {self.timeout}s"
            )

        logger.debug("terraform %s exited %d", args[0] if args else "", proc.returncode)
        return TerraformResult(tuple(args), proc.returncode, proc.stdout, proc.stderr)

    def init(
        self,
        backend: bool = True,
        backend_config: Mapping[str, str] | None = None,
    ) -> TerraformResult:
        """terraform init -reconfigure, with backend overrides or no backend."""
        args = ["init", "-reconfigure", "-input=false", "-no-color"]
        if not backend:
            args.append("-backend=false")
        for key, value in (backend_config or {}).items():
            args.append(f"-backend-config={key}={value}")
        return self.run(*args)

    def import_resource(
        self,
        address: str,
        resource_id: str,
        variables: Mapping[str, object] | None = None,
    ) -> TerraformResult:
        """Bind an existing cloud resource to a resource address in local state."""
        return self.run(
            "import", "-input=false", "-no-color", *_var_args(variables), address, resource_id
        )

    def apply(
        self,
        variables: Mapping[str, object] | None = None,
        targets: Iterable[str] = (),
    ) -> TerraformResult:
        return self.run(
            "apply",
            "-auto-approve",
            "-input=false",
            "-no-color",
            *_var_args(variables),
            *_target_args(targets),
        )

    def state_list(self) -> tuple[str, ...]:
        """Addresses tracked in the working directory's state. Empty if there is none."""
        result = self.run("state", "list")
        if not result.ok:
            return ()
        return tuple(line for line in result.stdout.splitlines() if line.strip())

    def plan_destroy(self, plan_file: Path) -> Result[PlanResult, TerraformCommandError]:
        """Save a destroy plan to plan_file and list the addresses it deletes."""
        result = self.run(
            "plan",
            "-destroy",
            "-input=false",
            "-no-color",
            "-detailed-exitcode",
            f"-out={plan_file}",
        )
        # -detailed-exitcode: 0 = no changes, 1 = error, 2 = changes present
        match result.returncode:
            case 0:
                return Ok(PlanResult(has_changes=False))
            case 2:
                return Ok(
                    PlanResult(
                        has_changes=True,
                        plan_file=plan_file,
                        resources=self.planned_deletions(plan_file),
                    )
                )
            case _:
                return Err(TerraformCommandError("plan -destroy", self.working_dir, result.output))

    def planned_deletions(self, plan_file: Path) -> tuple[str, ...]:
        """Addresses marked for deletion in a saved plan."""
        result = self.run("show", "-json", "-no-color", str(plan_file))
        if not result.ok:
            logger.warning("terraform show failed: %s", result.output)
            return ()
        try:
            plan = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse plan JSON: %s", e)
            return ()
        return tuple(
            change["address"]
            for change in plan.get("resource_changes", [])
            if "delete" in change.get("change", {}).get("actions", [])
        )

    def apply_plan(self, plan_file: Path) -> TerraformResult:
        """Apply exactly the saved plan the operator reviewed."""
        return self.run("apply", "-input=false", "-no-color", str(plan_file))

    def destroy(self) -> TerraformResult:
        return self.run("destroy", "-auto-approve", "-input=false", "-no-color")


# Builds a runner bound to one working directory
type TerraformFactory = Callable[[Path], Terraform]
