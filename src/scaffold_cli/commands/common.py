"""Shared CLI utilities.

Common options, AwsContext creation, error handling, output formatting.
"""

import json
import os
import shutil
import sys
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, ParamSpec, TypeVar

import click

from scaffold_cli.lib import console
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.credentials import resolve_credentials, verify_credentials
from scaffold_cli.lib.errors import (
    AwsCallError,
    ConfirmationMismatchError,
    CredentialVerificationError,
    EnvironmentNotFoundError,
    InvalidCredentialChoiceError,
    InvalidSelectionError,
    LockCheckError,
    LockNotResolvedError,
    NoEnvironmentsError,
    NotAGitRepoError,
    NotInitializedError,
    PartialFailureError,
    StateLoadError,
    StateSaveError,
    TerraformApplyError,
    TerraformCommandError,
    ToolNotFoundError,
    UnparsableRemoteError,
)
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import DEFAULT_TIMEOUT, TERRAFORM_BIN, Terraform, TerraformFactory

# Default values
DEFAULT_REGION = "us-east-1"

# Type variables for decorators
P = ParamSpec("P")
T = TypeVar("T")


# Common CLI options as decorators
def terraform_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --terraform option."""
    return click.option(
        "--terraform",
        "terraform_bin",
        envvar="SCAFFOLD_TERRAFORM",
        default=TERRAFORM_BIN,
        show_default=True,
        help="terraform executable",
    )(fn)


def timeout_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --timeout option."""
    return click.option(
        "--timeout",
        envvar="SCAFFOLD_TIMEOUT",
        type=click.IntRange(min=1),
        default=DEFAULT_TIMEOUT,
        show_default=True,
        help="Timeout in seconds for each terraform invocation",
    )(fn)


def json_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --json flag for JSON output."""
    return click.option(
        "--json",
        "as_json",
        is_flag=True,
        help="Output as JSON",
    )(fn)


def terraform_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add all terraform-related options (binary, timeout)."""
    fn = terraform_option(fn)
    fn = timeout_option(fn)
    return fn


def default_region() -> str:
    return os.environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION


def require_tools(*tools: str) -> Result[None, ToolNotFoundError]:
    """Check that every executable is on PATH."""
    for tool in tools:
        if shutil.which(tool) is None:
            return Err(ToolNotFoundError(tool))
    return Ok(None)


def authenticate(prompter: Prompter, region: str) -> AwsContext:
    """Resolve and verify credentials, exiting on failure."""
    console.header("AWS Configuration")
    credentials = handle_result(resolve_credentials(prompter, os.environ))
    ctx = AwsContext(region=region, credentials=credentials)

    console.line()
    console.info("Verifying credentials...")
    identity = handle_result(verify_credentials(ctx))
    console.ok(f"Authenticated as: {identity.arn}")
    return ctx


def make_terraform_factory(ctx: AwsContext, binary: str, timeout: int) -> TerraformFactory:
    """Runner factory whose subprocesses carry ctx's credentials and region."""
    env = ctx.subprocess_env()

    def factory(working_dir: Path) -> Terraform:
        return Terraform(working_dir, env=env, binary=binary, timeout=timeout)

    return factory


def handle_result(result: Result[T, Any], success_message: str | None = None) -> T:
    """Handle a Result, exiting on error with appropriate message.

    On Ok: returns the value, optionally prints success message
    On Err: prints error and exits with code 1
    """
    match result:
        case Ok(value):
            if success_message:
                console.ok(success_message)
            return value
        case Err(error):
            handle_error(error)
            sys.exit(1)  # Should never reach here, but for type checker


def handle_error(error: Any) -> None:
    """Print error message and exit."""
    console.error(_format_error(error))
    sys.exit(1)


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case NotAGitRepoError(path, reason):
            return f"{path} is not a usable git repository: {reason}."

        case UnparsableRemoteError(url):
            return f"Could not determine GitHub org/repo from remote '{url}'."

        case ToolNotFoundError(tool):
            return f"'{tool}' not found on PATH. Install it and retry."

        case NotInitializedError(_):
            return "No .scaffold/config.json found. Run `scaffold init` first."

        case InvalidCredentialChoiceError(choice):
            return f"Invalid choice '{choice}'."

        case CredentialVerificationError(reason):
            return f"AWS credential verification failed. Check your credentials. ({reason})"

        case StateLoadError(path, reason):
            return f"Failed to load state from {path}: {reason}"

        case StateSaveError(path, reason):
            return f"Failed to save state to {path}: {reason}"

        case AwsCallError(operation, target, reason):
            return f"{operation} failed for '{target}': {reason}"

        case TerraformApplyError(resource, output):
            return f"terraform apply failed for '{resource}':\n{output}"

        case TerraformCommandError(command, working_dir, output):
            return f"terraform {command} failed in {working_dir}:\n{output}"

        case LockCheckError(table, reason):
            return f"Could not check state locks in '{table}': {reason}"

        case LockNotResolvedError(_):
            return "Aborted. Please resolve the lock manually before retrying."

        case ConfirmationMismatchError(expected):
            return f"Aborted. Confirmation did not match '{expected}'."

        case NoEnvironmentsError(_):
            return "No environments found in config."

        case EnvironmentNotFoundError(name):
            return f"Environment '{name}' not found in config."

        case InvalidSelectionError(choice):
            return f"Invalid choice '{choice}'."

        case PartialFailureError(operation, failures):
            lines = [f"{operation} finished with {len(failures)} failure(s):"]
            for failure in failures:
                reason = failure.reason.strip().splitlines()[-1] if failure.reason.strip() else ""
                lines.append(f"  - {failure.step} ({failure.target}): {reason}")
            return "\n".join(lines)

        case _:
            return str(error)


def to_json(obj: Any) -> str:
    """Convert object to JSON string."""
    return json.dumps(_to_serializable(obj), indent=2)


def _to_serializable(obj: Any) -> Any:
    """Convert object to JSON-serializable form."""
    if obj is None:
        return None
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(v) for v in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_serializable(asdict(obj))
    return str(obj)


def echo_key_value(key: str, value: Any, indent: int = 0) -> None:
    """Print a key-value pair with optional indentation."""
    prefix = "  " * indent
    click.echo(f"{prefix}{key}: {value}")


def echo_section(title: str) -> None:
    """Print a section header."""
    click.echo()
    click.secho(title, bold=True)
    click.echo("-" * len(title))
