"""Error types for the Scaffold CLI.

All errors are frozen dataclasses - no exceptions in business logic.
Pattern match on these in the CLI layer to provide user-friendly messages.
"""

from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Precondition Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class NotAGitRepoError:
    """Working directory is not a git repository, or has no 'origin' remote."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class UnparsableRemoteError:
    """Organization or repository could not be extracted from the remote URL."""

    url: str


@dataclass(frozen=True, slots=True)
class ToolNotFoundError:
    """A required executable is not on PATH."""

    tool: str


@dataclass(frozen=True, slots=True)
class NotInitializedError:
    """No state store found - 'scaffold init' has not run here."""

    config_path: Path


# =============================================================================
# Credential Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class InvalidCredentialChoiceError:
    """Credential menu answer was not one of the offered options."""

    choice: str


@dataclass(frozen=True, slots=True)
class CredentialVerificationError:
    """STS GetCallerIdentity failed for the resolved credentials."""

    reason: str


# =============================================================================
# State Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class StateLoadError:
    """Failed to read or parse the state store."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class StateSaveError:
    """Failed to write the state store."""

    path: Path
    reason: str


# =============================================================================
# AWS Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class AwsCallError:
    """A direct AWS API call failed."""

    operation: str
    target: str
    reason: str


# =============================================================================
# Terraform Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class TerraformApplyError:
    """terraform apply failed while reconciling a resource."""

    resource: str
    output: str


@dataclass(frozen=True, slots=True)
class TerraformCommandError:
    """A terraform init/plan/destroy invocation failed."""

    command: str
    working_dir: Path
    output: str


# =============================================================================
# Lock Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class LockCheckError:
    """Lock table could not be queried."""

    table: str
    reason: str


@dataclass(frozen=True, slots=True)
class LockNotResolvedError:
    """A state lock exists and the operator declined to remove it."""

    lock_id: str


# =============================================================================
# Destroy Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class ConfirmationMismatchError:
    """Typed confirmation phrase did not match exactly."""

    expected: str


@dataclass(frozen=True, slots=True)
class NoEnvironmentsError:
    """State store lists no environments."""

    config_path: Path


@dataclass(frozen=True, slots=True)
class EnvironmentNotFoundError:
    """Named environment is not in the state store."""

    name: str


@dataclass(frozen=True, slots=True)
class InvalidSelectionError:
    """Environment picker answer was not a listed option."""

    choice: str


@dataclass(frozen=True, slots=True)
class StepFailure:
    """One best-effort step that failed during a multi-step teardown."""

    step: str
    target: str
    reason: str


@dataclass(frozen=True, slots=True)
class PartialFailureError:
    """A multi-environment or teardown run finished with recorded failures."""

    operation: str
    failures: tuple[StepFailure, ...]


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type InitError = (
    AwsCallError | TerraformApplyError | TerraformCommandError | StateLoadError | StateSaveError
)
type DestroyError = (
    NotInitializedError
    | StateLoadError
    | StateSaveError
    | LockCheckError
    | LockNotResolvedError
    | ConfirmationMismatchError
    | TerraformCommandError
    | PartialFailureError
)
