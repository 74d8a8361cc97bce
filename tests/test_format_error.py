"""Tests for commands/common.py - _format_error pattern matching.

Every error type gets its own test to catch:
- Type aliases used in match/case (crash at runtime)
- Wrong positional destructuring (silent wrong values)
- Missing case arms (falls through to generic str())
"""

from pathlib import Path

from scaffold_cli.commands.common import _format_error
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
    StepFailure,
    TerraformApplyError,
    TerraformCommandError,
    ToolNotFoundError,
    UnparsableRemoteError,
)


class TestFormatPreconditionErrors:
    """Tests for precondition error formatting."""

    def test_not_a_git_repo(self) -> None:
        result = _format_error(NotAGitRepoError(Path("/work/widgets"), "no 'origin' remote"))
        assert "/work/widgets" in result
        assert "no 'origin' remote" in result

    def test_unparsable_remote(self) -> None:
        result = _format_error(UnparsableRemoteError("file:///srv/repo"))
        assert "file:///srv/repo" in result
        assert "org/repo" in result

    def test_tool_not_found(self) -> None:
        result = _format_error(ToolNotFoundError("terraform"))
        assert "'terraform' not found on PATH" in result

    def test_not_initialized(self) -> None:
        result = _format_error(NotInitializedError(Path(".scaffold/config.json")))
        assert "scaffold init" in result


class TestFormatCredentialErrors:
    def test_invalid_choice(self) -> None:
        assert _format_error(InvalidCredentialChoiceError("7")) == "Invalid choice '7'."

    def test_verification_failed(self) -> None:
        result = _format_error(CredentialVerificationError("ExpiredToken"))
        assert "verification failed" in result
        assert "ExpiredToken" in result


class TestFormatStateErrors:
    def test_state_load_error(self) -> None:
        result = _format_error(StateLoadError(Path("/r/.scaffold/config.json"), "bad JSON"))
        assert "/r/.scaffold/config.json" in result
        assert "bad JSON" in result
        assert "load" in result

    def test_state_save_error(self) -> None:
        result = _format_error(StateSaveError(Path("/r/.scaffold/config.json"), "read-only"))
        assert "save" in result
        assert "read-only" in result


class TestFormatAwsAndTerraformErrors:
    def test_aws_call_error(self) -> None:
        result = _format_error(AwsCallError("DeleteBucket", "tf-state-x", "BucketNotEmpty"))
        assert result == "DeleteBucket failed for 'tf-state-x': BucketNotEmpty"

    def test_terraform_apply_error(self) -> None:
        result = _format_error(TerraformApplyError("tf-state-x", "Error: AccessDenied"))
        assert "'tf-state-x'" in result
        assert result.endswith("Error: AccessDenied")

    def test_terraform_command_error(self) -> None:
        result = _format_error(
            TerraformCommandError("plan -destroy", Path("/r/infra/staging"), "Error: x")
        )
        assert "terraform plan -destroy failed in /r/infra/staging" in result
        assert "Error: x" in result


class TestFormatDestroyErrors:
    def test_lock_check_error(self) -> None:
        result = _format_error(LockCheckError("tf-lock-x", "throttled"))
        assert "tf-lock-x" in result
        assert "throttled" in result

    def test_lock_not_resolved(self) -> None:
        result = _format_error(LockNotResolvedError("bucket/staging/terraform.tfstate-md5"))
        assert "resolve the lock manually" in result

    def test_confirmation_mismatch(self) -> None:
        result = _format_error(ConfirmationMismatchError("DESTROY"))
        assert "Aborted" in result
        assert "'DESTROY'" in result

    def test_no_environments(self) -> None:
        assert "No environments" in _format_error(NoEnvironmentsError(Path("c.json")))

    def test_environment_not_found(self) -> None:
        assert "'qa'" in _format_error(EnvironmentNotFoundError("qa"))

    def test_invalid_selection(self) -> None:
        assert _format_error(InvalidSelectionError("9")) == "Invalid choice '9'."

    def test_partial_failure_lists_last_line_of_each_reason(self) -> None:
        error = PartialFailureError(
            "uninstall",
            (
                StepFailure("terraform destroy", "staging", "Planning...\nError: timeout"),
                StepFailure("delete role", "github-actions-widgets", "AccessDenied"),
            ),
        )

        lines = _format_error(error).splitlines()

        assert lines == [
            "uninstall finished with 2 failure(s):",
            "  - terraform destroy (staging): Error: timeout",
            "  - delete role (github-actions-widgets): AccessDenied",
        ]

    def test_unknown_error_falls_back_to_str(self) -> None:
        assert _format_error("something odd") == "something odd"
