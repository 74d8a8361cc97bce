"""Shared pytest fixtures for scaffold-cli tests."""

import json
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from moto import mock_aws

from scaffold_cli.lib.terraform import Terraform, TerraformResult
from scaffold_cli.models import Environment, StateDocument

REGION = "us-east-1"


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def temp_xdg_dirs(monkeypatch: pytest.MonkeyPatch):
    """Create temporary XDG directories for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        data_dir = base / "data"
        data_dir.mkdir()

        monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))

        yield {
            "data": data_dir,
            "base": base,
        }


@pytest.fixture
def aws_context(aws_credentials, temp_xdg_dirs):
    """AwsContext backed by moto."""
    from scaffold_cli.lib.aws import AwsContext

    with mock_aws():
        yield AwsContext(region=REGION)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """An empty working tree to generate files into."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def sample_document() -> StateDocument:
    return StateDocument(
        repo="acme/widgets",
        aws_region=REGION,
        s3_bucket="tf-state-widgets-d782c874",
        dynamodb_table="tf-lock-widgets-d782c874",
        iam_role="github-actions-widgets",
        environments=[
            Environment(name="staging", watch_dir="infra/staging"),
            Environment(name="production", watch_dir="infra/production", branch="release"),
        ],
    )


# =============================================================================
# Scripted prompter
# =============================================================================


class ScriptedPrompter:
    """Prompter that replays canned answers and records every question.

    An empty-string answer takes the prompt's default, like pressing Enter.
    """

    def __init__(self, answers: list[str] | None = None, confirms: list[bool] | None = None):
        self.answers = list(answers or [])
        self.confirms = list(confirms or [])
        self.asked: list[str] = []
        self.confirmed: list[str] = []

    def ask(self, text: str, default: str | None = None, hide_input: bool = False) -> str:
        self.asked.append(text)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {text!r}")
        answer = self.answers.pop(0)
        if answer == "" and default is not None:
            return default
        return answer

    def confirm(self, text: str, default: bool = False) -> bool:
        self.confirmed.append(text)
        if not self.confirms:
            raise AssertionError(f"Unexpected confirmation: {text!r}")
        return self.confirms.pop(0)


@pytest.fixture
def prompter_factory():
    """Build a ScriptedPrompter: prompter_factory(["answer", ...], [True, ...])."""
    return ScriptedPrompter


# =============================================================================
# Fake terraform
# =============================================================================


@dataclass
class TerraformScript:
    """Canned terraform behaviour shared by every runner a factory builds.

    failures maps "command" or "<working dir name>:command" to the stderr of
    a failing invocation. planned lists the addresses a destroy plan deletes;
    empty means "no changes".
    """

    planned: tuple[str, ...] = ()
    state: tuple[str, ...] = ()
    failures: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[Path, tuple[str, ...]]] = field(default_factory=list)

    def __call__(self, working_dir: Path) -> "FakeTerraform":
        return FakeTerraform(working_dir, self)

    def commands(self, working_dir: Path | None = None) -> list[str]:
        """First argument of every recorded call, optionally for one directory."""
        return [
            args[0] for wd, args in self.calls if working_dir is None or wd == working_dir
        ]

    def calls_for(self, command: str) -> list[tuple[Path, tuple[str, ...]]]:
        return [(wd, args) for wd, args in self.calls if args[0] == command]

    def failure(self, working_dir: Path, command: str) -> str | None:
        return self.failures.get(f"{working_dir.name}:{command}", self.failures.get(command))


class FakeTerraform(Terraform):
    """Terraform runner that records argv instead of spawning a process."""

    def __init__(self, working_dir: Path, script: TerraformScript):
        super().__init__(working_dir)
        self.script = script

    def run(self, *args: str) -> TerraformResult:
        self.script.calls.append((self.working_dir, args))
        command = args[0]

        failure = self.script.failure(self.working_dir, command)
        if failure is not None:
            return TerraformResult(args, 1, "", failure)

        match command:
            case "state":
                return TerraformResult(args, 0, "\n".join(self.script.state), "")
            case "plan":
                return TerraformResult(args, 2 if self.script.planned else 0, "", "")
            case "show":
                plan = {
                    "resource_changes": [
                        {"address": address, "change": {"actions": ["delete"]}}
                        for address in self.script.planned
                    ]
                }
                return TerraformResult(args, 0, json.dumps(plan), "")
            case _:
                return TerraformResult(args, 0, "", "")


@pytest.fixture
def terraform_script() -> TerraformScript:
    """Fake terraform; pass it wherever a TerraformFactory is expected."""
    return TerraformScript()
