"""Tests for operations/pipeline.py - workflow and backend stub generation."""

from pathlib import Path

from scaffold_cli.models import Arn, Environment, StateDocument
from scaffold_cli.operations.pipeline import (
    generate_backend_stub,
    generate_workflow,
    remove_workflows,
    workflow_values,
)

ROLE_ARN = Arn("arn:aws:iam::123456789012:role/github-actions-widgets-staging")


class TestWorkflowValues:
    def test_values(self, sample_document: StateDocument) -> None:
        env = sample_document.environments[1]

        values = workflow_values(sample_document, env, ROLE_ARN)

        assert values == {
            "ENV_NAME": "production",
            "WATCH_DIR": "infra/production",
            "BRANCH": "release",
            "ROLE_ARN": str(ROLE_ARN),
            "S3_BUCKET": "tf-state-widgets-d782c874",
            "DYNAMO_TABLE": "tf-lock-widgets-d782c874",
            "AWS_REGION": "us-east-1",
            "STATE_KEY": "production/terraform.tfstate",
        }


class TestGenerateWorkflow:
    def test_writes_rendered_workflow(self, repo_root: Path, sample_document: StateDocument) -> None:
        env = sample_document.environments[0]

        path = generate_workflow(repo_root, sample_document, env, ROLE_ARN)

        assert path == repo_root / ".github" / "workflows" / "terraform-staging.yaml"
        content = path.read_text()
        assert "{{" not in content
        assert str(ROLE_ARN) in content
        assert "infra/staging/**" in content
        assert "staging/terraform.tfstate" in content

    def test_overwrites_previous_copy(
        self, repo_root: Path, sample_document: StateDocument
    ) -> None:
        env = sample_document.environments[0]
        path = repo_root / ".github" / "workflows" / "terraform-staging.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("hand edited")

        generate_workflow(repo_root, sample_document, env, ROLE_ARN)

        assert path.read_text() != "hand edited"


class TestGenerateBackendStub:
    def test_writes_stub(self, repo_root: Path) -> None:
        path = generate_backend_stub(repo_root, "infra/staging", "eu-west-1")

        assert path == repo_root / "infra" / "staging" / "providers.tf"
        content = path.read_text()
        assert 'backend "s3" {}' in content
        assert '"eu-west-1"' in content

    def test_existing_stub_untouched(self, repo_root: Path) -> None:
        stub = repo_root / "infra" / "staging" / "providers.tf"
        stub.parent.mkdir(parents=True)
        stub.write_text("# mine")

        assert generate_backend_stub(repo_root, "infra/staging", "us-east-1") is None
        assert stub.read_text() == "# mine"


class TestRemoveWorkflows:
    def test_removes_only_generated_workflows(self, repo_root: Path) -> None:
        workflows = repo_root / ".github" / "workflows"
        workflows.mkdir(parents=True)
        for name in ("terraform-staging.yaml", "terraform-production.yaml", "ci.yaml"):
            (workflows / name).write_text("x")

        removed = remove_workflows(repo_root)

        assert [p.name for p in removed] == [
            "terraform-production.yaml",
            "terraform-staging.yaml",
        ]
        assert [p.name for p in workflows.iterdir()] == ["ci.yaml"]

    def test_no_workflow_dir(self, repo_root: Path) -> None:
        assert remove_workflows(repo_root) == []


def test_environment_state_key_used_for_custom_name(repo_root: Path, sample_document) -> None:
    env = Environment(name="qa", watch_dir="envs/qa")

    content = generate_workflow(repo_root, sample_document, env, ROLE_ARN).read_text()

    assert "qa/terraform.tfstate" in content
