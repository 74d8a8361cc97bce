"""Tests for lib/templates.py - bundled templates and modules."""

import re
from pathlib import Path

import pytest

from scaffold_cli.lib import templates


class TestRender:
    def test_replaces_placeholders(self) -> None:
        rendered = templates.render("name: {{ENV_NAME}}-{{ENV_NAME}} ({{BRANCH}})", {
            "ENV_NAME": "staging",
            "BRANCH": "main",
        })
        assert rendered == "name: staging-staging (main)"

    def test_leaves_github_expressions_alone(self) -> None:
        rendered = templates.render("${{ secrets.TOKEN }} {{ENV_NAME}}", {"ENV_NAME": "dev"})
        assert rendered == "${{ secrets.TOKEN }} dev"

    def test_names_with_digits(self) -> None:
        rendered = templates.render(
            "bucket={{S3_BUCKET}} table={{DYNAMO_TABLE}}",
            {"S3_BUCKET": "tf-state-x", "DYNAMO_TABLE": "tf-lock-x"},
        )
        assert rendered == "bucket=tf-state-x table=tf-lock-x"

    def test_missing_value_raises(self) -> None:
        with pytest.raises(KeyError):
            templates.render("{{ROLE_ARN}}", {})

    def test_unknown_placeholder_raises(self) -> None:
        with pytest.raises(KeyError, match="S3_BUCKET"):
            templates.render("{{ENV_NAME}} {{S3_BUCKET}}", {"ENV_NAME": "dev"})


class TestBundledData:
    def test_workflow_template_present(self) -> None:
        content = templates.load_template(templates.WORKFLOW_TEMPLATE)
        for placeholder in (
            "ENV_NAME",
            "WATCH_DIR",
            "BRANCH",
            "ROLE_ARN",
            "S3_BUCKET",
            "DYNAMO_TABLE",
            "AWS_REGION",
            "STATE_KEY",
        ):
            assert f"{{{{{placeholder}}}}}" in content

    def test_providers_template_present(self) -> None:
        content = templates.load_template(templates.PROVIDERS_TEMPLATE)
        assert 'backend "s3"' in content
        assert "{{AWS_REGION}}" in content

    @pytest.mark.parametrize("module", [templates.BACKEND_MODULE, templates.IAM_MODULE])
    def test_modules_present(self, module: str) -> None:
        assert (templates.get_module_path(module) / "main.tf").is_file()


class TestPrepareModule:
    def test_copies_configuration(self, tmp_path: Path) -> None:
        dest = templates.prepare_module(templates.BACKEND_MODULE, tmp_path / "backend")

        assert (dest / "main.tf").read_text() == (
            templates.get_module_path(templates.BACKEND_MODULE) / "main.tf"
        ).read_text()

    def test_keeps_existing_state(self, tmp_path: Path) -> None:
        dest = tmp_path / "backend"
        dest.mkdir()
        (dest / "terraform.tfstate").write_text('{"serial": 7}')
        (dest / "main.tf").write_text("# stale copy")

        templates.prepare_module(templates.BACKEND_MODULE, dest)

        assert (dest / "terraform.tfstate").read_text() == '{"serial": 7}'
        assert (dest / "main.tf").read_text() != "# stale copy"


def _deny_actions() -> list[str]:
    main_tf = (templates.get_module_path(templates.IAM_MODULE) / "main.tf").read_text()
    statement = re.search(
        r'sid\s*=\s*"DenyIdentityAndOrganizationMutation".*?actions\s*=\s*\[(.*?)\]',
        main_tf,
        re.DOTALL,
    )
    assert statement is not None
    return re.findall(r'"([a-z]+:[A-Za-z*]+)"', statement.group(1))


class TestIamModulePolicy:
    @pytest.mark.parametrize(
        "action",
        [
            "iam:Create*",
            "iam:Delete*",
            "iam:Attach*",
            "iam:Put*",
            "iam:Update*",
            "iam:Tag*",
            "iam:Untag*",
            "iam:Deactivate*",
            "iam:Reset*",
            "iam:Change*",
            "iam:Enable*",
            "organizations:Create*",
            "organizations:Tag*",
            "organizations:Untag*",
            "organizations:Close*",
            "organizations:Cancel*",
        ],
    )
    def test_mutation_denied(self, action: str) -> None:
        assert action in _deny_actions()

    def test_reads_not_denied(self) -> None:
        verbs = {action.split(":", 1)[1] for action in _deny_actions()}
        assert verbs.isdisjoint({"*", "Get*", "List*", "Generate*", "Simulate*"})

    def test_only_identity_services(self) -> None:
        assert {action.split(":", 1)[0] for action in _deny_actions()} == {
            "iam",
            "organizations",
        }
