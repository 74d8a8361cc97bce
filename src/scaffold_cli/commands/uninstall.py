"""Uninstall command - remove every resource and file Scaffold created."""

from pathlib import Path

import click

from scaffold_cli.commands.common import (
    authenticate,
    handle_result,
    make_terraform_factory,
    require_tools,
    terraform_options,
)
from scaffold_cli.lib import console
from scaffold_cli.lib import state as state_module
from scaffold_cli.lib.git import detect_repo
from scaffold_cli.lib.prompt import ClickPrompter
from scaffold_cli.workflows import confirm_uninstall
from scaffold_cli.workflows import uninstall as uninstall_workflow


@click.command()
@terraform_options
def uninstall(terraform_bin: str, timeout: int) -> None:
    """Destroy ALL Scaffold resources for this repository.

    Destroys every environment, then deletes the IAM role(s), the lock
    table, the state bucket with its full version history, the generated
    workflows and .scaffold/. Cannot be undone.
    """
    root = Path.cwd()
    prompter = ClickPrompter()

    console.banner()
    document = handle_result(state_module.require(root))

    click.secho("  WARNING: This will destroy ALL Scaffold resources:", fg="red", bold=True)
    console.line("  - S3 state bucket (including all state history)")
    console.line("  - DynamoDB lock table")
    console.line("  - IAM OIDC role(s)")
    console.line("  - All workflows")
    console.line("  - Configuration files")
    console.line()
    handle_result(confirm_uninstall(prompter))

    handle_result(require_tools("git", terraform_bin))
    ctx = authenticate(prompter, document.aws_region)
    identity = handle_result(detect_repo(root))

    report = handle_result(
        uninstall_workflow(
            ctx,
            root,
            identity,
            document,
            make_terraform_factory(ctx, terraform_bin, timeout),
        )
    )

    console.line()
    console.ok(
        f"Uninstall complete ({len(report.roles)} role(s), "
        f"{len(report.workflows)} workflow(s) removed)"
    )
    console.line()
