"""Destroy command - tear down one or all environments' infrastructure."""

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
from scaffold_cli.lib.prompt import ClickPrompter
from scaffold_cli.workflows import destroy as destroy_workflow
from scaffold_cli.workflows import select_environments


@click.command()
@click.option("--env", "env_name", default=None, help="Environment to destroy (skips the picker)")
@click.option("--all", "all_environments", is_flag=True, help="Destroy every environment")
@terraform_options
def destroy(
    env_name: str | None,
    all_environments: bool,
    terraform_bin: str,
    timeout: int,
) -> None:
    """Destroy the infrastructure Terraform manages for an environment.

    Platform resources (state bucket, lock table, IAM role) are kept; use
    'scaffold uninstall' to remove those too. Each environment needs its
    destroy plan confirmed by typing DESTROY.

    \b
    Examples:
      scaffold destroy
      scaffold destroy --env staging
      scaffold destroy --all
    """
    if env_name is not None and all_environments:
        raise click.UsageError("--env and --all are mutually exclusive")

    root = Path.cwd()
    prompter = ClickPrompter()

    console.banner()
    document = handle_result(state_module.require(root))
    handle_result(require_tools(terraform_bin))

    ctx = authenticate(prompter, document.aws_region)
    selected = handle_result(
        select_environments(root, document, prompter, env_name, all_environments)
    )

    handle_result(
        destroy_workflow(
            ctx,
            root,
            document,
            selected,
            prompter,
            make_terraform_factory(ctx, terraform_bin, timeout),
        )
    )
