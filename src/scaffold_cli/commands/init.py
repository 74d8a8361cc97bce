"""Init command - provision state backend, roles and pipelines for this repository."""

from pathlib import Path

import click

from scaffold_cli.commands.common import (
    authenticate,
    default_region,
    handle_result,
    make_terraform_factory,
    require_tools,
    terraform_options,
)
from scaffold_cli.lib import console
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.git import detect_repo
from scaffold_cli.lib.prompt import ClickPrompter, Prompter
from scaffold_cli.models import Environment
from scaffold_cli.workflows import init as init_workflow
from scaffold_cli.workflows.init import InitConfig


def _ask_environments(prompter: Prompter) -> tuple[Environment, ...]:
    count = prompter.ask("How many environments?", default="1").strip()
    if not count.isdigit() or int(count) < 1:
        raise click.BadParameter(f"expected a positive number, got '{count}'")

    environments: list[Environment] = []
    for i in range(1, int(count) + 1):
        console.line()
        console.line(f"Environment {i}:")
        name = prompter.ask("  Name").strip()
        watch_dir = prompter.ask("  Watch directory").strip()
        branch = prompter.ask("  Trigger branch", default="main").strip() or "main"
        if not name or not watch_dir:
            raise click.BadParameter("environment name and watch directory are required")
        environments.append(Environment(name=name, watch_dir=watch_dir.rstrip("/"), branch=branch))
    return tuple(environments)


def collect_config(
    prompter: Prompter,
    use_inline_policies: bool | None,
    shared_role: bool,
) -> InitConfig:
    """Ask for region, environments and (unless given as a flag) the policy mode."""
    console.header("Terraform Configuration")
    console.line()
    region = prompter.ask("Region", default=default_region()).strip() or default_region()

    console.line()
    environments = _ask_environments(prompter)

    if use_inline_policies is None:
        console.header("IAM Policy Mode")
        use_inline_policies = prompter.confirm("Use inline policies (SCP-compliant)?", default=True)

    return InitConfig(
        region=region,
        environments=environments,
        use_inline_policies=use_inline_policies,
        shared_role=shared_role,
    )


@click.command()
@click.option(
    "--use-inline-policies",
    type=click.BOOL,
    default=None,
    help="Attach the access policy inline (SCP-compliant). Prompted if omitted.",
)
@click.option(
    "--shared-role",
    is_flag=True,
    help="Use one IAM role for every environment",
)
@terraform_options
def init(
    use_inline_policies: bool | None,
    shared_role: bool,
    terraform_bin: str,
    timeout: int,
) -> None:
    """Set up Terraform CI/CD for the current repository.

    Creates (or adopts) an S3 state bucket, a DynamoDB lock table and a
    GitHub OIDC role, then writes one GitHub Actions workflow per
    environment. Safe to re-run.

    \b
    Examples:
      scaffold init
      scaffold init --shared-role
      scaffold init --use-inline-policies false
    """
    root = Path.cwd()
    prompter = ClickPrompter()

    console.banner()
    handle_result(require_tools("git", terraform_bin))

    identity = handle_result(detect_repo(root))
    console.line(f"Auto-detected repository: {identity.slug}")

    verified = authenticate(prompter, default_region())
    config = collect_config(prompter, use_inline_policies, shared_role)
    ctx = AwsContext(region=config.region, credentials=verified.credentials)

    console.header("Provisioning")
    console.line()
    handle_result(
        init_workflow(
            ctx,
            root,
            identity,
            config,
            make_terraform_factory(ctx, terraform_bin, timeout),
        )
    )

    console.line()
    console.header("Next Steps")
    console.line()
    console.line("1. Review:  git status")
    console.line('2. Commit:  git add . && git commit -m "feat: add Scaffold"')
    console.line("3. Push:    git push origin main")
    console.line()
