"""Status command - show this repository's Scaffold setup."""

from pathlib import Path

import click

from scaffold_cli.commands.common import echo_key_value, echo_section, json_option, to_json
from scaffold_cli.workflows import get_status


@click.command()
@json_option
def status(as_json: bool) -> None:
    """Show the state store of the current repository.

    Reads .scaffold/config.json only; no AWS credentials needed.

    \b
    Examples:
      scaffold status
      scaffold status --json
    """
    current = get_status(Path.cwd())

    if as_json:
        click.echo(to_json(current))
        return

    # Human-readable output
    click.echo("Scaffold Status")
    click.echo("=" * 40)
    echo_key_value("Config", current.config_path)
    echo_key_value("Initialized", "Yes" if current.initialized else "No")

    if current.error:
        echo_key_value("Error", current.error)
        return

    if not current.initialized:
        click.echo()
        click.echo("Run 'scaffold init' to initialize.")
        return

    echo_section("Platform")
    echo_key_value("Repository", current.repo, indent=1)
    echo_key_value("Region", current.region, indent=1)
    echo_key_value("State bucket", current.s3_bucket, indent=1)
    echo_key_value("Lock table", current.dynamodb_table, indent=1)
    echo_key_value("IAM role", current.iam_role, indent=1)

    echo_section(f"Environments ({len(current.environments)})")
    if current.environments:
        for env in current.environments:
            click.echo(f"  {env.name}")
            echo_key_value("Watch dir", env.watch_dir, indent=2)
            echo_key_value("Branch", env.branch, indent=2)
            echo_key_value("State key", env.state_key, indent=2)
            echo_key_value("Workflow", "present" if env.workflow_present else "missing", indent=2)
    else:
        click.echo("  (none)")

    click.echo()
