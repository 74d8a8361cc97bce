"""Scaffold CLI entry point."""

import logging

import click

from . import __version__
from .commands.destroy import destroy
from .commands.init import init
from .commands.status import status
from .commands.uninstall import uninstall


@click.group()
@click.version_option(version=__version__, prog_name="scaffold")
@click.option("--verbose", "-v", is_flag=True, help="Log terraform/git invocations and AWS calls")
def cli(verbose: bool) -> None:
    """Scaffold - Terraform CI/CD for GitHub repositories on AWS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # botocore is noisy at DEBUG
    logging.getLogger("botocore").setLevel(logging.INFO if verbose else logging.WARNING)


# Register subcommands
cli.add_command(init)
cli.add_command(destroy)
cli.add_command(uninstall)
cli.add_command(status)


if __name__ == "__main__":
    cli()
