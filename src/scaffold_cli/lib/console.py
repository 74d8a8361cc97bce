"""Terminal status output."""

import click


def ok(message: str) -> None:
    click.echo(f"  {click.style('✓', fg='green')}  {message}")


def info(message: str) -> None:
    click.echo(f"  {click.style('→', fg='blue')}  {message}")


def warn(message: str) -> None:
    click.echo(f"  {click.style('[WARN]', fg='yellow', bold=True)} {message}")


def error(message: str) -> None:
    click.echo(f"  {click.style('[ERROR]', fg='red')} {message}", err=True)


def header(title: str) -> None:
    click.echo()
    click.secho(f"→ {title}", fg="cyan")


def line(message: str = "") -> None:
    click.echo(f"  {message}" if message else "")


def banner() -> None:
    click.echo()
    click.secho("╭─────────────────────────────────────╮", fg="cyan", bold=True)
    click.secho("│   Scaffold - Infrastructure CI/CD   │", fg="cyan", bold=True)
    click.secho("╰─────────────────────────────────────╯", fg="cyan", bold=True)
    click.echo()
