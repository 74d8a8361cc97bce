"""Pipeline definition generation - workflow files and backend stubs."""

from pathlib import Path

from scaffold_cli.lib import paths, templates
from scaffold_cli.lib.storage import file
from scaffold_cli.models import Arn, Environment, StateDocument


def workflow_values(document: StateDocument, env: Environment, role_arn: Arn) -> dict[str, str]:
    """Placeholder values for the workflow template."""
    return {
        "ENV_NAME": env.name,
        "WATCH_DIR": env.watch_dir,
        "BRANCH": env.branch,
        "ROLE_ARN": str(role_arn),
        "S3_BUCKET": document.s3_bucket,
        "DYNAMO_TABLE": document.dynamodb_table,
        "AWS_REGION": document.aws_region,
        "STATE_KEY": env.state_key,
    }


def generate_workflow(
    root: Path,
    document: StateDocument,
    env: Environment,
    role_arn: Arn,
) -> Path:
    """Write .github/workflows/terraform-<env>.yaml, overwriting any previous copy."""
    path = paths.workflow_path(root, env.name)
    content = templates.render(
        templates.load_template(templates.WORKFLOW_TEMPLATE),
        workflow_values(document, env, role_arn),
    )
    file.write(path, content)
    return path


def generate_backend_stub(root: Path, watch_dir: str, region: str) -> Path | None:
    """Write providers.tf into the watch directory unless one is already there.

    Returns the path written, or None when an existing file was left alone.
    """
    path = paths.providers_path(root, watch_dir)
    content = templates.render(
        templates.load_template(templates.PROVIDERS_TEMPLATE),
        {"AWS_REGION": region},
    )
    return path if file.write_if_absent(path, content) else None


def remove_workflows(root: Path) -> list[Path]:
    """Delete every generated workflow file. Returns the paths removed."""
    directory = paths.workflow_dir(root)
    if not directory.is_dir():
        return []
    removed = sorted(directory.glob(paths.WORKFLOW_GLOB))
    for path in removed:
        file.delete(path)
    return removed
