"""Repository-relative and XDG-compliant paths."""

import os
from pathlib import Path

APP_NAME = "scaffold"

SCAFFOLD_DIR = ".scaffold"
CONFIG_FILE = "config.json"
WORKFLOW_DIR = Path(".github") / "workflows"
WORKFLOW_GLOB = "terraform-*.yaml"
PROVIDERS_FILE = "providers.tf"


def scaffold_dir(root: Path) -> Path:
    """<root>/.scaffold/"""
    return root / SCAFFOLD_DIR


def config_path(root: Path) -> Path:
    """<root>/.scaffold/config.json - the state store."""
    return scaffold_dir(root) / CONFIG_FILE


def workflow_dir(root: Path) -> Path:
    """<root>/.github/workflows/"""
    return root / WORKFLOW_DIR


def workflow_path(root: Path, env_name: str) -> Path:
    """Generated GitHub Actions workflow for an environment."""
    return workflow_dir(root) / f"terraform-{env_name}.yaml"


def providers_path(root: Path, watch_dir: str) -> Path:
    """Terraform backend stub inside an environment's watch directory."""
    return root / watch_dir / PROVIDERS_FILE


def data_dir() -> Path:
    """~/.local/share/scaffold/"""
    base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / APP_NAME


def terraform_work_dir(org: str, repo: str) -> Path:
    """Working copies of the bundled Terraform modules for one repository."""
    return data_dir() / org / repo / "terraform"
