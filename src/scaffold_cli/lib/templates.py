"""Bundled templates: GitHub Actions workflow and Terraform modules."""

import re
import shutil
from collections.abc import Mapping
from importlib import resources
from pathlib import Path

WORKFLOW_TEMPLATE = "workflow.yaml"
PROVIDERS_TEMPLATE = "providers.tf.tmpl"
BACKEND_MODULE = "backend"
IAM_MODULE = "iam"

_PLACEHOLDER = re.compile(r"\{\{([A-Z0-9_]+)\}\}")


def get_data_path() -> Path:
    """Path to the package data directory.

    Works whether installed as a package or run from source.
    """
    with resources.as_file(resources.files("scaffold_cli") / "data") as data_path:
        return Path(data_path)


def get_template_path(template_name: str) -> Path:
    return get_data_path() / template_name


def get_module_path(module_name: str) -> Path:
    """Path to a bundled Terraform module (read-only)."""
    return get_data_path() / "terraform" / module_name


def load_template(name: str) -> str:
    return get_template_path(name).read_text()


def render(template: str, values: Mapping[str, str]) -> str:
    """Replace {{NAME}} placeholders. Unknown placeholders raise KeyError."""
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def prepare_module(module_name: str, dest: Path) -> Path:
    """Copy a bundled module's .tf files into dest.

    Terraform writes .terraform/ and local state next to the configuration,
    so it must never run inside the installed package. Existing state in
    dest is left untouched; only the configuration files are refreshed.
    """
    dest.mkdir(parents=True, exist_ok=True)
    for source in get_module_path(module_name).glob("*.tf"):
        shutil.copyfile(source, dest / source.name)
    return dest
