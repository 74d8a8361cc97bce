"""Workflows layer - orchestrate operations into user intents."""

from scaffold_cli.workflows.destroy import destroy, select_environments
from scaffold_cli.workflows.init import init
from scaffold_cli.workflows.status import get_status
from scaffold_cli.workflows.uninstall import confirm_uninstall, uninstall

__all__ = [
    "init",
    "select_environments",
    "destroy",
    "confirm_uninstall",
    "uninstall",
    "get_status",
]
