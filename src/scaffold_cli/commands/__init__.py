"""Commands layer - CLI facade over workflows."""

from scaffold_cli.commands.destroy import destroy
from scaffold_cli.commands.init import init
from scaffold_cli.commands.status import status
from scaffold_cli.commands.uninstall import uninstall

__all__ = [
    "init",
    "destroy",
    "uninstall",
    "status",
]
