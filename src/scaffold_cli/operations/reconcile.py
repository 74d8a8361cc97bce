"""Create-or-import reconciliation against Terraform.

1. The caller checks existence directly against AWS.
2. Existing resources are imported into local Terraform state. Import
   failures are expected (already in state) and are not fatal.
3. Apply always runs, targeted at the resource's objects, so configuration
   converges even on a pre-existing resource.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from scaffold_cli.lib.errors import TerraformApplyError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import Terraform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManagedResource:
    """A cloud resource and the Terraform objects that configure it."""

    name: str
    address: str
    targets: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    name: str
    existed: bool
    imported: bool


def reconcile(
    tf: Terraform,
    resource: ManagedResource,
    exists: bool,
    variables: Mapping[str, object],
) -> Result[ReconcileOutcome, TerraformApplyError]:
    """Import resource if it exists, then apply its targets."""
    imported = False
    if exists:
        result = tf.import_resource(resource.address, resource.name, variables)
        imported = result.ok
        if not imported:
            logger.debug("Import of %s skipped: %s", resource.address, result.output)

    result = tf.apply(variables, resource.targets)
    if not result.ok:
        return Err(TerraformApplyError(resource.name, result.output))

    return Ok(ReconcileOutcome(name=resource.name, existed=exists, imported=imported))
