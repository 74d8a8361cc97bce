"""State lock inspection.

Terraform's S3 backend keeps one DynamoDB item per locked state, keyed by
'<bucket>/<state key>-md5'. A crashed pipeline can leave that item behind,
and every later plan or destroy then blocks on it.
"""

from enum import Enum

from scaffold_cli.lib import console
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import LockCheckError, LockNotResolvedError
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.storage.dynamodb import delete_lock, get_lock
from scaffold_cli.models import StateDocument

type LockError = LockCheckError | LockNotResolvedError


class LockStatus(Enum):
    CLEAR = "clear"
    REMOVED = "removed"


def lock_id(bucket: str, state_key: str) -> str:
    return f"{bucket}/{state_key}-md5"


def check_and_remove_locks(
    ctx: AwsContext,
    document: StateDocument,
    state_key: str,
    prompter: Prompter,
) -> Result[LockStatus, LockError]:
    """Look for a lock on state_key and offer to delete it.

    Declining leaves the lock in place and returns LockNotResolvedError;
    the caller must abort.
    """
    lid = lock_id(document.s3_bucket, state_key)
    table = document.dynamodb_table

    console.info("Checking for state locks...")
    match get_lock(ctx.dynamodb, table, lid):
        case Err(e):
            return Err(LockCheckError(table, e.reason))
        case Ok(None):
            console.ok("No locks found")
            return Ok(LockStatus.CLEAR)
        case Ok(_):
            pass

    console.line()
    console.warn("Found 1 active state lock(s)")
    console.line(f"Lock ID: {lid}")
    console.line()
    console.line("This lock may be stale if:")
    console.line("  - GitHub Actions workflow completed")
    console.line("  - Pipeline crashed mid-apply")
    console.line("  - No terraform operations running")
    console.line()

    if not prompter.confirm("Remove this lock?", default=False):
        return Err(LockNotResolvedError(lid))

    console.info("Removing stale lock...")
    match delete_lock(ctx.dynamodb, table, lid):
        case Err(e):
            return Err(LockCheckError(table, e.reason))
        case Ok(_):
            console.ok("Lock removed. Continuing with destroy...")
            return Ok(LockStatus.REMOVED)
