"""State store - load/save .scaffold/config.json.

The file is rewritten whole on every mutation, atomically (temp file +
rename). There is no inter-process locking: concurrent invocations against
the same working copy are not supported.
"""

import json
import logging
from pathlib import Path

from scaffold_cli.lib import paths
from scaffold_cli.lib.errors import NotInitializedError, StateLoadError, StateSaveError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.storage import file
from scaffold_cli.models import StateDocument

logger = logging.getLogger(__name__)


def exists(root: Path) -> bool:
    return paths.config_path(root).is_file()


def load(root: Path) -> Result[StateDocument | None, StateLoadError]:
    """Load the state store.

    Returns Ok(None) if the repository has not been initialized.
    Returns Err if the file exists but cannot be read or parsed.
    """
    path = paths.config_path(root)
    try:
        data = file.read(path)
    except OSError as e:
        return Err(StateLoadError(path, str(e)))

    if data is None:
        return Ok(None)

    try:
        return Ok(StateDocument.from_json(data))
    except (json.JSONDecodeError, TypeError, ValueError, KeyError) as e:
        return Err(StateLoadError(path, f"Invalid state document: {e}"))


def require(root: Path) -> Result[StateDocument, NotInitializedError | StateLoadError]:
    """Load the state store, treating absence as an error."""
    match load(root):
        case Err() as e:
            return e
        case Ok(None):
            return Err(NotInitializedError(paths.config_path(root)))
        case Ok(document):
            return Ok(document)


def save(root: Path, document: StateDocument) -> Result[None, StateSaveError]:
    """Write the state store atomically."""
    path = paths.config_path(root)
    try:
        file.write_atomic(path, document.to_json())
    except OSError as e:
        return Err(StateSaveError(path, str(e)))
    logger.debug("Saved state to %s (%d environments)", path, len(document.environments))
    return Ok(None)


def delete(root: Path) -> bool:
    """Remove the whole .scaffold/ directory. Returns True if it existed."""
    return file.delete_tree(paths.scaffold_dir(root))
