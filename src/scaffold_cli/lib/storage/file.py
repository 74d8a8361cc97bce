"""Local file storage helpers."""

import os
import shutil
import tempfile
from pathlib import Path


def read(path: Path) -> str | None:
    """Read file contents, or None if doesn't exist."""
    if not path.exists():
        return None
    return path.read_text()


def write(path: Path, data: str) -> None:
    """Write data to file, creating parent dirs if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data)


def write_atomic(path: Path, data: str) -> None:
    """Write via a temp file in the same directory, then rename over path.

    Readers see either the old or the new content, never a partial write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_if_absent(path: Path, data: str) -> bool:
    """Write data only if path does not exist. Returns True if written."""
    if path.exists():
        return False
    write(path, data)
    return True


def delete(path: Path) -> bool:
    """Delete file if it exists. Returns True if something was removed."""
    if path.exists():
        path.unlink()
        return True
    return False


def delete_tree(path: Path) -> bool:
    """Delete a directory tree if it exists. Returns True if something was removed."""
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False
