"""Repository identity detection from the git 'origin' remote."""

import logging
import re
import subprocess
from pathlib import Path

from scaffold_cli.lib.errors import NotAGitRepoError, UnparsableRemoteError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.models import RepositoryIdentity

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 30

# Last two path segments, optional .git suffix. Matches both
# https://github.com/org/repo.git and git@github.com:org/repo.git
_REMOTE_PATTERN = re.compile(r"[:/](?P<org>[^/:]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def parse_remote_url(url: str) -> Result[RepositoryIdentity, UnparsableRemoteError]:
    """Extract org and repo from an HTTPS or SSH remote URL."""
    match = _REMOTE_PATTERN.search(url.strip())
    if not match or not match.group("org") or not match.group("repo"):
        return Err(UnparsableRemoteError(url))
    return Ok(RepositoryIdentity(org=match.group("org"), repo=match.group("repo")))


def get_origin_url(root: Path) -> Result[str, NotAGitRepoError]:
    """Run 'git remote get-url origin' in root."""
    try:
        proc = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except FileNotFoundError:
        return Err(NotAGitRepoError(root, "git executable not found"))
    except subprocess.TimeoutExpired:
        return Err(NotAGitRepoError(root, f"git did not respond within {GIT_TIMEOUT}s"))

    if proc.returncode != 0:
        logger.debug("git remote get-url origin failed: %s", proc.stderr.strip())
        return Err(NotAGitRepoError(root, "not a git repository or no 'origin' remote"))

    return Ok(proc.stdout.strip())


def detect_repo(
    root: Path,
) -> Result[RepositoryIdentity, NotAGitRepoError | UnparsableRemoteError]:
    """Resolve the repository identity for the working tree at root."""
    match get_origin_url(root):
        case Err() as e:
            return e
        case Ok(url):
            return parse_remote_url(url)
