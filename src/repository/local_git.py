"""Read tags from a local git checkout."""
from __future__ import annotations

import logging
import os
import subprocess
from typing import List

from constants import Constants
from versioning.models import Tag

logger = logging.getLogger(__name__)

# refname, object id, peeled object id (set only for annotated tags)
_FORMAT = "%(refname:strip=2)%00%(objectname)%00%(*objectname)"


class GitCommandError(RuntimeError):
    """Raised when the git executable fails or the path is not a repository."""


class LocalGitTags:  # pylint: disable=too-few-public-methods
    """List tags of a local repository with ``git for-each-ref``."""

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def get_tags(self, path: str) -> List[Tag]:
        """Return every tag with the commit it points at.

        Annotated tags report the peeled commit rather than the tag object.

        Raises:
            GitCommandError: if path is not a directory or git fails.
        """
        if not os.path.isdir(path):
            raise GitCommandError(f"Not a directory: {path}")

        try:
            result = subprocess.run(
                [self.git_executable, "-C", path, "for-each-ref", f"--format={_FORMAT}", "refs/tags"],
                capture_output=True,
                text=True,
                timeout=Constants.GIT_COMMAND_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise GitCommandError(f"Unable to run git in {path}: {exc}") from exc

        if result.returncode != 0:
            raise GitCommandError(f"git for-each-ref failed in {path}: {result.stderr.strip()}")

        tags = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            name, _, rest = line.partition("\x00")
            obj, _, peeled = rest.partition("\x00")
            tags.append(Tag(name=name, commit=peeled or obj))
        logger.info("Read %d tags from %s", len(tags), path)
        return tags
