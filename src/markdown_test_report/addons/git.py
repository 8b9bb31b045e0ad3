"""
Git repository information addon.
"""

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from typing import TextIO, Union

from ..exceptions import AddonError
from .base import Addon

logger = logging.getLogger(__name__)

UNKNOWN = "<unknown>"

# hash, author, committer date and raw body, one per line
_LOG_FORMAT = "%H%n%an <%ae>%n%cI%n%B"


@dataclass
class CommitInfo:
    """The latest commit of the checked out reference."""

    sha: str
    author: str
    date: datetime
    message: str


class GitInfo(Addon):
    """Render the remote URL, reference and latest commit of a repository."""

    name = "git"

    def __init__(self, path: Union[str, Path] = ".", required: bool = False):
        self.path = Path(path)
        self.required = required

    def __repr__(self) -> str:
        return f"GitInfo(path={str(self.path)!r}, required={self.required})"

    def _git(self, *args: str) -> str:
        command = ["git", "-C", str(self.path), *args]
        logger.debug("Running: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise AddonError(self.name, e)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise AddonError(self.name, RuntimeError(stderr or str(e)))
        return completed.stdout

    def remote_url(self) -> str:
        return self._git("remote", "get-url", "origin").strip() or UNKNOWN

    def head_ref(self) -> str:
        return self._git("rev-parse", "--symbolic-full-name", "HEAD").strip() or UNKNOWN

    def latest_commit(self) -> CommitInfo:
        output = self._git("log", "-1", f"--format={_LOG_FORMAT}", "HEAD")
        lines = output.split("\n", 3)
        if len(lines) < 3:
            raise AddonError(self.name, ValueError(f"Unexpected git log output: {output!r}"))
        try:
            date = datetime.fromisoformat(lines[2].strip())
        except ValueError as e:
            raise AddonError(self.name, e)
        message = lines[3] if len(lines) > 3 else ""
        return CommitInfo(
            sha=lines[0].strip(),
            author=lines[1].strip(),
            date=date,
            message=message.rstrip("\n"),
        )

    def render(self, write: TextIO) -> None:
        remote = self.remote_url()
        ref = self.head_ref()
        commit = self.latest_commit()

        write.write(f"**Git:** `{remote}` @ `{ref}`\n")
        write.write("\n")
        write.write(f"    Commit: {commit.sha}\n")
        write.write(f"    Author: {commit.author}\n")
        write.write(f"    Date: {format_datetime(commit.date)}\n")
        write.write("\n")
        for line in commit.message.splitlines():
            write.write(f"        {line}\n")
