"""Local command execution.

The pipeline bootstrapper only needs two local commands, ``git remote -v``
and ``git rev-parse --abbrev-ref HEAD``. Both go through the CommandRunner
protocol so tests can substitute canned output.

Example:
    >>> import io
    >>> from shipyard.git.runner import GitCommandRunner
    >>> buffer = io.StringIO()
    >>> GitCommandRunner(".").run("git", ["remote", "-v"], stdout=buffer)
    >>> print(buffer.getvalue())
    origin  git@github.com:owner/repo.git (fetch)
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, TextIO

import git
from git.exc import GitCommandError, GitCommandNotFound

from shipyard.exceptions import GitOperationError


class CommandRunner(Protocol):
    """Runs a command and optionally captures its standard output."""

    def run(self, name: str, args: Sequence[str], stdout: TextIO | None = None) -> None:
        """Run ``name`` with ``args``.

        Args:
            name: Executable name (e.g., 'git')
            args: Arguments passed to the executable
            stdout: Buffer receiving the command's standard output

        Raises:
            GitOperationError: If the command is missing, cannot be started,
                or exits non-zero
        """
        ...


class GitCommandRunner:
    """CommandRunner backed by GitPython's command wrapper.

    Attributes:
        working_dir: Directory the commands run in.
    """

    def __init__(self, working_dir: str | Path = ".") -> None:
        self.working_dir = Path(working_dir).resolve()
        self._git = git.Git(str(self.working_dir))

    def run(self, name: str, args: Sequence[str], stdout: TextIO | None = None) -> None:
        command = [name, *args]
        try:
            output = self._git.execute(command)
        except GitCommandNotFound as e:
            raise GitOperationError(f"command {name} not found") from e
        except GitCommandError as e:
            stderr = (e.stderr or "").strip().removeprefix("stderr:").strip().strip("'")
            raise GitOperationError(f"run {' '.join(command)}: exit status {e.status}: {stderr}") from e
        except OSError as e:
            # Popen failures other than a missing executable, e.g. permission denied
            raise GitOperationError(f"run {' '.join(command)}: {e}") from e

        if stdout is not None:
            stdout.write(str(output))
