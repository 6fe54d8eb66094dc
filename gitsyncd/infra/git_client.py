"""
Git command runner for gitsyncd.

Every git invocation goes through GitRunner, which pins the command to the
repository path with ``-C <path>``. This keeps the sync logic free of
subprocess details and makes it easy to swap in a fake runner for testing.
"""

import shlex
import subprocess
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """
    A git invocation failed to launch or exited non-zero.

    Carries the underlying cause, the command line as executed and the
    combined output captured up to the failure.
    """

    def __init__(
        self,
        cause: str,
        command: str,
        output: bytes = b"",
        returncode: Optional[int] = None
    ):
        self.cause = cause
        self.command = command
        self.output = output or b""
        self.returncode = returncode
        super().__init__(str(self))

    @property
    def output_text(self) -> str:
        return self.output.decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return (
            f"{self.cause} \nwhile running command [{self.command}] "
            f"\noutput was [{self.output_text}]"
        )


class GitRunner:
    """
    Runs git against a fixed working copy.

    Example:
        runner = GitRunner("/srv/site")
        out = runner.run("rev-parse", "HEAD")
    """

    def __init__(self, path: str, executable: str = "git"):
        """
        Initialize GitRunner.

        Args:
            path: Repository path every command operates on
            executable: git binary to invoke (default: "git")
        """
        self.path = str(path)
        self.executable = executable

    def argv(self, *args: str) -> List[str]:
        """Arguments passed to the executable, with the directory flag first."""
        return ["-C", self.path, *args]

    def command_line(self, *args: str) -> str:
        return shlex.join([self.executable, *self.argv(*args)])

    def run(self, *args: str) -> bytes:
        """
        Run a git command and return its combined stdout/stderr.

        Args:
            *args: git arguments, e.g. ("fetch", "origin", "master")

        Returns:
            Raw combined output

        Raises:
            GitCommandError: If git could not be launched or exited non-zero
        """
        cmd = [self.executable, *self.argv(*args)]
        cmd_str = shlex.join(cmd)
        logger.debug(f"running command: {cmd_str}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False
            )
        except OSError as e:
            raise GitCommandError(str(e), cmd_str) from e

        output = result.stdout or b""
        if result.returncode != 0:
            raise GitCommandError(
                f"exit status {result.returncode}",
                cmd_str,
                output=output,
                returncode=result.returncode
            )
        return output
