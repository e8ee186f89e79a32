"""Running build commands through the shell."""

from __future__ import annotations

import subprocess

from .errors import NoActiveBuildError
from .log import logger
from .models import BuildState
from .platform import default_shell


class ShellBuildAction:
    """Run the current build command in its directory and return the exit code.

    A missing directory or shell raises ``OSError`` to the caller.
    """

    def __init__(self, shell: str | None = None) -> None:
        self.shell = shell or default_shell()
        self.last_status: int | None = None

    def run(self, state: BuildState) -> int:
        if state.key() is None:
            raise NoActiveBuildError("No build command set")
        logger.info("running %r in %s", state.command, state.directory)
        result = subprocess.run(
            state.command,
            shell=True,
            cwd=state.directory,
            executable=self.shell,
            check=False,
        )
        self.last_status = result.returncode
        if result.returncode:
            logger.info("build exited with status %d", result.returncode)
        return result.returncode
