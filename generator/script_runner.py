"""Script-runner collaborator executing the project's post-generation script."""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from contracts import ScriptExecutionError


logger = logging.getLogger(__name__)


class ScriptRunner(ABC):
    """Abstract base class for runners of the custom generation script."""

    @abstractmethod
    def run(self, script_path: Path, cwd: Optional[Path] = None) -> str:
        """Run the script at `script_path`.

        Args:
            script_path: Absolute path of the script
            cwd: Working directory, usually the workspace root

        Returns:
            Combined standard output and error of the script

        Raises:
            ScriptExecutionError: the script cannot be read or fails
        """
        pass


class ShellScriptRunner(ScriptRunner):
    """Reads the script and executes its content with a shell."""

    def __init__(self, shell: str = "/bin/sh", timeout_seconds: float = 300.0):
        self.shell = shell
        self.timeout_seconds = timeout_seconds

    def run(self, script_path: Path, cwd: Optional[Path] = None) -> str:
        try:
            content = script_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ScriptExecutionError(str(script_path), f"unable to read file ({e})") from e

        logger.info("Running script %s", script_path)
        try:
            completed = subprocess.run(
                [self.shell, "-c", content],
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ScriptExecutionError(str(script_path), str(e)) from e

        output = completed.stdout or ""
        for line in output.splitlines():
            logger.debug("[script] %s", line)
        if completed.returncode != 0:
            raise ScriptExecutionError(
                str(script_path),
                f"exited with status {completed.returncode}",
                output=output,
            )
        return output
