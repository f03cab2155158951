from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from .errors import ToolchainError

log = logging.getLogger(__name__)

DEFAULT_COMPILER = "javac"


@dataclass
class CompileResult:
    command: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def compile_java(path: Union[str, Path], compiler: str = DEFAULT_COMPILER) -> CompileResult:
    """Run ``compiler`` on ``path`` and wait for it to finish.

    A compiler that cannot be started raises ToolchainError. A non-zero exit
    status is only reported through the returned result.
    """
    command = [compiler, str(path)]
    log.debug("running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise ToolchainError(f"Could not run '{compiler}': {exc}") from exc

    result = CompileResult(
        command=command,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if result.ok:
        log.debug("%s exited with status 0", compiler)
    else:
        log.warning("%s exited with status %d", compiler, result.returncode)
        if result.stderr:
            log.warning("%s stderr:\n%s", compiler, result.stderr.strip())
    return result


__all__ = ["CompileResult", "DEFAULT_COMPILER", "compile_java"]
