from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from .errors import MissingSource

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def read_source(path: PathLike) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise MissingSource(str(path))
    # Only ASCII operators matter, so undecodable bytes are just comments.
    text = source_path.read_text(encoding="utf-8", errors="replace")
    log.debug("read %d characters from %s", len(text), source_path)
    return text


def _target_mode(path: Path) -> int:
    """Permissions the output should end up with after the replace."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        # mkstemp files are 0600; match what a plain open() would create
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_java_source(path: PathLike, text: str) -> Path:
    """Create or replace ``path`` with ``text`` plus a trailing newline.

    The content goes to a temporary file next to the target which then
    replaces it, so a failed write leaves any previous file untouched.
    """
    output_path = Path(path)
    directory = output_path.parent
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=str(directory)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
            handle.write("\n")
        os.chmod(tmp_name, _target_mode(output_path))
        os.replace(tmp_name, output_path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    log.debug("wrote %d characters to %s", len(text) + 1, output_path)
    return output_path


__all__ = ["read_source", "write_java_source"]
