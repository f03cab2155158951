from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from bfjava.transpiler import JavaTranspiler, Translation
from bfjava.wrapper import DEFAULT_OUTPUT


@dataclass
class BuildRecord:
    build_id: str
    output_name: str
    translation: Translation


class BuildStore:
    """Thread-safe registry of translated programs."""

    def __init__(self) -> None:
        self._builds: Dict[str, BuildRecord] = {}
        self._lock = threading.RLock()

    def create_build(
        self,
        *,
        code: str,
        output_name: str = DEFAULT_OUTPUT,
        class_name: Optional[str] = None,
    ) -> BuildRecord:
        translation = JavaTranspiler().translate_source(code, output_name, class_name)
        record = BuildRecord(
            build_id=uuid.uuid4().hex,
            output_name=output_name,
            translation=translation,
        )
        with self._lock:
            self._builds[record.build_id] = record
        return record

    def get(self, build_id: str) -> BuildRecord:
        with self._lock:
            try:
                return self._builds[build_id]
            except KeyError as exc:
                raise KeyError(f"Unknown build id: {build_id}") from exc

    def remove(self, build_id: str) -> bool:
        with self._lock:
            return self._builds.pop(build_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._builds.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._builds)


__all__ = ["BuildRecord", "BuildStore"]
