from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from .errors import UsageError

TAPE_SIZE = 30000
DEFAULT_OUTPUT = "bf.java"


def class_name_from(output_name: str) -> str:
    """Return the stem of ``output_name``: its file name up to the first ``.``.

    The result is used verbatim as the Java class name; it is not checked
    against Java identifier rules, so a bad name only surfaces when javac runs.
    """
    file_name = PurePath(output_name).name
    stem = file_name.split(".", 1)[0]
    if not stem:
        raise UsageError(f"Cannot derive a class name from output file '{output_name}'")
    return stem


@dataclass(frozen=True)
class JavaWrapper:
    class_name: str
    tape_size: int = TAPE_SIZE

    @classmethod
    def for_output(cls, output_name: str, class_name: Optional[str] = None) -> "JavaWrapper":
        if class_name is None:
            class_name = class_name_from(output_name)
        elif not class_name.strip():
            raise UsageError("Class name must not be blank")
        return cls(class_name=class_name)

    def prologue(self) -> str:
        return (
            "import java.util.Scanner;\n"
            f"public class {self.class_name} {{\n"
            "public static void main(String[] args) {\n"
            f"byte[] mem = new byte[{self.tape_size}];\n"
            "Scanner iostream = new Scanner(System.in);\n"
            "int ptr = 0;\n"
        )

    def epilogue(self) -> str:
        return (
            "iostream.close();\n"
            "}\n"  # main
            "}\n"  # class
        )

    def wrap(self, body: str) -> str:
        return self.prologue() + body + self.epilogue()


__all__ = ["DEFAULT_OUTPUT", "JavaWrapper", "TAPE_SIZE", "class_name_from"]
