from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .errors import UnmatchedBrackets
from .wrapper import DEFAULT_OUTPUT, JavaWrapper

log = logging.getLogger(__name__)


class Operator(str, Enum):
    PTR_INC = ">"
    PTR_DEC = "<"
    CELL_INC = "+"
    CELL_DEC = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"

    @property
    def fragment(self) -> str:
        return TRANSLATIONS[self]


TRANSLATIONS: Dict[Operator, str] = {
    Operator.PTR_INC: "ptr++;\n",
    Operator.PTR_DEC: "ptr--;\n",
    Operator.CELL_INC: "mem[ptr]++;\n",
    Operator.CELL_DEC: "mem[ptr]--;\n",
    Operator.OUTPUT: "System.out.print(mem[ptr]);\n",
    Operator.INPUT: "mem[ptr] = iostream.nextByte();\n",
    Operator.LOOP_OPEN: "while(mem[ptr] != 0) {\n",
    Operator.LOOP_CLOSE: "}\n",
}

OPERATOR_CHARS = frozenset(op.value for op in Operator)

_NON_OPERATOR = re.compile(r"[^><+\-.,\[\]]")

Program = Union[str, Iterable[Operator]]


# === Normalizer ===


def normalize(source: str) -> str:
    """Drop every character that is not one of the eight operators."""
    return _NON_OPERATOR.sub("", source)


def parse_program(source: str) -> List[Operator]:
    return [Operator(char) for char in normalize(source)]


# === Validator / Translator ===


def translate(program: Program) -> str:
    """Validate bracket balance and lower each operator to a line of Java.

    ``program`` must already be normalized. Validation and emission happen in
    the same pass; a ``]`` that closes more loops than are open stops the pass
    immediately.
    """
    lines: List[str] = []
    depth = 0
    for position, token in enumerate(program):
        op = Operator(token)
        lines.append(TRANSLATIONS[op])
        if op is Operator.LOOP_OPEN:
            depth += 1
        elif op is Operator.LOOP_CLOSE:
            depth -= 1
            if depth < 0:
                raise UnmatchedBrackets(depth=depth, position=position)
    if depth != 0:
        raise UnmatchedBrackets(depth=depth)
    return "".join(lines)


def is_balanced(program: Program) -> bool:
    try:
        translate(program)
    except UnmatchedBrackets:
        return False
    return True


# === Facade ===


@dataclass
class Translation:
    class_name: str
    normalized: str
    body: str
    source: str

    @property
    def line_count(self) -> int:
        return self.body.count("\n")


class JavaTranspiler:
    def __init__(self, wrapper: Optional[JavaWrapper] = None) -> None:
        self.wrapper = wrapper

    def translate_source(
        self,
        source: str,
        output_name: str = DEFAULT_OUTPUT,
        class_name: Optional[str] = None,
    ) -> Translation:
        wrapper = self.wrapper or JavaWrapper.for_output(output_name, class_name)
        normalized = normalize(source)
        log.debug("normalized %d source characters to %d operators", len(source), len(normalized))
        body = translate(normalized)
        return Translation(
            class_name=wrapper.class_name,
            normalized=normalized,
            body=body,
            source=wrapper.wrap(body),
        )

    def transpile(
        self,
        source: str,
        output_name: str = DEFAULT_OUTPUT,
        class_name: Optional[str] = None,
    ) -> str:
        return self.translate_source(source, output_name, class_name).source


__all__ = [
    "JavaTranspiler",
    "OPERATOR_CHARS",
    "Operator",
    "TRANSLATIONS",
    "Translation",
    "is_balanced",
    "normalize",
    "parse_program",
    "translate",
]
