from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .transpiler import Operator, normalize, translate
from .wrapper import TAPE_SIZE

_BYTE_TOKEN = re.compile(r"[+-]?[0-9]+")


class StepLimitExceeded(RuntimeError):
    """Raised when execution exceeds the configured step budget."""


class RuntimeFault(RuntimeError):
    """A failure the emitted Java program would raise as an exception."""


class TapeIndexError(RuntimeFault, IndexError):
    pass


class InputExhausted(RuntimeFault):
    pass


class InputMismatch(RuntimeFault, ValueError):
    pass


def _wrap_byte(value: int) -> int:
    return (value + 128) % 256 - 128


@dataclass
class ByteScanner:
    """Whitespace-separated integer tokens read the way ``Scanner.nextByte`` does."""

    text: str = ""
    _tokens: Iterator[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._tokens = iter(self.text.split())

    def next_byte(self) -> int:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise InputExhausted("No input token available for ','") from None
        if not _BYTE_TOKEN.fullmatch(token):
            raise InputMismatch(f"Input token '{token}' is not an integer")
        value = int(token)
        if not -128 <= value <= 127:
            raise InputMismatch(f"Input value {value} is outside the byte range -128..127")
        return value


@dataclass
class BrainfuckInterpreter:
    """Runs a program with the observable behavior of its translated Java class.

    Cells are signed bytes, ``.`` prints the decimal value with no separator
    and ``,`` reads one integer token.
    """

    tape_length: int = TAPE_SIZE

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    output_buffer: List[str] = field(init=False, repr=False)
    steps: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.tape = [0] * self.tape_length
        self.pointer = 0
        self.output_buffer = []
        self.steps = 0

    def run(
        self,
        code: str,
        input_text: str = "",
        max_steps: Optional[int] = None,
    ) -> str:
        self.reset()
        program = [Operator(char) for char in normalize(code)]
        translate(program)
        jump_map = self._build_jump_map(program)
        scanner = ByteScanner(input_text)
        pc = 0
        code_length = len(program)

        while pc < code_length:
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceeded("Brainfuck program exceeded allowed step count")
            pc = self._execute_instruction(program[pc], pc, jump_map, scanner)
            self.steps += 1

        return "".join(self.output_buffer)

    def _cell(self) -> int:
        self._check_pointer()
        return self.tape[self.pointer]

    def _set_cell(self, value: int) -> None:
        self._check_pointer()
        self.tape[self.pointer] = _wrap_byte(value)

    def _check_pointer(self) -> None:
        if not 0 <= self.pointer < self.tape_length:
            raise TapeIndexError(
                f"Index {self.pointer} out of bounds for length {self.tape_length}"
            )

    def _execute_instruction(
        self,
        op: Operator,
        pc: int,
        jump_map: Dict[int, int],
        scanner: ByteScanner,
    ) -> int:
        new_pc = pc + 1
        if op is Operator.PTR_INC:
            self.pointer += 1
        elif op is Operator.PTR_DEC:
            self.pointer -= 1
        elif op is Operator.CELL_INC:
            self._set_cell(self._cell() + 1)
        elif op is Operator.CELL_DEC:
            self._set_cell(self._cell() - 1)
        elif op is Operator.OUTPUT:
            self.output_buffer.append(str(self._cell()))
        elif op is Operator.INPUT:
            self._set_cell(scanner.next_byte())
        elif op is Operator.LOOP_OPEN:
            if self._cell() == 0:
                new_pc = jump_map[pc] + 1
        elif op is Operator.LOOP_CLOSE:
            # the while loop re-tests its condition at the top
            new_pc = jump_map[pc]
        return new_pc

    def _build_jump_map(self, program: List[Operator]) -> Dict[int, int]:
        jump_map: Dict[int, int] = {}
        stack: List[int] = []
        for index, op in enumerate(program):
            if op is Operator.LOOP_OPEN:
                stack.append(index)
            elif op is Operator.LOOP_CLOSE:
                start = stack.pop()
                jump_map[start] = index
                jump_map[index] = start
        return jump_map


__all__ = [
    "BrainfuckInterpreter",
    "ByteScanner",
    "InputExhausted",
    "InputMismatch",
    "RuntimeFault",
    "StepLimitExceeded",
    "TapeIndexError",
]
