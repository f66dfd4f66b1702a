"""IR Design — linear three-address code with explicit labels and branches."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .ast_nodes import Width
from . import constants


class Opcode(str, Enum):
    # Value producers
    LOAD_CONST = "LOAD_CONST"
    MOVE = "MOVE"
    BINOP = "BINOP"
    CMP = "CMP"
    READ = "READ"
    # Control flow
    BR_IF = "BR_IF"
    JMP = "JMP"
    # Labels (pseudo-instruction)
    LABEL = "LABEL"


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class IRInstruction(BaseModel):
    """One IR instruction.

    Operand layout by opcode:

        LOAD_CONST  dest, operands=[value], width
        MOVE        dest, operands=[src], width
        BINOP       dest, operands=[BinaryOpKind, left, right], width
        CMP         dest, operands=[CompareKind, left, right]
        READ        dest, width
        LABEL       label
        BR_IF       operands=[cond], label="then,else"
        JMP         label
    """

    model_config = ConfigDict(frozen=True)

    opcode: Opcode
    dest: str | None = None
    operands: list[Any] = []
    label: str | None = None  # for LABEL / branch targets
    width: Width | None = None

    @property
    def branch_targets(self) -> list[str]:
        if self.opcode == Opcode.BR_IF and self.label:
            return [
                t.strip() for t in self.label.split(constants.BRANCH_TARGET_SEPARATOR)
            ]
        if self.opcode == Opcode.JMP and self.label:
            return [self.label]
        return []

    @property
    def writes(self) -> str | None:
        """Name written by this instruction, if any."""
        return self.dest

    def __str__(self) -> str:
        op = self.opcode
        if op == Opcode.LOAD_CONST:
            return f"{self.dest} = const {self.operands[0]}"
        if op == Opcode.MOVE:
            return f"{self.dest} = {self.operands[0]}"
        if op == Opcode.BINOP:
            kind, lhs, rhs = self.operands
            return f"{self.dest} = {_text(kind)} {lhs}, {rhs} ({_text(self.width)})"
        if op == Opcode.CMP:
            kind, lhs, rhs = self.operands
            return f"{self.dest} = cmp{_text(kind)} {lhs}, {rhs}"
        if op == Opcode.READ:
            return f"{self.dest} = read ({_text(self.width)})"
        if op == Opcode.LABEL:
            return f"{self.label}:"
        if op == Opcode.BR_IF:
            then_label, else_label = self.branch_targets
            return f"br_if {self.operands[0]}, {then_label}, {else_label}"
        return f"jmp {self.label}"


def format_program(instructions: list[IRInstruction]) -> str:
    """Render a program as text, one newline-terminated line per instruction."""
    return "".join(f"{inst}\n" for inst in instructions)
