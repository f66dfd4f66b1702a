"""Static energy cost model over IR programs.

Costs are abstract energy units modelling relative CPU cost, with 64-bit
multiply and divide priced above their 32-bit forms.  The estimate is
computed from the instruction list alone and never simulates execution, so a
loop body counts once however many times it runs.
"""

from __future__ import annotations

from collections import Counter, defaultdict

from .ast_nodes import BinaryOpKind, Width
from .ir import IRInstruction, Opcode

LOAD_CONST_COST = 1
CMP_COST = 1
READ_COST = 50
LABEL_COST = 0
BRANCH_COST = 1

MOVE_COSTS: dict[Width, int] = {
    Width.I32: 4,
    Width.I64: 5,
}

BINOP_COSTS: dict[tuple[BinaryOpKind, Width], int] = {
    (BinaryOpKind.ADD, Width.I32): 1,
    (BinaryOpKind.ADD, Width.I64): 1,
    (BinaryOpKind.SUB, Width.I32): 1,
    (BinaryOpKind.SUB, Width.I64): 1,
    (BinaryOpKind.MUL, Width.I32): 3,
    (BinaryOpKind.MUL, Width.I64): 5,
    (BinaryOpKind.DIV, Width.I32): 20,
    (BinaryOpKind.DIV, Width.I64): 40,
}

# Reference figures for floating point; the IR has no float opcodes.
FLOAT_BINOP_COSTS: dict[tuple[BinaryOpKind, Width], int] = {
    (BinaryOpKind.ADD, Width.I32): 2,
    (BinaryOpKind.ADD, Width.I64): 3,
    (BinaryOpKind.SUB, Width.I32): 2,
    (BinaryOpKind.SUB, Width.I64): 3,
    (BinaryOpKind.MUL, Width.I32): 4,
    (BinaryOpKind.MUL, Width.I64): 6,
    (BinaryOpKind.DIV, Width.I32): 40,
    (BinaryOpKind.DIV, Width.I64): 80,
}

_FIXED_COSTS: dict[Opcode, int] = {
    Opcode.LOAD_CONST: LOAD_CONST_COST,
    Opcode.CMP: CMP_COST,
    Opcode.READ: READ_COST,
    Opcode.LABEL: LABEL_COST,
    Opcode.BR_IF: BRANCH_COST,
    Opcode.JMP: BRANCH_COST,
}


def instruction_cost(inst: IRInstruction) -> int:
    """Return the energy cost of a single instruction.

    Depends only on the opcode, the arithmetic kind and the width; operand
    values are never consulted.
    """
    if inst.opcode == Opcode.MOVE:
        return MOVE_COSTS[inst.width or Width.I64]
    if inst.opcode == Opcode.BINOP:
        kind = BinaryOpKind(inst.operands[0])
        return BINOP_COSTS[(kind, inst.width or Width.I64)]
    return _FIXED_COSTS[inst.opcode]


def estimate_energy(instructions: list[IRInstruction]) -> int:
    """Sum of per-instruction costs over the program, evaluated once."""
    return sum(instruction_cost(inst) for inst in instructions)


def energy_by_opcode(instructions: list[IRInstruction]) -> dict[str, int]:
    """Static energy grouped by opcode name."""
    totals: dict[str, int] = defaultdict(int)
    for inst in instructions:
        totals[inst.opcode.value] += instruction_cost(inst)
    return dict(totals)


def count_opcodes(instructions: list[IRInstruction]) -> dict[str, int]:
    """Return a frequency map of opcode names in the given instruction list."""
    return dict(Counter(inst.opcode.value for inst in instructions))
