"""Shared AST programs and helpers for the unit suite."""

from energy_ir.ast_nodes import (
    Assign,
    BinaryOp,
    BinaryOpKind,
    Compare,
    CompareKind,
    IntLiteral,
    Loop,
    VarRef,
    Width,
    seq,
)
from energy_ir.ir import IRInstruction, Opcode


def make_instructions(*specs) -> list[IRInstruction]:
    """Build an IRInstruction list from (opcode, kwargs) tuples."""
    return [IRInstruction(opcode=op, **kw) for op, kw in specs]


def find_all(instructions: list[IRInstruction], opcode: Opcode) -> list[IRInstruction]:
    """Return all instructions matching *opcode*."""
    return [inst for inst in instructions if inst.opcode == opcode]


def three_plus_four_times_two():
    """(3 + 4) * 2"""
    return BinaryOp(
        BinaryOpKind.MUL,
        BinaryOp(BinaryOpKind.ADD, IntLiteral(3), IntLiteral(4)),
        IntLiteral(2),
    )


def countdown(start: int, width: Width = Width.I64):
    """x = start; while (x > 0) { x = x - 1 }"""
    return seq(
        Assign("x", IntLiteral(start, width), width),
        Loop(
            Compare(CompareKind.GT, VarRef("x", width), IntLiteral(0, width)),
            seq(
                Assign(
                    "x",
                    BinaryOp(
                        BinaryOpKind.SUB, VarRef("x", width), IntLiteral(1, width)
                    ),
                    width,
                )
            ),
        ),
    )
