"""Lowerer — typed AST → linear IR lowering."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .ast_nodes import (
    Assign,
    BinaryOp,
    Compare,
    Conditional,
    Expr,
    IntLiteral,
    Loop,
    Read,
    Sequence,
    VarRef,
    Width,
)
from .errors import (
    EmptySequenceError,
    LiteralOutOfRangeError,
    UnsupportedNodeError,
)
from .ir import IRInstruction, Opcode
from . import constants

logger = logging.getLogger(__name__)


class Lowerer:
    """Lowers one compilation unit into a flat instruction list.

    Temporary and label counters live on the instance, so names are unique
    within one program and never shared between compilations.
    """

    def __init__(self):
        self._reg_counter: int = 0
        self._label_counter: int = 0
        self.instructions: list[IRInstruction] = []
        self.result: str = ""
        self._EXPR_DISPATCH: dict[type, Callable[[Any], str]] = {
            IntLiteral: self._lower_const_literal,
            VarRef: self._lower_identifier,
            Read: self._lower_read,
            Assign: self._lower_assignment,
            BinaryOp: self._lower_binop,
            Compare: self._lower_comparison,
            Sequence: self._lower_sequence,
            Conditional: self._lower_if,
            Loop: self._lower_while,
        }

    # ── helpers ──────────────────────────────────────────────────

    def _fresh_reg(self) -> str:
        r = f"{constants.TEMP_PREFIX}{self._reg_counter}"
        self._reg_counter += 1
        return r

    def _fresh_label(self, prefix: str) -> str:
        lbl = f"{prefix}_{self._label_counter}"
        self._label_counter += 1
        return lbl

    def _emit(
        self,
        opcode: Opcode,
        *,
        dest: str = "",
        operands: list[Any] = [],
        label: str = "",
        width: Width | None = None,
    ) -> IRInstruction:
        inst = IRInstruction(
            opcode=opcode,
            dest=dest or None,
            operands=operands or [],
            label=label or None,
            width=width,
        )
        self.instructions.append(inst)
        return inst

    # ── entry points ─────────────────────────────────────────────

    def lower_program(self, expr: Expr) -> list[IRInstruction]:
        """Lower a whole program, starting from fresh counters."""
        self._reg_counter = 0
        self._label_counter = 0
        self.instructions = []
        self.result = self.lower(expr)
        logger.info(
            "Lowered program: %d instructions, result in %s",
            len(self.instructions),
            self.result,
        )
        return self.instructions

    def lower(self, expr: Expr) -> str:
        """Lower an expression, return the name holding its value."""
        handler = self._EXPR_DISPATCH.get(type(expr))
        if handler is None:
            raise UnsupportedNodeError(expr)
        return handler(expr)

    # ── expression lowerers ──────────────────────────────────────

    def _lower_const_literal(self, node: IntLiteral) -> str:
        if not constants.INT64_MIN <= node.value <= constants.INT64_MAX:
            raise LiteralOutOfRangeError(node.value)
        reg = self._fresh_reg()
        self._emit(
            Opcode.LOAD_CONST, dest=reg, operands=[node.value], width=node.width
        )
        return reg

    def _lower_identifier(self, node: VarRef) -> str:
        # Reads always go through a fresh temp, never an alias.
        reg = self._fresh_reg()
        self._emit(Opcode.MOVE, dest=reg, operands=[node.name], width=node.width)
        return reg

    def _lower_read(self, node: Read) -> str:
        self._emit(Opcode.READ, dest=node.name, width=node.width)
        return node.name

    def _lower_assignment(self, node: Assign) -> str:
        src = self.lower(node.value)
        self._emit(Opcode.MOVE, dest=node.name, operands=[src], width=node.width)
        return node.name

    def _lower_binop(self, node: BinaryOp) -> str:
        lhs_reg = self.lower(node.left)
        rhs_reg = self.lower(node.right)
        reg = self._fresh_reg()
        self._emit(
            Opcode.BINOP,
            dest=reg,
            operands=[node.kind, lhs_reg, rhs_reg],
            width=node.left.width,
        )
        return reg

    def _lower_comparison(self, node: Compare) -> str:
        lhs_reg = self.lower(node.left)
        rhs_reg = self.lower(node.right)
        reg = self._fresh_reg()
        self._emit(Opcode.CMP, dest=reg, operands=[node.kind, lhs_reg, rhs_reg])
        return reg

    def _lower_sequence(self, node: Sequence) -> str:
        if not node.items:
            raise EmptySequenceError()
        results = [self.lower(item) for item in node.items]
        return results[-1]

    def _lower_block(self, node: Sequence | None):
        """Lower a branch or loop body in place, discarding its value."""
        if node is None:
            return
        for item in node.items:
            self.lower(item)

    # ── control flow ─────────────────────────────────────────────

    def _lower_if(self, node: Conditional) -> str:
        cond_reg = self.lower(node.cond)
        then_label = self._fresh_label(constants.LABEL_THEN)
        else_label = self._fresh_label(constants.LABEL_ELSE)
        end_label = self._fresh_label(constants.LABEL_IF_END)

        self._emit(
            Opcode.BR_IF,
            operands=[cond_reg],
            label=f"{then_label}{constants.BRANCH_TARGET_SEPARATOR}{else_label}",
        )

        # The else block is laid out before the then block.
        self._emit(Opcode.LABEL, label=else_label)
        self._lower_block(node.else_body)
        self._emit(Opcode.JMP, label=end_label)

        self._emit(Opcode.LABEL, label=then_label)
        self._lower_block(node.then_body)
        self._emit(Opcode.JMP, label=end_label)

        self._emit(Opcode.LABEL, label=end_label)
        return cond_reg

    def _lower_while(self, node: Loop) -> str:
        loop_label = self._fresh_label(constants.LABEL_WHILE_HEAD)
        body_label = self._fresh_label(constants.LABEL_WHILE_BODY)
        end_label = self._fresh_label(constants.LABEL_WHILE_END)

        self._emit(Opcode.LABEL, label=loop_label)
        cond_reg = self.lower(node.cond)
        self._emit(
            Opcode.BR_IF,
            operands=[cond_reg],
            label=f"{body_label}{constants.BRANCH_TARGET_SEPARATOR}{end_label}",
        )

        self._emit(Opcode.LABEL, label=body_label)
        self._lower_block(node.body)
        self._emit(Opcode.JMP, label=loop_label)

        self._emit(Opcode.LABEL, label=end_label)
        return cond_reg
