"""Interpreter — program-counter-driven execution of IR programs."""

from __future__ import annotations

import logging
import re
from typing import Callable

from .ast_nodes import BinaryOpKind, CompareKind
from .energy import instruction_cost
from .errors import (
    ConstantOutOfRangeError,
    DivisionByZeroError,
    InputParseError,
    NoInstructionsError,
    NoResultError,
    StepLimitExceededError,
    UndefinedVariableError,
    UnknownLabelError,
)
from .input_source import InputSource, StreamInputSource
from .ir import IRInstruction, Opcode
from .labels import build_label_table
from .run_types import ExecutionStats, VMConfig
from .trace_types import ExecutionTrace, TraceStep
from .vm_types import StateUpdate, VMState
from . import constants

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _wrap_i64(value: int) -> int:
    """Two's-complement wrap into the signed 64-bit range."""
    return (value - constants.INT64_MIN) % 2**64 + constants.INT64_MIN


def _trunc_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(lhs) // abs(rhs)
    return -q if (lhs < 0) != (rhs < 0) else q


def _parse_int64(name: str, line: str) -> int:
    text = line.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise InputParseError(name, line)
    value = int(text)
    if not constants.INT64_MIN <= value <= constants.INT64_MAX:
        raise InputParseError(name, line)
    return value


class Operators:
    """Arithmetic and comparison evaluation on signed 64-bit integers."""

    BINOP_TABLE: dict[BinaryOpKind, Callable[[int, int], int]] = {
        BinaryOpKind.ADD: lambda a, b: a + b,
        BinaryOpKind.SUB: lambda a, b: a - b,
        BinaryOpKind.MUL: lambda a, b: a * b,
        BinaryOpKind.DIV: _trunc_div,
    }

    CMP_TABLE: dict[CompareKind, Callable[[int, int], bool]] = {
        CompareKind.EQ: lambda a, b: a == b,
        CompareKind.NE: lambda a, b: a != b,
        CompareKind.LT: lambda a, b: a < b,
        CompareKind.LE: lambda a, b: a <= b,
        CompareKind.GT: lambda a, b: a > b,
        CompareKind.GE: lambda a, b: a >= b,
    }

    @classmethod
    def eval_binop(cls, kind: BinaryOpKind, lhs: int, rhs: int) -> int:
        return _wrap_i64(cls.BINOP_TABLE[BinaryOpKind(kind)](lhs, rhs))

    @classmethod
    def eval_cmp(cls, kind: CompareKind, lhs: int, rhs: int) -> int:
        return 1 if cls.CMP_TABLE[CompareKind(kind)](lhs, rhs) else 0


def apply_update(
    vm: VMState, update: StateUpdate, label_to_idx: dict[str, int]
) -> None:
    """Mechanically apply a StateUpdate: write variables, then move the pc."""
    for name, val in update.var_writes.items():
        vm.variables[name] = val
        vm.last_dest = name

    if update.next_label is None:
        vm.pc += 1
        return
    if update.next_label not in label_to_idx:
        raise UnknownLabelError(update.next_label)
    vm.pc = label_to_idx[update.next_label]


class Interpreter:
    """Executes IR programs against a single flat variable store.

    Every call to ``execute`` starts from an empty store; nothing carries
    over between calls.
    """

    def __init__(
        self,
        input_source: InputSource | None = None,
        config: VMConfig = VMConfig(),
    ):
        self._input = (
            input_source if input_source is not None else StreamInputSource()
        )
        self._config = config
        self.stats = ExecutionStats()
        self._HANDLERS: dict[
            Opcode, Callable[[IRInstruction, VMState], StateUpdate]
        ] = {
            Opcode.LOAD_CONST: self._exec_load_const,
            Opcode.MOVE: self._exec_move,
            Opcode.BINOP: self._exec_binop,
            Opcode.CMP: self._exec_cmp,
            Opcode.READ: self._exec_read,
            Opcode.LABEL: self._exec_label,
            Opcode.BR_IF: self._exec_branch_if,
            Opcode.JMP: self._exec_jump,
        }

    # ── entry points ─────────────────────────────────────────────

    def execute(self, instructions: list[IRInstruction]) -> int:
        """Run the program and return the value of the last written name."""
        vm = self._run(instructions, trace_steps=None)
        return self._result(vm)

    def execute_traced(
        self, instructions: list[IRInstruction]
    ) -> tuple[int, ExecutionTrace]:
        """Run the program, recording a snapshot after every instruction."""
        trace_steps: list[TraceStep] = []
        vm = self._run(instructions, trace_steps=trace_steps)
        result = self._result(vm)
        trace = ExecutionTrace(
            steps=trace_steps,
            stats=self.stats,
            result=result,
            result_name=vm.last_dest,
        )
        return result, trace

    # ── step loop ────────────────────────────────────────────────

    def _run(
        self,
        instructions: list[IRInstruction],
        trace_steps: list[TraceStep] | None,
    ) -> VMState:
        if not instructions:
            raise NoInstructionsError()

        label_to_idx = build_label_table(instructions)
        vm = VMState()
        self.stats = ExecutionStats()
        max_steps = self._config.max_steps

        while vm.pc < len(instructions):
            if max_steps is not None and self.stats.steps >= max_steps:
                raise StepLimitExceededError(max_steps)

            pc = vm.pc
            instruction = instructions[pc]
            update = self._HANDLERS[instruction.opcode](instruction, vm)

            if self._config.verbose:
                logger.info(
                    "[step %d] %d: %s  %s",
                    self.stats.steps,
                    pc,
                    instruction,
                    update.note,
                )

            apply_update(vm, update, label_to_idx)

            self.stats.steps += 1
            self.stats.dynamic_energy += instruction_cost(instruction)
            if trace_steps is not None:
                trace_steps.append(
                    TraceStep(
                        step_index=len(trace_steps),
                        pc=pc,
                        instruction=instruction,
                        update=update,
                        variables=dict(vm.variables),
                    )
                )

        self.stats.final_variable_count = len(vm.variables)
        logger.info(
            "Execution finished: %d steps, dynamic energy %d",
            self.stats.steps,
            self.stats.dynamic_energy,
        )
        return vm

    def _result(self, vm: VMState) -> int:
        if vm.last_dest is None:
            raise NoResultError("Program wrote no value")
        return vm.variables[vm.last_dest]

    # ── instruction handlers ─────────────────────────────────────

    @staticmethod
    def _lookup(vm: VMState, name: str) -> int:
        if name not in vm.variables:
            raise UndefinedVariableError(name)
        return vm.variables[name]

    def _exec_load_const(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        val = int(inst.operands[0])
        if not constants.INT64_MIN <= val <= constants.INT64_MAX:
            raise ConstantOutOfRangeError(inst.dest, val)
        return StateUpdate(
            var_writes={inst.dest: val},
            note=f"const {val} → {inst.dest}",
        )

    def _exec_move(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        src = inst.operands[0]
        val = self._lookup(vm, src)
        return StateUpdate(
            var_writes={inst.dest: val},
            note=f"{src} = {val} → {inst.dest}",
        )

    def _exec_binop(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        kind, lhs_name, rhs_name = inst.operands
        lhs = self._lookup(vm, lhs_name)
        rhs = self._lookup(vm, rhs_name)
        if BinaryOpKind(kind) == BinaryOpKind.DIV and rhs == 0:
            raise DivisionByZeroError(lhs_name, rhs_name)
        val = Operators.eval_binop(kind, lhs, rhs)
        return StateUpdate(
            var_writes={inst.dest: val},
            note=f"{lhs} {BinaryOpKind(kind).value} {rhs} = {val} → {inst.dest}",
        )

    def _exec_cmp(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        kind, lhs_name, rhs_name = inst.operands
        lhs = self._lookup(vm, lhs_name)
        rhs = self._lookup(vm, rhs_name)
        val = Operators.eval_cmp(kind, lhs, rhs)
        return StateUpdate(
            var_writes={inst.dest: val},
            note=f"cmp{CompareKind(kind).value} {lhs}, {rhs} = {val} → {inst.dest}",
        )

    def _exec_read(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        line = self._input.read_value(inst.dest)
        val = _parse_int64(inst.dest, line)
        self.stats.reads += 1
        return StateUpdate(
            var_writes={inst.dest: val},
            note=f"read {val} → {inst.dest}",
        )

    def _exec_label(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        return StateUpdate(note=f"label {inst.label}")

    def _exec_branch_if(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        cond = self._lookup(vm, inst.operands[0])
        then_label, else_label = inst.branch_targets
        target = then_label if cond != 0 else else_label
        return StateUpdate(
            next_label=target,
            note=f"branch_if {cond} → {target}",
        )

    def _exec_jump(self, inst: IRInstruction, vm: VMState) -> StateUpdate:
        return StateUpdate(
            next_label=inst.label,
            note=f"branch → {inst.label}",
        )
