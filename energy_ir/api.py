"""Composable API functions for the lowering / energy / execution pipelines.

Each function corresponds to one reporting workflow (IR listing, energy
report, execution, traced execution) and is callable programmatically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .ast_nodes import Expr
from .energy import count_opcodes, energy_by_opcode, estimate_energy
from .input_source import InputSource
from .ir import IRInstruction, format_program
from .labels import validate_program
from .lowering import Lowerer
from .run_types import VMConfig
from .trace_types import ExecutionTrace
from .vm import Interpreter

logger = logging.getLogger(__name__)


@dataclass
class CompileReport:
    """Everything the reporting layer prints for one compiled program."""

    instructions: list[IRInstruction] = field(default_factory=list)
    result: str = ""
    total_energy: int = 0
    opcode_counts: dict[str, int] = field(default_factory=dict)
    energy_by_opcode: dict[str, int] = field(default_factory=dict)

    def render(self) -> str:
        lines = [str(inst) for inst in self.instructions]
        lines.append(f"Result in {self.result}")
        lines.append(f"Total energy: {self.total_energy}")
        return "\n".join(lines)


def lower_program(expr: Expr) -> list[IRInstruction]:
    """Lower a typed AST to IR instructions with a fresh Lowerer."""
    return Lowerer().lower_program(expr)


def dump_ir(instructions: list[IRInstruction]) -> str:
    """Return the text form of a program, one instruction per line."""
    return format_program(instructions)


def compile_report(expr: Expr) -> CompileReport:
    """Lower *expr* and collect the listing, result id and energy figures.

    Args:
        expr: The root of a typed AST.

    Returns:
        A CompileReport; ``render()`` gives the printable text.
    """
    lowerer = Lowerer()
    instructions = lowerer.lower_program(expr)
    report = CompileReport(
        instructions=instructions,
        result=lowerer.result,
        total_energy=estimate_energy(instructions),
        opcode_counts=count_opcodes(instructions),
        energy_by_opcode=energy_by_opcode(instructions),
    )
    logger.info("Static energy estimate: %d", report.total_energy)
    return report


def run_program(
    expr: Expr,
    input_source: InputSource | None = None,
    config: VMConfig = VMConfig(),
) -> int:
    """Lower, validate and execute *expr*, returning the program result.

    Args:
        expr: The root of a typed AST.
        input_source: Where READ takes its lines from (stdin when omitted).
        config: Interpreter configuration.

    Returns:
        The value of the last name written during execution.
    """
    instructions = lower_program(expr)
    validate_program(instructions)
    return Interpreter(input_source, config).execute(instructions)


def execute_traced(
    expr: Expr,
    input_source: InputSource | None = None,
    config: VMConfig = VMConfig(),
) -> ExecutionTrace:
    """Lower, validate and execute *expr*, recording every step.

    Returns:
        An ExecutionTrace with per-step variable snapshots, stats and result.
    """
    instructions = lower_program(expr)
    validate_program(instructions)
    _result, trace = Interpreter(input_source, config).execute_traced(instructions)
    return trace
