"""Trace data types for step-by-step execution replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .run_types import ExecutionStats


@dataclass(frozen=True)
class TraceStep:
    """A single step in the execution trace.

    Captures the instruction executed, the state update produced,
    and a snapshot of the variable store after the update was applied.
    """

    step_index: int
    pc: int
    instruction: Any  # IRInstruction
    update: Any  # StateUpdate
    variables: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecutionTrace:
    """Complete trace of an execution run and its result."""

    steps: list[TraceStep] = field(default_factory=list)
    stats: ExecutionStats = field(default_factory=ExecutionStats)
    result: int | None = None
    result_name: str | None = None
