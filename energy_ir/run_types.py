"""Execution configuration and statistics (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VMConfig:
    """Groups interpreter execution configuration."""

    max_steps: int | None = None  # None runs until the program ends
    verbose: bool = False


@dataclass
class ExecutionStats:
    """Returned execution metrics from an interpreter run."""

    steps: int = 0
    reads: int = 0
    dynamic_energy: int = 0
    final_variable_count: int = 0
