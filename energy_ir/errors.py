"""Exception taxonomy for lowering, program validation and execution."""

from __future__ import annotations


class EnergyIRError(Exception):
    """Base class for every error raised by this package."""


# ── lowering ─────────────────────────────────────────────────────


class LoweringError(EnergyIRError):
    pass


class EmptySequenceError(LoweringError):
    def __init__(self):
        super().__init__("Cannot take the value of an empty sequence")


class UnsupportedNodeError(LoweringError):
    def __init__(self, node: object):
        self.node = node
        super().__init__(f"No lowering for node type {type(node).__name__}")


class LiteralOutOfRangeError(LoweringError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Integer literal out of 64-bit range: {value}")


# ── program structure ────────────────────────────────────────────


class ProgramError(EnergyIRError):
    pass


class DuplicateLabelError(ProgramError):
    def __init__(self, label: str, first_index: int, second_index: int):
        self.label = label
        self.first_index = first_index
        self.second_index = second_index
        super().__init__(
            f"Duplicate label: {label} (at {first_index} and {second_index})"
        )


class UnknownLabelError(ProgramError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown label: {label}")


# ── execution ────────────────────────────────────────────────────


class ExecutionError(EnergyIRError):
    pass


class UndefinedVariableError(ExecutionError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable: {name}")


class DivisionByZeroError(ExecutionError, ZeroDivisionError):
    def __init__(self, dividend: str, divisor: str):
        self.dividend = dividend
        self.divisor = divisor
        super().__init__(f"Division by zero: {dividend} / {divisor}")


class InputParseError(ExecutionError, ValueError):
    def __init__(self, name: str, line: str):
        self.name = name
        self.line = line
        super().__init__(f"Invalid integer input for {name}: {line!r}")


class ConstantOutOfRangeError(ExecutionError, ValueError):
    def __init__(self, dest: str, value: int):
        self.dest = dest
        self.value = value
        super().__init__(f"Constant for {dest} out of 64-bit range: {value}")


class NoResultError(ExecutionError):
    def __init__(self, message: str = "No result"):
        super().__init__(message)


class NoInstructionsError(NoResultError):
    def __init__(self):
        super().__init__("No instructions")


class StepLimitExceededError(ExecutionError):
    def __init__(self, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"Execution exceeded {max_steps} steps")
