"""Typed AST consumed by the lowering engine.

Nodes are produced by an external parser with every width already resolved;
they are immutable and each node owns its children.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Width(str, Enum):
    I32 = "I32"
    I64 = "I64"


class BinaryOpKind(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"


class CompareKind(str, Enum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"


@dataclass(frozen=True)
class IntLiteral:
    value: int
    width: Width = Width.I64


@dataclass(frozen=True)
class VarRef:
    name: str
    width: Width = Width.I64


@dataclass(frozen=True)
class Assign:
    name: str
    value: Expr
    width: Width = Width.I64


@dataclass(frozen=True)
class BinaryOp:
    kind: BinaryOpKind
    left: Expr
    right: Expr

    @property
    def width(self) -> Width:
        # Left operand decides; mixed widths are not reconciled.
        return self.left.width


@dataclass(frozen=True)
class Compare:
    kind: CompareKind
    left: Expr
    right: Expr

    @property
    def width(self) -> Width:
        return self.left.width


@dataclass(frozen=True)
class Read:
    """Read one integer from the input source into *name*."""

    name: str
    width: Width = Width.I64


@dataclass(frozen=True)
class Sequence:
    items: tuple[Expr, ...] = ()

    @property
    def width(self) -> Width:
        return self.items[-1].width if self.items else Width.I64


@dataclass(frozen=True)
class Conditional:
    cond: Expr
    then_body: Sequence
    else_body: Sequence | None = None

    @property
    def width(self) -> Width:
        return self.cond.width


@dataclass(frozen=True)
class Loop:
    cond: Expr
    body: Sequence

    @property
    def width(self) -> Width:
        return self.cond.width


Expr = Union[
    IntLiteral,
    VarRef,
    Assign,
    BinaryOp,
    Compare,
    Read,
    Sequence,
    Conditional,
    Loop,
]


def seq(*items: Expr) -> Sequence:
    """Build a Sequence from positional items."""
    return Sequence(items=tuple(items))
