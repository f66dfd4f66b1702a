"""Interpreter data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel


@dataclass
class VMState:
    """Flat variable store plus program counter for one execution.

    Source variables and compiler temporaries share ``variables``; there is
    no scoping.
    """

    variables: dict[str, int] = field(default_factory=dict)
    pc: int = 0
    last_dest: str | None = None


class StateUpdate(BaseModel):
    """Effect of executing one instruction."""

    var_writes: dict[str, int] = {}
    next_label: str | None = None
    note: str = ""
