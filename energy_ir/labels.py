"""Label resolution and structural validation of IR programs."""

from __future__ import annotations

import logging

from .errors import DuplicateLabelError, UnknownLabelError
from .ir import IRInstruction, Opcode

logger = logging.getLogger(__name__)


def build_label_table(instructions: list[IRInstruction]) -> dict[str, int]:
    """Map every label name to the index of its LABEL instruction.

    Raises ``DuplicateLabelError`` when a name is defined twice.
    """
    label_to_idx: dict[str, int] = {}
    for i, inst in enumerate(instructions):
        if inst.opcode != Opcode.LABEL:
            continue
        if inst.label in label_to_idx:
            raise DuplicateLabelError(inst.label, label_to_idx[inst.label], i)
        label_to_idx[inst.label] = i
    return label_to_idx


def validate_program(instructions: list[IRInstruction]) -> dict[str, int]:
    """Check that labels are unique and every branch target resolves.

    Returns the label table on success.
    """
    label_to_idx = build_label_table(instructions)
    for inst in instructions:
        for target in inst.branch_targets:
            if target not in label_to_idx:
                raise UnknownLabelError(target)
    logger.debug(
        "Validated %d instructions, %d labels", len(instructions), len(label_to_idx)
    )
    return label_to_idx
