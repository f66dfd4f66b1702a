"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

TEMP_PREFIX = "t"

LABEL_THEN = "then"
LABEL_ELSE = "else"
LABEL_IF_END = "if_end"
LABEL_WHILE_HEAD = "while_head"
LABEL_WHILE_BODY = "while_body"
LABEL_WHILE_END = "while_end"

BRANCH_TARGET_SEPARATOR = ","

READ_PROMPT_TEMPLATE = "Input {name}: "

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
