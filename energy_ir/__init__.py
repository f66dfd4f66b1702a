"""Typed-AST lowering, static energy estimation and IR interpretation."""

from .api import (  # noqa: F401
    lower_program,
    dump_ir,
    compile_report,
    run_program,
    execute_traced,
)
