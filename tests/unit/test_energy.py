"""Tests for the static energy cost model."""

import pytest

from energy_ir.ast_nodes import BinaryOpKind, CompareKind, Width
from energy_ir.energy import (
    FLOAT_BINOP_COSTS,
    BINOP_COSTS,
    count_opcodes,
    energy_by_opcode,
    estimate_energy,
    instruction_cost,
)
from energy_ir.ir import IRInstruction, Opcode, format_program
from energy_ir.lowering import Lowerer
from energy_ir.run_types import ExecutionStats
from energy_ir.vm import Interpreter

from tests.unit.conftest import countdown, make_instructions, three_plus_four_times_two


def _binop(kind: BinaryOpKind, width: Width) -> IRInstruction:
    return IRInstruction(
        opcode=Opcode.BINOP, dest="t2", operands=[kind, "t0", "t1"], width=width
    )


class TestInstructionCost:
    @pytest.mark.parametrize(
        "kind,width,cost",
        [
            (BinaryOpKind.ADD, Width.I32, 1),
            (BinaryOpKind.ADD, Width.I64, 1),
            (BinaryOpKind.SUB, Width.I32, 1),
            (BinaryOpKind.SUB, Width.I64, 1),
            (BinaryOpKind.MUL, Width.I32, 3),
            (BinaryOpKind.MUL, Width.I64, 5),
            (BinaryOpKind.DIV, Width.I32, 20),
            (BinaryOpKind.DIV, Width.I64, 40),
        ],
    )
    def test_binop_table(self, kind, width, cost):
        assert instruction_cost(_binop(kind, width)) == cost

    @pytest.mark.parametrize("width,cost", [(Width.I32, 4), (Width.I64, 5)])
    def test_move_depends_on_width(self, width, cost):
        inst = IRInstruction(opcode=Opcode.MOVE, dest="t0", operands=["x"], width=width)
        assert instruction_cost(inst) == cost

    @pytest.mark.parametrize("width", list(Width))
    def test_fixed_cost_value_producers(self, width):
        const = IRInstruction(
            opcode=Opcode.LOAD_CONST, dest="t0", operands=[9], width=width
        )
        read = IRInstruction(opcode=Opcode.READ, dest="n", width=width)
        assert instruction_cost(const) == 1
        assert instruction_cost(read) == 50

    @pytest.mark.parametrize("kind", list(CompareKind))
    def test_cmp_costs_one(self, kind):
        inst = IRInstruction(opcode=Opcode.CMP, dest="t2", operands=[kind, "a", "b"])
        assert instruction_cost(inst) == 1

    def test_control_flow_costs(self):
        assert instruction_cost(IRInstruction(opcode=Opcode.LABEL, label="a")) == 0
        assert instruction_cost(IRInstruction(opcode=Opcode.JMP, label="a")) == 1
        assert (
            instruction_cost(
                IRInstruction(opcode=Opcode.BR_IF, operands=["c"], label="a,b")
            )
            == 1
        )

    def test_cost_ignores_operand_values(self):
        small = IRInstruction(
            opcode=Opcode.LOAD_CONST, dest="t0", operands=[1], width=Width.I64
        )
        large = IRInstruction(
            opcode=Opcode.LOAD_CONST, dest="t0", operands=[2**62], width=Width.I64
        )
        assert instruction_cost(small) == instruction_cost(large)


class TestEstimateEnergy:
    def test_empty_program_costs_nothing(self):
        assert estimate_energy([]) == 0

    def test_three_plus_four_times_two(self):
        ir = Lowerer().lower_program(three_plus_four_times_two())
        assert estimate_energy(ir) == 1 + 1 + 1 + 1 + 5

    def test_loop_counted_once_regardless_of_trip_count(self):
        ir = Lowerer().lower_program(countdown(5))
        # const, move, [head], move, const, cmp, br_if, [body],
        # move, const, sub, move, jmp, [end]
        assert estimate_energy(ir) == 1 + 5 + 0 + 5 + 1 + 1 + 1 + 0 + 5 + 1 + 1 + 5 + 1 + 0
        assert estimate_energy(ir) == sum(instruction_cost(inst) for inst in ir)

    def test_static_estimate_independent_of_trip_count(self):
        five = Lowerer().lower_program(countdown(5))
        fifty = Lowerer().lower_program(countdown(50))
        assert estimate_energy(five) == estimate_energy(fifty)

    def test_dynamic_energy_exceeds_static_for_loops(self):
        ir = Lowerer().lower_program(countdown(5))
        interp = Interpreter()
        interp.execute(ir)
        assert isinstance(interp.stats, ExecutionStats)
        assert interp.stats.dynamic_energy == 119
        assert interp.stats.dynamic_energy > estimate_energy(ir)

    def test_labels_free_but_listed(self):
        program = make_instructions(
            (Opcode.LABEL, {"label": "a"}),
            (Opcode.LABEL, {"label": "b"}),
        )
        assert estimate_energy(program) == 0
        assert len(format_program(program).splitlines()) == len(program)


class TestBreakdowns:
    def test_count_opcodes(self):
        ir = Lowerer().lower_program(three_plus_four_times_two())
        assert count_opcodes(ir) == {"LOAD_CONST": 3, "BINOP": 2}

    def test_count_opcodes_empty(self):
        assert count_opcodes([]) == {}

    def test_energy_by_opcode_sums_to_total(self):
        ir = Lowerer().lower_program(countdown(3))
        breakdown = energy_by_opcode(ir)
        assert sum(breakdown.values()) == estimate_energy(ir)
        assert breakdown["LABEL"] == 0
        assert breakdown["MOVE"] == 20


class TestFloatReference:
    def test_float_rows_cost_at_least_integer_rows(self):
        assert set(FLOAT_BINOP_COSTS) == set(BINOP_COSTS)
        for key, cost in FLOAT_BINOP_COSTS.items():
            assert cost >= BINOP_COSTS[key]
