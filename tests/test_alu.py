"""Tests for ALU operations (8xxx)."""

import pytest
from chix8 import execute, DecodeError
from conftest import set_registers

# Edge values for the flag tests: 0, 1, sign boundary, top of range
EDGE_VALUES = [0x00, 0x01, 0x0F, 0x7F, 0x80, 0x81, 0xAA, 0xFE, 0xFF]


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99
        assert state.pc == 0x202

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x0F)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0x0F

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xFF)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F

    def test_logic_operations_leave_vf_alone(self, fresh_state):
        """8XY1/2/3 have no flag effect."""
        for op in (0x8121, 0x8122, 0x8123):
            state = set_registers(fresh_state, V1=0x0F, V2=0xF0, VF=0x42)
            state = execute(state, op)
            assert state.V[15] == 0x42, f"{op:04X} changed VF"


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = set_registers(fresh_state, V1=0x11, V2=0x22)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x33
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = set_registers(fresh_state, V1=0xAA, V2=0xAA)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x54
        assert state.V[15] == 1

    def test_alu_add_flag_grid(self, fresh_state):
        """8XY4 - VF = 1 iff a + b > 255, VX = (a + b) mod 256."""
        for a in EDGE_VALUES:
            for b in EDGE_VALUES:
                state = set_registers(fresh_state, V3=a, V4=b)
                state = execute(state, 0x8344)
                assert state.V[3] == (a + b) % 256, f"{a:#x} + {b:#x}"
                assert state.V[15] == int(a + b > 255), f"{a:#x} + {b:#x}"

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x11)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0xEE
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = set_registers(fresh_state, V1=0x11, V2=0xFF)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x12
        assert state.V[15] == 0

    def test_alu_sub_equal_operands(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = set_registers(fresh_state, V1=0x40, V2=0x40)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_flag_grid(self, fresh_state):
        """8XY5 / 8XY7 - VF = NOT borrow across edge values."""
        for a in EDGE_VALUES:
            for b in EDGE_VALUES:
                state = set_registers(fresh_state, V1=a, V2=b)
                xy = execute(state, 0x8125)
                assert xy.V[1] == (a - b) % 256, f"{a:#x} - {b:#x}"
                assert xy.V[15] == int(a >= b), f"{a:#x} - {b:#x}"

                yx = execute(state, 0x8127)
                assert yx.V[1] == (b - a) % 256, f"{b:#x} - {a:#x}"
                assert yx.V[15] == int(b >= a), f"{b:#x} - {a:#x}"

    def test_alu_sub_yx(self, fresh_state):
        """8XY7 - Subtract VY - VX."""
        state = set_registers(fresh_state, V1=0x1, V2=0x2)
        state = execute(state, 0x8127)  # V1 = V2 - V1
        assert state.V[1] == 0x1
        assert state.V[15] == 1

        state = set_registers(state, V1=0x2, V2=0x1)
        state = execute(state, 0x8127)
        assert state.V[1] == 0xFF
        assert state.V[15] == 0
        assert state.pc == 0x204


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = set_registers(fresh_state, V5=14, V0=0xFF)

        state = execute(state, 0x8506)  # V5 >>= 1

        assert state.V[5] == 7
        assert state.V[15] == 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number; VY ignored."""
        state = set_registers(fresh_state, V3=0x05, V4=0xFF)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left(self, fresh_state):
        """8XYE - Shift left, MSB into VF."""
        state = set_registers(fresh_state, V1=0xAA)

        state = execute(state, 0x810E)
        assert state.V[1] == 0x54
        assert state.V[15] == 1

        state = execute(state, 0x810E)
        assert state.V[1] == 0xA8
        assert state.V[15] == 0

    def test_shift_flags_use_pre_shift_value(self, fresh_state):
        """Shift flags come from the operand before shifting."""
        for value in EDGE_VALUES:
            state = set_registers(fresh_state, V2=value)

            right = execute(state, 0x8206)
            assert right.V[2] == value >> 1
            assert right.V[15] == value & 1

            left = execute(state, 0x820E)
            assert left.V[2] == (value << 1) & 0xFF
            assert left.V[15] == value >> 7


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Unassigned 8XYN variants are decode errors and skip the word."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        with pytest.raises(DecodeError) as excinfo:
            execute(state, 0x8120 | op)

        recovered = excinfo.value.state
        assert excinfo.value.opcode == 0x8120 | op
        assert recovered.V[1] == 0x42
        assert recovered.pc == 0x202

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """VF as source is read before being overwritten by the flag."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_vf_is_target(self, fresh_state):
        """With X = F the flag is the final value of VF."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x01)

        state = execute(state, 0x8F14)  # VF += V1 -> 0x00 with carry

        assert state.V[15] == 1
