"""Tests for control flow instructions."""

import pytest
from chip8core import execute, create_state, fetch, UnknownOpcode


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    @pytest.mark.parametrize("address", [0x000, 0x200, 0x2A4, 0x7FE, 0xFFF])
    def test_jump_then_fetch(self, fresh_state, address):
        """A fetched jump leaves PC exactly at its target."""
        state = fresh_state.replace(
            memory=fresh_state.memory.at[0x200].set(0x10 | (address >> 8)).at[0x201].set(address & 0xFF)
        )
        state, instruction = fetch(state)
        state = execute(state, instruction)
        assert state.pc == address


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        state = fresh_state
        initial_pc = state.pc

        state = execute(state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2

    @pytest.mark.parametrize("vx, vy", [(0, 0), (1, 2), (0xFF, 0xFF), (0x80, 0x7F)])
    @pytest.mark.parametrize("pair", [(0x3100, 0x4100), (0x5120, 0x9120)])
    def test_complementary_pairs(self, fresh_state, vx, vy, pair):
        """Exactly one of each complementary skip pair takes the skip."""
        equal_word, not_equal_word = pair
        if equal_word == 0x3100:
            equal_word, not_equal_word = equal_word | vy, not_equal_word | vy
        state = fresh_state.replace(V=fresh_state.V.at[1].set(vx).at[2].set(vy))

        # Advance through fetch so the total PC movement is observable
        results = []
        for word in (equal_word, not_equal_word):
            program = state.replace(
                memory=state.memory.at[0x200].set(word >> 8).at[0x201].set(word & 0xFF)
            )
            program, instruction = fetch(program)
            program = execute(program, instruction)
            results.append(int(program.pc) - 0x200)

        assert sorted(results) == [2, 4]
        assert (results[0] == 4) == (vx == vy)

    @pytest.mark.parametrize("instruction", [0x5121, 0x512F, 0x9121, 0x912E])
    def test_register_skips_require_zero_nibble(self, fresh_state, instruction):
        """5XYN / 9XYN with N != 0 are not valid instructions."""
        with pytest.raises(UnknownOpcode):
            execute(fresh_state, instruction)


class TestKeySkips:
    """Test key-conditional skips."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip if key VX is held."""
        state = execute(fresh_state, 0x6305)  # V3 = 5
        state = state.replace(keypad=state.keypad.at[5].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE39E)
        assert state.pc == initial_pc + 2

        state = execute(state, 0xE3A1)
        assert state.pc == initial_pc + 2

    def test_skip_if_key_released(self, fresh_state):
        """EXA1 - Skip if key VX is not held."""
        state = execute(fresh_state, 0x630C)  # V3 = 12
        initial_pc = state.pc

        state = execute(state, 0xE39E)
        assert state.pc == initial_pc

        state = execute(state, 0xE3A1)
        assert state.pc == initial_pc + 2

    def test_key_index_uses_low_nibble(self, fresh_state):
        """Only the low nibble of VX selects the key."""
        state = execute(fresh_state, 0x6012)  # V0 = 0x12 → key 2
        state = state.replace(keypad=state.keypad.at[2].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test jump with offset in both modes."""

    def test_jump_with_offset_legacy(self, legacy_state):
        """BNNN - Jump with V0 offset (legacy mode)."""
        state = execute(legacy_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_modern(self, modern_state):
        """BXNN - Jump with VX offset (modern mode)."""
        state = execute(modern_state, 0x6210)  # V2 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x260

    def test_jump_mode_comparison(self):
        """Test that modern_mode changes the offset register."""
        state_legacy = create_state(modern_mode=False)
        state_legacy = execute(state_legacy, 0x6010)  # V0 = 0x10
        state_legacy = execute(state_legacy, 0x6230)  # V2 = 0x30
        state_legacy = execute(state_legacy, 0xB250)

        state_modern = create_state(modern_mode=True)
        state_modern = execute(state_modern, 0x6010)  # V0 = 0x10
        state_modern = execute(state_modern, 0x6230)  # V2 = 0x30
        state_modern = execute(state_modern, 0xB250)

        assert state_legacy.pc == 0x260  # 0x250 + V0
        assert state_modern.pc == 0x280  # 0x250 + V2

    def test_jump_with_offset_wraps_address(self, legacy_state):
        """BNNN - Target stays inside the 12-bit address space."""
        state = execute(legacy_state, 0x6020)  # V0 = 0x20
        state = execute(state, 0xBFF0)
        assert state.pc == 0x010
