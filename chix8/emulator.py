"""Main CHIP-8 emulator execution engine."""

import os
from typing import Union

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction, decode, join_bytes
from chix8.constants import MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE, INSTRUCTION_WIDTH
from chix8.errors import MachineFault, OutOfBoundsAccessError, RomLoadError, RomTooLargeError
from chix8.instructions.system import execute_system_instruction
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chix8.instructions.alu import execute_alu_operation
from chix8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import execute_misc_instruction

# Indexed by the first nibble of the instruction
INSTRUCTION_FAMILIES = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Run the handler for a decoded instruction.

    Raises:
        DecodeError: The word matches no instruction. ``error.state`` holds the
            state with PC moved past it.
        MachineFault: A fatal fault, annotated with the opcode and PC.
    """
    pc = int(state.pc)
    try:
        return INSTRUCTION_FAMILIES[instruction.opcode](state, instruction)
    except MachineFault as fault:
        raise fault.at(instruction.raw, pc)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    return dispatch(state, decode(instruction))


def fetch(state: EmulatorState) -> int:
    """Read the big-endian instruction word at PC."""
    pc = int(state.pc)
    if pc + INSTRUCTION_WIDTH > MEMORY_SIZE:
        raise OutOfBoundsAccessError("Program counter ran past the end of memory", pc=pc)
    return join_bytes(state.memory[pc], state.memory[pc + 1])


def tick_timers(state: EmulatorState, ticks: int = 1) -> EmulatorState:
    """Decrement delay and sound timers by ``ticks`` 60 Hz periods, stopping at zero."""
    delay_timer = int(state.delay_timer)
    sound_timer = int(state.sound_timer)
    return state.replace(
        delay_timer=jnp.asarray(max(delay_timer - ticks, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(sound_timer - ticks, 0), dtype=jnp.uint8),
    )


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy a program image into memory starting at 0x200."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise RomTooLargeError(
            f"Program is {len(program)} bytes, at most {MAX_PROGRAM_SIZE} fit at 0x{PROGRAM_START:03X}"
        )
    if not program:
        return state
    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: Union[str, os.PathLike]) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise RomLoadError(f"Could not read ROM {os.fspath(filename)!r}: {e}") from e
    return load_program(state, rom_data)
