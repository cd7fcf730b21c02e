"""CHIP-8 interpreter package."""

from chix8.state import EmulatorState, StackState, create_state
from chix8.emulator import execute, dispatch, fetch, tick_timers, load_rom, load_program
from chix8.decode import DecodedInstruction, decode
from chix8.constants import *
from chix8.errors import (
    Chip8Error, DecodeError, MachineFault, StackOverflowError, StackUnderflowError,
    OutOfBoundsAccessError, RomError, RomTooLargeError, RomLoadError,
)
from chix8.driver import CycleDriver, MachineStatus, KeypadSnapshot, TraceEvent
from chix8.rendering import chip8_display_to_rgb, create_color_scheme, render_frame

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "dispatch",
    "tick_timers",
    "load_rom",
    "load_program",
    "DecodedInstruction",
    "decode",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "STACK_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "Chip8Error",
    "DecodeError",
    "MachineFault",
    "StackOverflowError",
    "StackUnderflowError",
    "OutOfBoundsAccessError",
    "RomError",
    "RomTooLargeError",
    "RomLoadError",
    "CycleDriver",
    "MachineStatus",
    "KeypadSnapshot",
    "TraceEvent",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "render_frame",
]
