"""CHIP-8 interpreter errors.

Only :class:`DecodeError` is recoverable: the interpreter skips the unknown
word and keeps running. Every :class:`MachineFault` halts the machine, and a
:class:`RomError` stops it before the first cycle.
"""

from typing import Any, Optional

from chix8.constants import MEMORY_SIZE


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class DecodeError(Chip8Error):
    """Unknown opcode.

    Attributes:
        opcode: The 16-bit instruction word that matched no pattern
        pc: Address the word was fetched from
        state: Emulator state with PC already advanced past the word
    """

    def __init__(self, opcode: int, pc: int, state: Any = None):
        self.opcode = opcode
        self.pc = pc
        self.state = state
        super().__init__(f"Unknown opcode 0x{opcode:04X} at PC=0x{pc:03X}")


class MachineFault(Chip8Error):
    """Fatal execution fault, reported with the faulting opcode and PC."""

    def __init__(self, message: str, opcode: Optional[int] = None, pc: Optional[int] = None):
        self.message = message
        self.opcode = opcode
        self.pc = pc
        super().__init__(message)

    def at(self, opcode: int, pc: int) -> "MachineFault":
        """Attach instruction context unless already present."""
        if self.opcode is None:
            self.opcode = opcode
        if self.pc is None:
            self.pc = pc
        return self

    def __str__(self) -> str:
        context = []
        if self.opcode is not None:
            context.append(f"opcode=0x{self.opcode:04X}")
        if self.pc is not None:
            context.append(f"PC=0x{self.pc:03X}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class StackOverflowError(MachineFault):
    """CALL with a full stack."""


class StackUnderflowError(MachineFault):
    """RET with an empty stack."""


class OutOfBoundsAccessError(MachineFault):
    """Memory access beyond the 4096-byte address space."""


class RomError(Chip8Error):
    """ROM could not be loaded; the machine never starts."""


class RomTooLargeError(RomError):
    """Program image does not fit between 0x200 and the end of memory."""


class RomLoadError(RomError):
    """ROM file could not be read."""


def check_address_range(start: int, length: int) -> None:
    """Raise OutOfBoundsAccessError unless [start, start + length) is addressable."""
    if length <= 0:
        return
    end = start + length - 1
    if start < 0 or end >= MEMORY_SIZE:
        raise OutOfBoundsAccessError(
            f"Memory access 0x{start:03X}..0x{end:03X} outside 0x000..0x{MEMORY_SIZE - 1:03X}"
        )
