"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Operand fields of one big-endian 16-bit instruction word.

    Every 16-bit value decodes; whether the fields name a real operation is
    decided by the dispatcher.
    """
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    kk: int      # Low byte (8-bit immediate)
    nnn: int     # Low 12 bits (address)

    @property
    def nibbles(self) -> tuple[int, int, int, int]:
        return self.opcode, self.x, self.y, self.n

    def __str__(self) -> str:
        return f"{self.raw:04X}"


def decode(instruction: int) -> DecodedInstruction:
    """Split a 16-bit instruction word into its operand fields."""
    word = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=word,
        opcode=word >> 12,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        kk=word & 0xFF,
        nnn=word & 0xFFF,
    )


def join_bytes(high: int, low: int) -> int:
    """Combine the two instruction bytes at PC and PC + 1."""
    return ((int(high) & 0xFF) << 8) | (int(low) & 0xFF)
