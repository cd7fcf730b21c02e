"""CHIP-8 display operations."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chix8.errors import check_address_range

# Column offsets of the 8 sprite bits, most significant bit first
bit_offsets = jnp.arange(8)


def sprite_mask(sprite_bytes: jnp.ndarray, x: int, y: int) -> jnp.ndarray:
    """Place sprite rows on an empty (width, height) grid, wrapping at the edges."""
    rows = jnp.arange(sprite_bytes.shape[0])
    bits = (sprite_bytes[:, None] >> (7 - bit_offsets[None, :])) & 1

    xs = (x + bit_offsets[None, :]) % SCREEN_WIDTH
    ys = (y + rows[:, None]) % SCREEN_HEIGHT
    xs, ys = jnp.broadcast_arrays(xs, ys)

    # Sprites are at most 15 x 8, so wrapped coordinates never collide
    mask = jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)
    return mask.at[xs, ys].set(bits.astype(jnp.bool_))


def draw_sprite(display: jnp.ndarray, sprite_bytes: jnp.ndarray, x: int, y: int) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the display.

    Returns:
        The new display and whether any lit pixel was switched off
    """
    sprite = sprite_mask(sprite_bytes, x, y)
    collision = bool(jnp.any(display & sprite))
    return display ^ sprite, collision


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    index = int(state.I)
    check_address_range(index, instruction.n)

    sprite_bytes = state.memory[index:index + instruction.n]
    display, collision = draw_sprite(
        state.display,
        sprite_bytes,
        int(state.V[instruction.x]),
        int(state.V[instruction.y]),
    )

    return state.replace(
        display=display,
        V=state.V.at[15].set(int(collision))
    ).advance()
