"""CHIP-8 framebuffer operations."""

from typing import Sequence, Union

import jax.numpy as jnp
import numpy as np

from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Bit shift selecting each sprite column, most significant bit first
_column_shifts = jnp.arange(SPRITE_WIDTH - 1, -1, -1)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def sprite_to_pixels(sprite: Union[jnp.ndarray, Sequence[int]]) -> jnp.ndarray:
    """Expand sprite bytes into a (rows, 8) boolean pixel block."""
    sprite = jnp.asarray(sprite, dtype=jnp.uint8).astype(jnp.int32)
    return ((sprite[:, None] >> _column_shifts[None, :]) & 1).astype(jnp.bool_)


def draw_sprite(
    display: jnp.ndarray,
    x: int,
    y: int,
    sprite: Union[jnp.ndarray, Sequence[int]],
    clip: bool = False,
) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the display.

    The start coordinate always wraps to ``(x mod 64, y mod 32)``. Pixels that
    run past the right or bottom edge wrap to the opposite side, or are dropped
    when ``clip`` is set.

    Returns:
        The new display and whether any lit pixel was turned off.
    """
    pixels = sprite_to_pixels(sprite)
    sprite_x = int(x) % SCREEN_WIDTH
    sprite_y = int(y) % SCREEN_HEIGHT

    rows = sprite_y + jnp.arange(pixels.shape[0])
    cols = sprite_x + jnp.arange(SPRITE_WIDTH)
    if clip:
        pixels = pixels & (rows < SCREEN_HEIGHT)[:, None] & (cols < SCREEN_WIDTH)[None, :]

    # Rows and columns are distinct modulo the screen size, so no pixel is written twice
    mask = jnp.zeros_like(display).at[
        (rows % SCREEN_HEIGHT)[:, None], (cols % SCREEN_WIDTH)[None, :]
    ].set(pixels)

    collision = bool(jnp.any(display & mask))
    return display ^ mask, collision


def snapshot(display: jnp.ndarray) -> np.ndarray:
    """Read-only row-major copy of the framebuffer for renderers."""
    pixels = np.array(display, dtype=np.bool_)
    pixels.setflags(write=False)
    return pixels
