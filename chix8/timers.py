"""CHIP-8 delay and sound timers.

Both timers count down at 60 Hz, independently of the instruction rate. The
driver owns that cadence and calls ``tick`` once per timer period.
"""

import jax.numpy as jnp

from chix8.state import EmulatorState


def _count_down(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement each nonzero timer by one."""
    return state.replace(
        delay_timer=_count_down(state.delay_timer),
        sound_timer=_count_down(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the buzzer should currently sound."""
    return int(state.sound_timer) > 0
