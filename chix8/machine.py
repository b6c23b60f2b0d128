import dataclasses
from typing import Optional

import jax
import numpy as np

from chix8.config import Chip8Config
from chix8.constants import TIMER_FREQUENCY
from chix8.emulator import step, peek
from chix8.errors import Chip8Error
from chix8.logging import TraceLogger, frame_progress
from chix8.memory import load_program
from chix8.rendering import chip8_display_to_rgb, create_color_scheme, display_to_ascii
from chix8.state import EmulatorState, create_state, is_waiting_for_key
from chix8.timers import tick


class Chip8Machine:
    """Driver pacing a CHIP-8 program in emulated time.

    Each frame runs ``instruction_frequency // fps`` instructions followed by
    one timer tick, so the timers advance at ``fps`` Hz of emulated time
    whatever the instruction rate. Wall-clock pacing is left to the frontend.
    """

    metadata = {"render_modes": ["rgb_array", "ascii"]}

    def __init__(
        self,
        rom_path: Optional[str] = None,
        rom_data: Optional[bytes] = None,
        config: Optional[Chip8Config] = None,
        fps: int = TIMER_FREQUENCY,
        seed: int = 0,
        render_mode: str = "rgb_array",
        render_scale: int = 8,
        color_scheme: str = "classic",
        trace: bool = False,
        logger: Optional[TraceLogger] = None,
    ):
        """Initialize the CHIP-8 driver.

        Args:
            rom_path: Path to the CHIP-8 ROM file to load
            rom_data: Program image, used instead of ``rom_path``
            config: Quirks and instruction frequency (Cowgod defaults if None)
            fps: Frames per second; one timer tick happens per frame
            seed: Seed for the CXNN random number generator
            render_mode: Rendering mode ("rgb_array", "ascii" or None)
            render_scale: Upscaling factor for rendered frames
            color_scheme: Color scheme for rendering
            trace: Log every executed instruction at DEBUG level
            logger: Logger receiving run and fault messages
        """
        if (rom_path is None) == (rom_data is None):
            raise ValueError("Provide exactly one of rom_path or rom_data")
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(
                f"Unsupported render_mode '{render_mode}'. "
                f"Supported modes: {self.metadata['render_modes']}"
            )
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        if rom_path is not None:
            with open(rom_path, 'rb') as f:
                rom_data = f.read()
        self.rom_path = rom_path
        self.rom_data = bytes(rom_data)
        self.config = config or Chip8Config()
        self.fps = fps
        self.seed = seed
        self.render_mode = render_mode
        self.render_scale = render_scale
        self.color_scheme = color_scheme
        self.trace = trace
        self.logger = logger or TraceLogger()
        self.instruction_count = 0

    @property
    def instructions_per_frame(self) -> int:
        """Number of CHIP-8 instructions executed per frame."""
        return max(1, self.config.instruction_frequency // self.fps)

    def reset(self) -> EmulatorState:
        """Build a fresh machine with the program loaded."""
        state = create_state(jax.random.PRNGKey(self.seed), self.config)
        return load_program(state, self.rom_data)

    def describe(self) -> dict:
        description = dataclasses.asdict(self.config)
        description.update(
            rom=self.rom_path or f"<{len(self.rom_data)} bytes>",
            fps=self.fps,
            instructions_per_frame=self.instructions_per_frame,
        )
        return description

    def step(self, state: EmulatorState) -> EmulatorState:
        """Run one instruction, logging it when tracing and the fault when it fails."""
        try:
            if self.trace and not is_waiting_for_key(state):
                self.logger.log_instruction(int(state.pc), peek(state), self.config.jump_quirk)
            state = step(state)
        except Chip8Error as error:
            self.logger.log_fault(error, state)
            raise
        self.instruction_count += 1
        return state

    def run_frame(self, state: EmulatorState) -> EmulatorState:
        """Run one frame of instructions, then tick the timers."""
        for _ in range(self.instructions_per_frame):
            state = self.step(state)
        return tick(state)

    def run(self, state: EmulatorState, frames: int, progress: bool = False) -> EmulatorState:
        """Run a number of frames, optionally with a progress bar."""
        bar = frame_progress(frames) if progress else None
        try:
            for _ in range(frames):
                state = self.run_frame(state)
                if bar is not None:
                    bar.update(1)
        finally:
            if bar is not None:
                bar.close()
        return state

    def render(self, state: EmulatorState):
        """Render the current display.

        Returns:
            RGB array if render_mode="rgb_array", text if "ascii", else None
        """
        if self.render_mode == "rgb_array":
            on_color, off_color = create_color_scheme(self.color_scheme)
            return chip8_display_to_rgb(
                np.asarray(state.display),
                scale=self.render_scale,
                on_color=on_color,
                off_color=off_color,
            )
        if self.render_mode == "ascii":
            return display_to_ascii(np.asarray(state.display))
        return None
