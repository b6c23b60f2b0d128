import sys
import time

from chix8 import make_config
from chix8.logging import TraceLogger
from chix8.machine import Chip8Machine
from chix8.rendering import save_frame

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python examples/example.py <rom.ch8> [preset]")
        sys.exit(1)

    rom_path = sys.argv[1]
    preset = sys.argv[2] if len(sys.argv) > 2 else "cowgod"

    logger = TraceLogger()
    machine = Chip8Machine(rom_path=rom_path, config=make_config(preset), render_mode="ascii", logger=logger)
    logger.log_run_start(machine.describe())

    state = machine.reset()

    # Two seconds of emulated time
    start_exec = time.time()
    state = machine.run(state, frames=120, progress=True)
    end_exec = time.time()

    print("Execution time (s):", end_exec - start_exec)
    print("Instructions:", machine.instruction_count)

    print(machine.render(state))
    save_frame(state.display, "frame.png", scale=8, color_scheme="classic")
