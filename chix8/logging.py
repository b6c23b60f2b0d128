"""Console logging utilities for Chix8 emulation runs.

This module provides a small console logger with level filtering and colours,
a specialised logger for tracing emulation runs, and a tqdm progress bar for
long headless runs.
"""

import time
import sys
from typing import Any, Dict, Optional

from tqdm import tqdm

from chix8.decode import DecodedInstruction, disassemble
from chix8.stack import depth
from chix8.state import EmulatorState


class ConsoleLogger:
    """Flexible console logger with level filtering and colours."""

    def __init__(
        self,
        name: str = "Chix8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)

    @property
    def debug_enabled(self) -> bool:
        return self._should_log("DEBUG")


def format_registers(state: EmulatorState) -> str:
    """One-line dump of the CPU registers."""
    registers = " ".join(f"V{i:X}={int(state.V[i]):02X}" for i in range(16))
    return (
        f"PC={int(state.pc):03X} I={int(state.I):03X} SP={depth(state.stack)} "
        f"DT={int(state.delay_timer)} ST={int(state.sound_timer)} | {registers}"
    )


class TraceLogger(ConsoleLogger):
    """Specialized logger for emulation runs with instruction tracing."""

    def __init__(self, name: str = "Chix8", **kwargs):
        super().__init__(name, **kwargs)
        self.instruction_count = 0

    def log_run_start(self, config: Dict[str, Any]):
        """Log machine configuration and start message."""
        self.info("=" * 60)
        self.info("Starting emulation with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_instruction(self, pc: int, instruction: DecodedInstruction, jump_quirk: bool = False):
        self.instruction_count += 1
        self.debug(f"{pc:03X}: {instruction.raw:04X}  {disassemble(instruction, jump_quirk)}")

    def log_fault(self, error: Exception, state: EmulatorState):
        """Log an execution fault with the register dump of the last good state."""
        self.error(f"{type(error).__name__}: {error}")
        self.error(format_registers(state))

    def log_run_end(self, frames: int, instructions: int):
        elapsed = time.time() - self.start_time
        rate = instructions / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Ran {frames} frames ({instructions} instructions) in {elapsed:.1f}s "
            f"({rate:.0f} instructions/s)"
        )


def frame_progress(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Build a tqdm progress bar counting emulated frames."""
    if desc is None:
        desc = f"Emulating ({n:,} frames)"
    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)
    return tqdm(total=n, desc=desc, unit="frame", **kwargs)
