"""Command line entry point.

Examples::

    chix8 rom=roms/IBM_Logo.ch8
    chix8 rom=roms/IBM_Logo.ch8 mode=headless frames=60 screenshot=ibm.png
    chix8 rom=game.ch8 machine.preset=cosmac machine.instruction_frequency=500
"""

import sys

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from chix8.config import make_config
from chix8.errors import Chip8Error
from chix8.logging import TraceLogger
from chix8.machine import Chip8Machine
from chix8.rendering import save_frame

MODES = ("window", "headless")


def build_machine(cfg: DictConfig, logger: TraceLogger) -> Chip8Machine:
    machine_cfg = OmegaConf.to_container(cfg.machine)
    preset = machine_cfg.pop("preset")
    fps = machine_cfg.pop("fps")
    config = make_config(preset, **machine_cfg)
    return Chip8Machine(
        rom_path=to_absolute_path(cfg.rom),
        config=config,
        fps=fps,
        seed=cfg.seed,
        render_mode="ascii" if cfg.mode == "headless" else "rgb_array",
        render_scale=cfg.scale,
        color_scheme=cfg.color_scheme,
        trace=cfg.trace,
        logger=logger,
    )


def run_headless(machine: Chip8Machine, cfg: DictConfig) -> int:
    state = machine.reset()
    try:
        state = machine.run(state, cfg.frames, progress=cfg.progress)
    except Chip8Error:
        return 1
    finally:
        machine.logger.log_run_end(cfg.frames, machine.instruction_count)

    print(machine.render(state))
    if cfg.screenshot:
        save_frame(state.display, to_absolute_path(cfg.screenshot), cfg.scale, cfg.color_scheme)
        machine.logger.info(f"Screenshot saved: {cfg.screenshot}")
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    if cfg.mode not in MODES:
        raise ValueError(f"Unknown mode '{cfg.mode}'. Available: {list(MODES)}")

    logger = TraceLogger(log_level="DEBUG" if cfg.trace else cfg.log_level)
    machine = build_machine(cfg, logger)
    logger.log_run_start(machine.describe())

    if cfg.mode == "headless":
        sys.exit(run_headless(machine, cfg))

    from chix8.frontend import run_window
    run_window(machine, scale=cfg.scale, show_debug=cfg.show_debug)


if __name__ == "__main__":
    main()
