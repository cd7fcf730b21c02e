"""Command line entry point: ``python -m chix8 rom=game.ch8 delay_ms=2``."""

import sys

import hydra
import jax
from omegaconf import DictConfig, OmegaConf

from chix8.driver import CycleDriver
from chix8.emulator import load_rom
from chix8.errors import MachineFault, RomError
from chix8.logging import MachineLogger, TraceLogger, get_logger
from chix8.state import create_state


def run_interpreter(cfg: DictConfig) -> int:
    """Load the ROM, open the window and run until quit. Returns an exit status."""
    logger = MachineLogger(log_level=cfg.log_level)
    logger.log_session_start(OmegaConf.to_container(cfg, resolve=True))

    if OmegaConf.is_missing(cfg, "rom"):
        logger.error("No ROM given, run with rom=path/to/program.ch8")
        return 2
    if cfg.delay_ms < 0:
        logger.error(f"delay_ms must be non-negative, got {cfg.delay_ms}")
        return 2

    state = create_state(jax.random.PRNGKey(cfg.seed))
    try:
        state = load_rom(state, cfg.rom)
    except RomError as e:
        logger.critical(str(e))
        return 1

    # Imported late so a bad ROM is reported without opening a window
    from chix8.frontend import PygameKeypad, PygameScreen

    screen = PygameScreen(scale=cfg.scale, color_scheme=cfg.color_scheme)
    trace_hook = TraceLogger(get_logger("trace", log_level="DEBUG")) if cfg.trace else None
    driver = CycleDriver(
        state,
        keypad=PygameKeypad(),
        screen=screen,
        delay=cfg.delay_ms / 1000.0,
        trace_hook=trace_hook,
        logger=logger,
    )

    try:
        driver.run()
    except MachineFault as fault:
        logger.critical(f"Machine halted: {fault}")
        return 1
    finally:
        screen.close()
        logger.log_session_end(driver.cycles, int(driver.state.pc))
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    status = run_interpreter(cfg)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
