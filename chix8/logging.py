"""Console logging utilities for chix8.

This module provides a small console logger with level filtering and
colored output, plus callbacks that plug into the cycle driver's trace hook
for visibility into executed instructions.
"""

import time
import sys
from collections import Counter
from typing import Any, Dict, Optional

from chix8.decode import decode


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ANSI_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
ANSI_RESET = "\033[0m"


class ConsoleLogger:
    """Prints ``[elapsed][LEVEL][name] message`` lines to stdout.

    Colors are only used when stdout is a terminal.
    """

    def __init__(
        self,
        name: str = "chix8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = use_colors and getattr(sys.stdout, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        self.log_level = log_level.upper()

    def is_enabled_for(self, level: str) -> bool:
        """Unknown level names rank as INFO."""
        return self._rank(level) >= self._rank(self.log_level)

    @staticmethod
    def _rank(level: str) -> int:
        level = level.upper()
        return LEVELS.index(level) if level in LEVELS else 1

    def _format_message(self, level: str, message: str) -> str:
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{ANSI_COLORS.get(level, '')}{tag}{ANSI_RESET}"
        return f"{prefix}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format_message(level, message), flush=True)

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


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chix8", log_level: Optional[str] = None) -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    logger = _loggers.get(name)
    if logger is None:
        logger = ConsoleLogger(name, log_level=log_level or "INFO")
        _loggers[name] = logger
    elif log_level is not None:
        logger.set_level(log_level)
    return logger


class MachineLogger(ConsoleLogger):
    """Logger for interpreter sessions: configuration banner and run summary."""

    def __init__(self, name: str = "chix8", **kwargs):
        super().__init__(name, **kwargs)

    def log_session_start(self, config: Dict[str, Any]):
        """Log session configuration."""
        self.info("=" * 60)
        self.info("Starting CHIP-8 interpreter with configuration:")
        for key, value in config.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.4f}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_session_end(self, cycles: int, pc: int):
        """Log run summary once the driver halts."""
        elapsed = time.time() - self.start_time
        rate = cycles / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Halted after {cycles} instructions in {elapsed:.1f}s "
            f"({rate:.0f} Hz), PC=0x{pc:03X}"
        )


class TraceCallback:
    """Base class for trace hook callbacks.

    Instances are passed to the cycle driver as ``trace_hook`` and receive one
    :class:`chix8.driver.TraceEvent` per executed instruction.
    """

    def __call__(self, event: Any):
        self.on_instruction(event)

    def on_instruction(self, event: Any):
        """Called after each executed instruction."""
        pass


class TraceLogger(TraceCallback):
    """Print every executed instruction at DEBUG level."""

    def __init__(self, logger: Optional[ConsoleLogger] = None):
        self.logger = logger or get_logger("trace", log_level="DEBUG")

    def on_instruction(self, event: Any):
        if not self.logger.is_enabled_for("DEBUG"):
            return
        decoded = decode(event.instruction)
        self.logger.debug(
            f"PC=0x{event.pc:03X} OP={decoded} "
            f"X={decoded.x:X} Y={decoded.y:X} N={decoded.n:X} KK=0x{decoded.kk:02X} NNN=0x{decoded.nnn:03X} "
            f"-> PC=0x{event.next_pc:03X}"
        )


class OpcodeStatistics(TraceCallback):
    """Count executed instructions per opcode family (first nibble)."""

    def __init__(self):
        self.counts = Counter()
        self.total = 0

    def on_instruction(self, event: Any):
        self.counts[event.instruction >> 12] += 1
        self.total += 1

    def get_statistics(self) -> Dict[str, float]:
        """Share of executed instructions per family, keyed like ``"8xxx"``."""
        if not self.total:
            return {}
        return {
            f"{family:X}xxx": count / self.total
            for family, count in sorted(self.counts.items())
        }
