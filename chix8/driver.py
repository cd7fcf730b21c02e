"""CHIP-8 cycle driver.

Sequences input polling, fetch/decode/execute and the 60 Hz timers. The
driver is the only writer of the emulator state; collaborators are plain
objects:

* ``keypad`` has ``poll() -> KeypadSnapshot``
* ``screen`` has ``render(display)`` and is called once per executed
  instruction with the (64, 32) boolean framebuffer
"""

import enum
import time
from typing import Callable, Optional

import jax.numpy as jnp
from flax.struct import dataclass

from chix8.constants import NUM_KEYS, TIMER_FREQUENCY
from chix8.emulator import execute, fetch, tick_timers
from chix8.errors import DecodeError, MachineFault
from chix8.instructions.misc import resolve_key_wait
from chix8.logging import ConsoleLogger, get_logger
from chix8.state import EmulatorState


class MachineStatus(enum.Enum):
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"
    HALTED = "halted"


@dataclass(frozen=True)
class KeypadSnapshot:
    """One poll of the input device: 16 key-down flags and the quit signal."""
    pressed: tuple = (False,) * NUM_KEYS
    quit: bool = False

    def __post_init__(self):
        if len(self.pressed) != NUM_KEYS:
            raise ValueError(f"Expected {NUM_KEYS} key flags, got {len(self.pressed)}")

    def first_pressed(self) -> Optional[int]:
        for key, down in enumerate(self.pressed):
            if down:
                return key
        return None


@dataclass(frozen=True)
class TraceEvent:
    """Emitted after every executed instruction."""
    pc: int
    instruction: int
    next_pc: int


class CycleDriver:
    """Run a loaded emulator state until the keypad reports quit.

    Args:
        state: Emulator state with a program loaded
        keypad: Input collaborator
        screen: Presentation collaborator, or None to run headless
        delay: Minimum seconds between two fetch-execute steps
        trace_hook: Optional callable receiving a TraceEvent per instruction
        logger: Console logger for recoverable decode errors
        clock: Monotonic time source in seconds
        sleep: Called with a duration while waiting for the next step or a key
        poll_interval: Upper bound of a single sleep
        timer_frequency: Delay/sound timer rate in Hz
    """

    def __init__(
        self,
        state: EmulatorState,
        keypad,
        screen=None,
        delay: float = 0.003,
        trace_hook: Optional[Callable[[TraceEvent], None]] = None,
        logger: Optional[ConsoleLogger] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = 0.001,
        timer_frequency: int = TIMER_FREQUENCY,
    ):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.state = state
        self.keypad = keypad
        self.screen = screen
        self.delay = delay
        self.trace_hook = trace_hook
        self.logger = logger or get_logger()
        self.clock = clock
        self.sleep = sleep
        self.poll_interval = poll_interval
        self.timer_period = 1.0 / timer_frequency

        self.cycles = 0
        self.status = (
            MachineStatus.AWAITING_KEY
            if state.key_wait_register is not None
            else MachineStatus.RUNNING
        )
        self._last_step = None
        self._last_timer_tick = None

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is non-zero."""
        return int(self.state.sound_timer) > 0

    def halt(self):
        self.status = MachineStatus.HALTED

    def step(self) -> EmulatorState:
        """Fetch, decode and execute one instruction."""
        pc = int(self.state.pc)
        instruction = fetch(self.state)
        try:
            state = execute(self.state, instruction)
        except DecodeError as error:
            self.logger.warning(f"{error}, skipping")
            state = error.state

        self.state = state
        self.cycles += 1
        if state.key_wait_register is not None:
            self.status = MachineStatus.AWAITING_KEY

        if self.trace_hook is not None:
            self.trace_hook(TraceEvent(pc=pc, instruction=instruction, next_pc=int(state.pc)))
        return state

    def run(self, max_cycles: Optional[int] = None) -> EmulatorState:
        """Loop until quit (or ``max_cycles`` instructions) and return the final state.

        Raises:
            MachineFault: Stack overflow/underflow or out-of-bounds access. The
                driver is halted before the fault propagates.
        """
        now = self.clock()
        self._last_step = now - self.delay
        self._last_timer_tick = now

        try:
            while self.status is not MachineStatus.HALTED:
                snapshot = self.keypad.poll()
                if snapshot.quit:
                    self.halt()
                    break

                now = self.clock()
                self._update_timers(now)

                if self.status is MachineStatus.AWAITING_KEY:
                    self._resolve_key_wait(snapshot)
                    continue

                if max_cycles is not None and self.cycles >= max_cycles:
                    self.halt()
                    break

                remaining = self.delay - (now - self._last_step)
                if remaining > 0:
                    self.sleep(min(remaining, self.poll_interval))
                    continue

                self._last_step = now
                self.state = self.state.replace(keypad=jnp.array(snapshot.pressed, dtype=jnp.bool_))
                self.step()
                if self.screen is not None:
                    self.screen.render(self.state.display)
        except MachineFault:
            self.halt()
            raise

        return self.state

    def _resolve_key_wait(self, snapshot: KeypadSnapshot):
        key = snapshot.first_pressed()
        if key is None:
            self.sleep(self.poll_interval)
            return
        self.state = resolve_key_wait(self.state, key)
        self.status = MachineStatus.RUNNING

    def _update_timers(self, now: float):
        """Decrement timers once per elapsed 1/60 s, also while waiting for a key."""
        ticks = int((now - self._last_timer_tick) / self.timer_period)
        if ticks <= 0:
            return
        self.state = tick_timers(self.state, ticks)
        self._last_timer_tick += ticks * self.timer_period
