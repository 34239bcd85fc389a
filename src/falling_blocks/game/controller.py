from __future__ import annotations

import logging
import random
import threading
from typing import Optional, Protocol

from .core import Command, GameConfig, GameState, handle_input, handle_tick, new_game

logger = logging.getLogger(__name__)


class TickTimer(Protocol):
    """Periodic tick source owned by the presentation layer."""

    def arm(self, interval_ms: int) -> None:
        ...

    def cancel(self) -> None:
        ...


class GameController:
    """Owns the live GameState and the tick timer of one session.

    Commands and ticks go through a single locked transition handler, so a
    timer firing on another thread never interleaves with input. The timer
    is armed by `start()` and cancelled by `_teardown()`, which runs on game
    over, on `shutdown()` and on context-manager exit.
    """

    def __init__(self, config: Optional[GameConfig] = None, timer: Optional[TickTimer] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.timer = timer
        self.rng = rng or random.Random(self.config.random_seed)
        self._lock = threading.RLock()
        self._state: Optional[GameState] = None
        self._timer_armed = False

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("controller has not been started")
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is not None and not self._state.is_over

    def start(self) -> GameState:
        with self._lock:
            self._teardown()
            self._state = new_game(self.config, self.rng)
            if self.timer is not None:
                self.timer.arm(self.config.tick_interval_ms)
                self._timer_armed = True
                logger.debug("Tick timer armed at %d ms", self.config.tick_interval_ms)
            logger.info("Game started (%dx%d)", self.config.width, self.config.height)
            return self._state

    def dispatch(self, command: Command) -> GameState:
        return self._transition(lambda state: handle_input(state, command))

    def tick(self) -> GameState:
        return self._transition(handle_tick)

    def _transition(self, step) -> GameState:
        with self._lock:
            state = self.state
            if state.is_over:
                return state
            self._state = step(state)
            if self._state.is_over:
                self._teardown()
            return self._state

    def _teardown(self) -> None:
        if self._timer_armed and self.timer is not None:
            self.timer.cancel()
            logger.debug("Tick timer cancelled")
        self._timer_armed = False

    def shutdown(self) -> None:
        with self._lock:
            self._teardown()
            logger.info("Controller shut down")

    def __enter__(self) -> "GameController":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
