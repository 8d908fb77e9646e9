from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..input.actions import InputAction, InputEvent
from ..render.frame import Frame
from .turn import TurnEngine

logger = logging.getLogger(__name__)


class GameLoop:
    """Host loop feeding input events to a TurnEngine one at a time.

    The loop ends only on QUIT. Reaching game over freezes the simulation but
    the loop keeps accepting events so the final frame stays up until the
    player quits. Frontends either call ``run`` with a finite or infinite
    event iterable (headless) or ``handle`` per key callback (Arcade).
    """

    def __init__(self, engine: TurnEngine, on_frame: Optional[Callable[[Frame], None]] = None) -> None:
        self.engine = engine
        self.on_frame = on_frame
        self._running: bool = False
        self._turns: int = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def turns(self) -> int:
        return self._turns

    def start(self) -> None:
        """Start the loop and publish the initial frame.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameLoop.start() called while already running")
            return
        self._running = True
        self._turns = 0
        logger.info("GameLoop started on map %d", self.engine.world.current_map)
        self._publish()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("GameLoop stopped after %d turns", self._turns)

    def _publish(self) -> None:
        if self.on_frame is not None:
            self.on_frame(self.engine.snapshot())

    def handle(self, event: InputEvent) -> bool:
        """Process one event. Returns False once the loop has stopped."""
        if not self._running:
            logger.debug("handle() called while not running; ignored")
            return False
        if not event.pressed:
            return True
        if event.action is InputAction.QUIT:
            self.stop()
            return False
        if self.engine.game_over:
            return True
        self.engine.step(event.action)
        self._turns += 1
        self._publish()
        return True

    def run(self, events: Iterable[InputEvent]) -> int:
        """Consume ``events`` until QUIT or exhaustion; returns turns played."""
        self.start()
        for event in events:
            if not self.handle(event):
                break
        self.stop()
        return self._turns


__all__ = ["GameLoop"]
