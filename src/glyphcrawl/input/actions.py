from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class InputAction(Enum):
    """Logical commands understood by the game loop.

    Physical keys are translated to these by ``InputMapper`` so the turn
    engine never sees backend key codes.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    QUIT = auto()
    OTHER = auto()  # any other key: the player waits a turn

    @property
    def is_move(self) -> bool:
        return self in (InputAction.MOVE_UP, InputAction.MOVE_DOWN, InputAction.MOVE_LEFT, InputAction.MOVE_RIGHT)


@dataclass(frozen=True)
class InputEvent:
    """A press or release of a logical input action.

    Attributes:
        action: The logical action triggered.
        pressed: True for key down; releases are ignored by the game loop.
        source: Optional string describing the source device (e.g. "keyboard", "script").
    """

    action: InputAction
    pressed: bool = True
    source: Optional[str] = None


__all__ = ["InputAction", "InputEvent"]
