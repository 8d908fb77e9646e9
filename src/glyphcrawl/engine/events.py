from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by TurnEngine to notify UI or systems."""

    PLAYER_MOVED = auto()
    MAP_CHANGED = auto()
    PLAYER_HIT = auto()
    PLAYER_DIED = auto()
    KEY_PICKED_UP = auto()
    DOOR_LOCKED = auto()
    ESCAPED = auto()
