"""
Turn simulation: the per-command engine, its events, and the host loop.
"""
from .events import GameEvent
from .loop import GameLoop
from .turn import DELTAS, Phase, PlayerState, StatusMessage, TurnEngine, TurnResult

__all__ = [
    "DELTAS",
    "GameEvent",
    "GameLoop",
    "Phase",
    "PlayerState",
    "StatusMessage",
    "TurnEngine",
    "TurnResult",
]
