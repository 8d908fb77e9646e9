"""
Input abstraction layer.

Exposes:
- InputAction: logical commands (moves, quit, other).
- InputEvent: a press/release event for a logical action.
- InputMapper: rebindable mapping from physical keys to actions.
"""
from .actions import InputAction, InputEvent
from .mapping import InputMapper

__all__ = [
    "InputAction",
    "InputEvent",
    "InputMapper",
]
