from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional

from .actions import InputAction, InputEvent

logger = logging.getLogger(__name__)


class InputMapper:
    """Rebindable mapping from physical keys to logical actions.

    Keys are strings normalized to upper case; integer key codes from a
    backend (e.g. ``arcade.key.UP``) are registered as aliases of a canonical
    name with ``set_alias``.

    Example usage:
        mapper = InputMapper.default()
        action = mapper.translate_key("w")   # -> InputAction.MOVE_UP
        evt = mapper.on_key_event("ESCAPE", pressed=True)
    """

    def __init__(self, bindings: Optional[Dict[str, InputAction]] = None) -> None:
        self._bindings: Dict[str, InputAction] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)
        self._aliases: Dict[str, str] = {}

    @staticmethod
    def _normalize(key: str | int) -> Optional[str]:
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    def bind(self, key: str | int, action: InputAction) -> None:
        """Bind a single key to an action."""
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: InputAction) -> None:
        for k in keys:
            self.bind(k, action)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Register a backend-specific key as another name, e.g. set_alias(65362, "UP")."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def translate_key(self, key: str | int) -> Optional[InputAction]:
        """Translate a physical key into a bound action, or None if unbound."""
        nk = self._normalize(key)
        if nk is None:
            return None
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get(canonical)

    def translate_command(self, key: str | int) -> InputAction:
        """Like ``translate_key`` but unbound keys become ``OTHER`` (wait a turn)."""
        action = self.translate_key(key)
        return action if action is not None else InputAction.OTHER

    def on_key_event(self, key: str | int, pressed: bool, source: str = "keyboard") -> InputEvent:
        return InputEvent(action=self.translate_command(key), pressed=pressed, source=source)

    def script(self, keys: Iterable[str], source: str = "script") -> Iterator[InputEvent]:
        """Pressed events for a sequence of key names, e.g. from the command line."""
        for key in keys:
            yield self.on_key_event(key, pressed=True, source=source)

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and WASD move; Escape and Q quit."""
        mapper = cls()
        mapper.bind_many(["UP", "W"], InputAction.MOVE_UP)
        mapper.bind_many(["DOWN", "S"], InputAction.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A"], InputAction.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D"], InputAction.MOVE_RIGHT)
        mapper.bind_many(["ESCAPE", "ESC", "Q"], InputAction.QUIT)
        return mapper


__all__ = ["InputMapper"]
