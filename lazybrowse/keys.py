"""Key token to action bindings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .navigation import Action


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    action: Action


DEFAULT_KEY_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("UP",), Action.MOVE_UP),
    KeyBinding(("DOWN",), Action.MOVE_DOWN),
    KeyBinding(("k",), Action.LINE_UP),
    KeyBinding(("j",), Action.LINE_DOWN),
    KeyBinding(("ENTER_CR", "ENTER_LF", "l", "RIGHT"), Action.ACTIVATE),
    KeyBinding(("h", "LEFT"), Action.PARENT),
    KeyBinding(("H",), Action.TOGGLE_HIDDEN),
    KeyBinding(("ESC",), Action.CANCEL),
    KeyBinding(("q", "CTRL_C"), Action.QUIT),
)


class KeyMap:
    """Exact-match key table; later bindings override earlier ones."""

    def __init__(self, bindings: Iterable[KeyBinding] = DEFAULT_KEY_BINDINGS) -> None:
        self._actions: dict[str, Action] = {}
        for binding in bindings:
            self.register(binding)

    def register(self, binding: KeyBinding) -> KeyMap:
        for combo in binding.combos:
            self._actions[combo] = binding.action
        return self

    def action_for(self, key: str) -> Action | None:
        """Return the action bound to ``key``, or ``None`` when unbound."""
        return self._actions.get(key)


__all__ = [
    "KeyBinding",
    "DEFAULT_KEY_BINDINGS",
    "KeyMap",
]
