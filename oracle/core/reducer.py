"""
Reducer: dispatch actions to handlers by kind.

A handler applies one action to both sides of a TextPair and raises
DivergenceError if they disagree. Every ActionKind must have a handler;
ensure_exhaustive() turns a forgotten kind into an immediate error instead
of a silent no-op.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict

from smartstr import RefString, SmartString

from .actions import Action, ActionKind
from .errors import InvalidActionError


@dataclass
class TextPair:
    """The live (reference, subject) pair of one case."""
    reference: RefString
    subject: SmartString


# Handler signature: (pair, action) -> None
Handler = Callable[[TextPair, Any], None]


class ActionReducer:
    """
    Registry of action handlers.

    Usage:
        reducer = ActionReducer()
        reducer.register(ActionKind.PUSH, on_push)
        reducer.apply(pair, Push("a"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[ActionKind, Handler] = {}

    def register(self, kind: ActionKind, handler: Handler) -> None:
        self._handlers[kind] = handler

    def ensure_exhaustive(self) -> None:
        """
        Raises:
            InvalidActionError: If any ActionKind has no handler
        """
        missing = [kind.value for kind in ActionKind if kind not in self._handlers]
        if missing:
            raise InvalidActionError(f"No handler for action kinds: {', '.join(missing)}")

    def apply(self, pair: TextPair, action: Action) -> None:
        """
        Apply action to both sides of pair.

        Raises:
            InvalidActionError: If no handler registered for the action kind
            DivergenceError: If reference and subject disagree
        """
        handler = self._handlers.get(getattr(action, "kind", None))
        if handler is None:
            raise InvalidActionError(f"No handler for action: {action!r}")
        handler(pair, action)


def default_reducer() -> ActionReducer:
    """Reducer with every built-in handler registered, checked for exhaustiveness."""
    from .handlers import register_handlers

    reducer = ActionReducer()
    register_handlers(reducer)
    reducer.ensure_exhaustive()
    return reducer
