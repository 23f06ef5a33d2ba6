"""Connection lifecycle signals.

The engine client emits :class:`~django_hashstore.types.Signal` values as its
connection comes and goes; the store subscribes to them once and re-emits
them to its own listeners unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django_hashstore.types import Signal

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class SignalEmitter:
    """Minimal observer interface keyed by :class:`Signal`.

    Listeners are called synchronously in registration order. ``ERROR``
    listeners receive the exception as their only argument; the other signals
    carry no arguments.
    """

    def __init__(self) -> None:
        self._listeners: dict[Signal, list[Callable[..., Any]]] = {signal: [] for signal in Signal}

    def on(self, signal: Signal | str, listener: Callable[..., Any]) -> SignalEmitter:
        """Register ``listener`` for ``signal``."""
        if not callable(listener):
            msg = "the registered listener must be callable"
            raise TypeError(msg)
        self._listeners[Signal(signal)].append(listener)
        return self

    def off(self, signal: Signal | str, listener: Callable[..., Any]) -> SignalEmitter:
        """Unregister ``listener``; unknown listeners are ignored."""
        listeners = self._listeners[Signal(signal)]
        if listener in listeners:
            listeners.remove(listener)
        return self

    def listeners(self, signal: Signal | str) -> list[Callable[..., Any]]:
        return list(self._listeners[Signal(signal)])

    def emit(self, signal: Signal | str, *args: Any) -> bool:
        """Call every listener of ``signal``; return whether there were any."""
        listeners = self.listeners(signal)
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener for %r signal failed", str(signal))
        return bool(listeners)


def forward_signals(source: SignalEmitter, target: SignalEmitter) -> None:
    """Re-emit every lifecycle signal of ``source`` on ``target``."""
    for signal in Signal:
        source.on(signal, _forwarder(target, signal))


def _forwarder(target: SignalEmitter, signal: Signal) -> Callable[..., Any]:
    def forward(*args: Any) -> None:
        target.emit(signal, *args)

    return forward
